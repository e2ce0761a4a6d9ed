"""Per-host HTTPX transport overrides, used to point the gateway at in-process fakes."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlparse

import httpx

logger = logging.getLogger("longcat-proxy")

_TRANSPORTS: dict[str, httpx.AsyncBaseTransport] = {}


def _host_of(url: str) -> str:
    return urlparse(url).netloc.strip().lower()


def register_upstream_transport(url: str, transport: httpx.AsyncBaseTransport) -> None:
    """Route every upstream call whose URL has the same netloc through ``transport``."""
    host = _host_of(url)
    if not host:
        raise ValueError(f"Cannot register a transport for URL without host: {url!r}")
    _TRANSPORTS[host] = transport
    logger.debug("Registered upstream transport for host '%s'", host)


def unregister_upstream_transport(url: str) -> None:
    _TRANSPORTS.pop(_host_of(url), None)


def clear_upstream_transports() -> None:
    """Clear all registered transports (useful for tests)."""
    _TRANSPORTS.clear()


def get_upstream_transport(url: str) -> Optional[httpx.AsyncBaseTransport]:
    if not url:
        return None
    return _TRANSPORTS.get(_host_of(url))
