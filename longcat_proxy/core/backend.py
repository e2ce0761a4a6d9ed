"""Upstream backend description and header utilities."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Optional

import httpx

if TYPE_CHECKING:
    from ..config_loader import GatewaySettings

logger = logging.getLogger("longcat-proxy")

UPSTREAM_ORIGIN = "https://longcat.chat"

# Fingerprint of the mobile browser client the upstream expects.
BROWSER_HEADERS = {
    "authority": "longcat.chat",
    "accept": "text/event-stream,application/json",
    "accept-language": "vi-VN,vi;q=0.9",
    "content-type": "application/json",
    "origin": UPSTREAM_ORIGIN,
    "referer": f"{UPSTREAM_ORIGIN}/t",
    "user-agent": (
        "Mozilla/5.0 (Linux; Android 10; K) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/137.0.0.0 Mobile Safari/537.36"
    ),
    "sec-fetch-dest": "empty",
    "sec-fetch-mode": "cors",
    "sec-fetch-site": "same-origin",
}

SENSITIVE_HEADERS = {"cookie", "m-appkey", "m-traceid", "authorization"}


def build_upstream_headers(settings: GatewaySettings) -> dict[str, str]:
    """Build the fixed header set sent with every upstream request."""
    headers = dict(BROWSER_HEADERS)
    headers["cookie"] = settings.cookie
    headers["m-appkey"] = settings.app_key
    headers["m-traceid"] = settings.trace_id
    return headers


def _mask(value: str) -> str:
    if len(value) > 8:
        return value[:4] + "****" + value[-4:]
    return "****" if value else ""


def safe_headers_for_log(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy of ``headers`` with credentials masked."""
    return {
        key: _mask(value) if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }


def build_timeout(settings: GatewaySettings) -> httpx.Timeout:
    """Connect/write/pool use ``timeout``; reads between chunks use ``read_timeout``."""
    return httpx.Timeout(
        connect=settings.timeout,
        read=settings.read_timeout,
        write=settings.timeout,
        pool=settings.timeout,
    )


def format_httpx_error(exc: Any, url: Optional[str] = None, timeout: Optional[float] = None) -> str:
    """Produce a detailed description of an httpx error for logs."""
    parts = [exc.__class__.__name__]
    message = str(exc).strip()
    if message:
        parts.append(message)

    request = getattr(exc, "_request", None)
    if request is not None:
        parts.append(f"request={request.method} {request.url}")
    elif url:
        parts.append(f"url={url}")

    if isinstance(exc, httpx.TimeoutException) and timeout:
        parts.append(f"timeout={timeout}s")

    return "; ".join(parts)
