"""Static API key check for the gateway."""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from ..core.exceptions import AuthenticationError

logger = logging.getLogger("longcat-proxy")

DEFAULT_HEADER_NAME = "x-api-key"


@dataclass
class AppKeyContext:
    """Outcome of validating a request against the configured key."""

    authenticated: bool


def extract_provided_key(headers: Mapping[str, str]) -> Optional[str]:
    """Read the key from ``x-api-key`` or an ``Authorization: Bearer`` header."""
    provided_key = headers.get(DEFAULT_HEADER_NAME)
    if not provided_key:
        auth_header = headers.get("authorization", "")
        if auth_header.lower().startswith("bearer "):
            provided_key = auth_header[7:].strip()
    return provided_key or None


class AppKeyValidator:
    """Validates requests against a single static key.

    With no key configured every request is let through unauthenticated.
    """

    def __init__(self, api_key: Optional[str]) -> None:
        self._api_key = api_key or None

    def is_enabled(self) -> bool:
        return self._api_key is not None

    def validate(self, headers: Mapping[str, str]) -> AppKeyContext:
        if self._api_key is None:
            return AppKeyContext(authenticated=False)

        provided_key = extract_provided_key(headers)
        if not provided_key:
            logger.warning("Request rejected: missing API key")
            raise AuthenticationError("API key required")

        # Use constant-time comparison to prevent timing attacks
        if not hmac.compare_digest(provided_key.encode(), self._api_key.encode()):
            logger.warning("Request rejected: invalid API key")
            raise AuthenticationError("Invalid API key")

        return AppKeyContext(authenticated=True)
