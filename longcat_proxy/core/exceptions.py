"""Core exceptions for the gateway."""

from typing import Optional


class ProxyError(Exception):
    """Base exception for gateway errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UpstreamRejectedError(ProxyError):
    """Upstream answered with a non-2xx status before streaming began."""

    def __init__(
        self, status_code: int, message: str, body: Optional[bytes] = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class StreamReadError(ProxyError):
    """Reading the upstream event stream failed after it had started."""
    pass


class ConfigurationError(ProxyError):
    """Raised when there's an issue with the configuration."""
    pass


class InvalidRequestError(ProxyError):
    """Raised when an incoming request is invalid."""

    def __init__(self, message: str, code: str = "invalid_request") -> None:
        super().__init__(message)
        self.code = code


class AuthenticationError(ProxyError):
    """Raised when the static API key check fails."""
    pass
