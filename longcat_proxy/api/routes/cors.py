"""CORS preflight and fallback routes."""

from fastapi import Response
from fastapi.responses import PlainTextResponse

from ...core.responses import CORS_HEADERS, PREFLIGHT_HEADERS


async def preflight(path: str = "") -> Response:
    """OPTIONS on any path answers with permissive CORS headers."""
    return Response(status_code=200, headers=PREFLIGHT_HEADERS)


async def not_found(path: str = "") -> Response:
    return PlainTextResponse("Not Found", status_code=404, headers=CORS_HEADERS)
