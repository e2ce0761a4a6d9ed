"""Response helpers shared by the gateway and the API routes."""

from typing import Optional

from fastapi.responses import JSONResponse

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}

STREAM_HEADERS = {
    "Cache-Control": "no-cache",
    "Access-Control-Allow-Origin": "*",
}


def error_response(
    status_code: int,
    message: str,
    error_type: str = "server_error",
    code: Optional[str] = None,
) -> JSONResponse:
    """Build an OpenAI-style JSON error body with CORS headers."""
    error: dict[str, str] = {"message": message, "type": error_type}
    if code:
        error["code"] = code
    return JSONResponse({"error": error}, status_code=status_code, headers=CORS_HEADERS)
