"""OpenAI-compatible chat completions endpoint."""

import json
import logging
from typing import Any, Mapping

from fastapi import Request, Response

from ...auth import AppKeyValidator
from ...core.exceptions import (
    AuthenticationError,
    InvalidRequestError,
    UpstreamRejectedError,
)
from ...core.responses import error_response

logger = logging.getLogger("longcat-proxy")


def parse_chat_payload(body: bytes) -> Mapping[str, Any]:
    """Decode and minimally validate a chat completions request body."""
    try:
        payload = json.loads(body or b"{}")
    except json.JSONDecodeError as exc:
        raise InvalidRequestError("Invalid JSON payload", code="invalid_json") from exc

    if not isinstance(payload, Mapping):
        raise InvalidRequestError(
            "Request body must be a JSON object", code="invalid_json_shape"
        )

    if not isinstance(payload.get("messages"), list):
        raise InvalidRequestError(
            "You must provide a messages array", code="missing_parameter"
        )
    return payload


async def chat_completions(request: Request) -> Response:
    """Chat completions endpoint - OpenAI compatible.

    POST /v1/chat/completions

    Errors raised before streaming starts become JSON error bodies; once the
    stream is running, failures only show up as an early end of the stream.
    """
    logger.info("Received chat completions request")
    gateway = request.app.state.gateway
    try:
        auth = AppKeyValidator(gateway.settings.api_key).validate(request.headers)
        if auth.authenticated:
            logger.debug("Request authenticated with API key")
        payload = parse_chat_payload(await request.body())
        return await gateway.forward_chat(
            payload,
            is_stream=payload.get("stream") is True,
            disconnect_checker=request.is_disconnected,
        )
    except AuthenticationError as exc:
        return error_response(401, exc.message, "authentication_error", "invalid_api_key")
    except InvalidRequestError as exc:
        logger.error(f"Invalid request: {exc.message}")
        return error_response(400, exc.message, "invalid_request_error", exc.code)
    except UpstreamRejectedError as exc:
        logger.error(f"Status: {exc.status_code} | Msg: {exc.message}")
        return error_response(exc.status_code, exc.message)
    except Exception as exc:
        logger.exception(f"Error processing chat request: {exc}")
        return error_response(500, "Internal Server Error")
