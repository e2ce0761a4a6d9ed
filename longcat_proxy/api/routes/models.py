"""Models listing endpoint - OpenAI compatible."""

import logging

from fastapi.responses import JSONResponse

from ...core.responses import CORS_HEADERS
from ...types.chat import ModelCard

logger = logging.getLogger("longcat-proxy")

MODEL_CREATED = 1700000000

AVAILABLE_MODELS: list[ModelCard] = [
    {"id": model_id, "object": "model", "created": MODEL_CREATED, "owned_by": "longcat"}
    for model_id in ("longcat-flash", "longcat-thinking", "longcat-search")
]


async def list_models() -> JSONResponse:
    """List available models in OpenAI API format.

    GET /v1/models
    """
    logger.info("Received models list request")
    return JSONResponse({"object": "list", "data": AVAILABLE_MODELS}, headers=CORS_HEADERS)
