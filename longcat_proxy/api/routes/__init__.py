"""API routes for the gateway."""

from .chat import chat_completions, parse_chat_payload
from .cors import not_found, preflight
from .models import AVAILABLE_MODELS, list_models

__all__ = [
    "AVAILABLE_MODELS",
    "chat_completions",
    "list_models",
    "not_found",
    "parse_chat_payload",
    "preflight",
]
