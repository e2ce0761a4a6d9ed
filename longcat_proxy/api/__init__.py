"""API module for the gateway."""

from .routes import AVAILABLE_MODELS, chat_completions, list_models, not_found, preflight

__all__ = [
    "AVAILABLE_MODELS",
    "chat_completions",
    "list_models",
    "not_found",
    "preflight",
]
