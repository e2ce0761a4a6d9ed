"""LongCat Gateway

An OpenAI-compatible HTTP gateway in front of the LongCat chat backend.

This package provides:
- Request translation from OpenAI chat requests to LongCat payloads
- A streaming translation engine turning LongCat's cumulative event stream
  into incremental ``chat.completion.chunk`` events
- OpenAI-compatible ``/v1/models`` and ``/v1/chat/completions`` endpoints

Example:
    >>> from longcat_proxy.main import create_app
    >>> import uvicorn
    >>> uvicorn.run(create_app(), host="0.0.0.0", port=3000)
"""

from .config_loader import GatewaySettings, load_config, load_settings
from .core import LongcatGateway
from .logging import logger, setup_logging

__all__ = [
    "GatewaySettings",
    "LongcatGateway",
    "load_config",
    "load_settings",
    "logger",
    "setup_logging",
]
