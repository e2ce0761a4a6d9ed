"""Main FastAPI application for the LongCat gateway."""

import logging
import socket
from typing import Optional

from fastapi import FastAPI

from .api.routes import chat_completions, list_models, not_found, preflight
from .auth import AppKeyValidator
from .config_loader import GatewaySettings, load_settings
from .core import LongcatGateway
from .core.backend import safe_headers_for_log
from .logging import setup_logging

logger = logging.getLogger("longcat-proxy")


def create_app(settings: Optional[GatewaySettings] = None) -> FastAPI:
    """Factory function to create the FastAPI application.

    Args:
        settings: Resolved settings. Loaded from the config file and
            environment when omitted.

    Returns:
        The configured FastAPI application instance.
    """
    if settings is None:
        settings = load_settings()
    setup_logging(settings.log_level)

    gateway = LongcatGateway(settings)

    app = FastAPI(title="LongCat Gateway")
    app.state.gateway = gateway

    @app.on_event("startup")
    async def startup_event():
        """Handle application startup."""
        logger.info("LongCat gateway starting up...")
        logger.info("Configured bind address %s:%s", settings.host, settings.port)
        if settings.host == "0.0.0.0":
            hostname = socket.gethostname()
            logger.info("Reachable on local network at http://%s:%s", hostname, settings.port)
        logger.info("Upstream: %s", settings.upstream_url)
        logger.info(
            "Upstream credentials: %s",
            safe_headers_for_log(
                {
                    "cookie": settings.cookie,
                    "m-appkey": settings.app_key,
                    "m-traceid": settings.trace_id,
                }
            ),
        )
        logger.info("Read timeout: %s", settings.read_timeout or "disabled")
        logger.info("API key required: %s", AppKeyValidator(settings.api_key).is_enabled())

    # Register routes; the catch-all routes must come last.
    app.get("/v1/models")(list_models)
    app.post("/v1/chat/completions")(chat_completions)
    app.options("/{path:path}")(preflight)
    app.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])(not_found)
    logger.debug("FastAPI application created")
    return app


app = create_app()

__all__ = ["app", "create_app"]
