"""Authentication module for the gateway."""

from .app_key import AppKeyContext, AppKeyValidator, extract_provided_key

__all__ = ["AppKeyContext", "AppKeyValidator", "extract_provided_key"]
