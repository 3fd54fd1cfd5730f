"""Marketplace domain API package."""

from marketplace.api.errors import register_marketplace_exception_handlers
from marketplace.api.routes import admin_router, marketplace_router

__all__ = ["marketplace_router", "admin_router", "register_marketplace_exception_handlers"]
