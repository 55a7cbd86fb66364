"""Storefront web package."""

from storefront.web.routes import web_router
from storefront.web.sessions import session_middleware

__all__ = ["session_middleware", "web_router"]
