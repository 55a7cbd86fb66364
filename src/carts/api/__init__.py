"""Cart service API package."""

from carts.api.routes import cart_router

__all__ = ["cart_router"]
