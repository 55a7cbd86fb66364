"""Cart service application factory."""

from fastapi import FastAPI

from carts.api import cart_router
from carts.domain import carts
from shared.service import create_app


def build_app() -> FastAPI:
    return create_app(
        service="cart-service",
        domain=carts,
        routers=[cart_router],
        metrics_name="cart_service",
        title="ShopMate Cart Service",
        metrics_alias="/metrics/cart",
    )
