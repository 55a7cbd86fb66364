"""Order service application factory."""

from fastapi import FastAPI

from orders.api import order_router
from orders.domain import orders
from shared.service import create_app


def build_app() -> FastAPI:
    return create_app(
        service="order-service",
        domain=orders,
        routers=[order_router],
        metrics_name="order_service",
        title="ShopMate Order Service",
        metrics_alias="/metrics/order",
    )
