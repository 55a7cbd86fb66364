"""Catalog service application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from catalog.api import product_router
from catalog.domain import catalog
from catalog.product.seeding import seed_catalog
from shared.service import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    with catalog.domain_context():
        seed_catalog()
    yield


def build_app() -> FastAPI:
    return create_app(
        service="product-service",
        domain=catalog,
        routers=[product_router],
        metrics_name="product_service",
        title="ShopMate Product Service",
        lifespan=lifespan,
        metrics_alias="/metrics/product",
    )
