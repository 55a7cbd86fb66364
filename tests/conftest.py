"""Shared fixtures: one Protean test bed per service domain, and the four
FastAPI apps wired to each other in-process through ``httpx.ASGITransport``.
"""

import os
from pathlib import Path

import httpx
import pytest
from protean.integrations.pytest import DomainFixture

from shared.clients import (
    CartClient,
    CatalogClient,
    OrderClient,
    get_cart_client,
    get_catalog_client,
    get_order_client,
)


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


# ---------------------------------------------------------------------------
# Domain test beds
# ---------------------------------------------------------------------------
def _bed(domain):
    bed = DomainFixture(domain)
    bed.setup()
    return bed


@pytest.fixture(scope="session")
def catalog_bed():
    from catalog.domain import catalog

    bed = _bed(catalog)
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def carts_bed():
    from carts.domain import carts

    bed = _bed(carts)
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def orders_bed():
    from orders.domain import orders

    bed = _bed(orders)
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = _bed(storefront)
    yield bed
    bed.teardown()


# ---------------------------------------------------------------------------
# Catalog data
# ---------------------------------------------------------------------------
@pytest.fixture()
def seeded_catalog(catalog_bed):
    """Write the five sample products into the catalog store."""
    from catalog.domain import catalog
    from catalog.product.seeding import SAMPLE_PRODUCTS, seed_catalog

    with catalog.domain_context():
        seed_catalog()
    return SAMPLE_PRODUCTS


# ---------------------------------------------------------------------------
# In-process service wiring
# ---------------------------------------------------------------------------
def asgi_client(client_cls, app, base_url):
    """Dependency override returning a client that talks to ``app`` in-process."""
    return lambda: client_cls(base_url, transport=httpx.ASGITransport(app=app))


@pytest.fixture()
def catalog_app(catalog_bed):
    from catalog.app import build_app

    return build_app()


@pytest.fixture()
def cart_app(carts_bed, catalog_app):
    from carts.app import build_app

    app = build_app()
    app.dependency_overrides[get_catalog_client] = asgi_client(CatalogClient, catalog_app, "http://product-service")
    return app


@pytest.fixture()
def order_app(orders_bed, catalog_app, cart_app):
    from orders.app import build_app

    app = build_app()
    app.dependency_overrides[get_catalog_client] = asgi_client(CatalogClient, catalog_app, "http://product-service")
    app.dependency_overrides[get_cart_client] = asgi_client(CartClient, cart_app, "http://cart-service")
    return app


@pytest.fixture()
def storefront_app(storefront_bed, catalog_app, cart_app, order_app):
    from storefront.app import build_app

    app = build_app()
    app.dependency_overrides[get_catalog_client] = asgi_client(CatalogClient, catalog_app, "http://product-service")
    app.dependency_overrides[get_cart_client] = asgi_client(CartClient, cart_app, "http://cart-service")
    app.dependency_overrides[get_order_client] = asgi_client(OrderClient, order_app, "http://order-service")
    return app
