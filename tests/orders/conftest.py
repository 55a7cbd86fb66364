import pytest


@pytest.fixture(autouse=True)
def _ctx(catalog_bed, carts_bed, orders_bed):
    with catalog_bed.domain_context():
        with carts_bed.domain_context():
            with orders_bed.domain_context():
                yield


@pytest.fixture()
def customer():
    return {"name": "Ada Lovelace", "email": "ada@example.com", "address": "12 Analytical St, London"}
