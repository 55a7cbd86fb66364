import pytest


@pytest.fixture(autouse=True)
def _ctx(catalog_bed, carts_bed, orders_bed, storefront_bed):
    with catalog_bed.domain_context():
        with carts_bed.domain_context():
            with orders_bed.domain_context():
                with storefront_bed.domain_context():
                    yield
