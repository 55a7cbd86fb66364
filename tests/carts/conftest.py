import pytest


@pytest.fixture(autouse=True)
def _ctx(catalog_bed, carts_bed):
    # Cart flows read and write catalog stock; both stores reset per test.
    with catalog_bed.domain_context():
        with carts_bed.domain_context():
            yield
