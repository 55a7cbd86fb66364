import pytest


@pytest.fixture(autouse=True)
def _ctx(catalog_bed):
    with catalog_bed.domain_context():
        yield
