"""Tests for the shared FastAPI application shell."""

import pytest
from fastapi import APIRouter
from fastapi.testclient import TestClient
from protean.exceptions import ValidationError
from shared.errors import EmptyCart, NotFound, StockConflict, UpstreamUnavailable
from shared.service import create_app

sample_router = APIRouter(prefix="/sample")


@sample_router.get("/not-found")
async def not_found():
    raise NotFound("Thing not found")


@sample_router.get("/empty-cart")
async def empty_cart():
    raise EmptyCart()


@sample_router.get("/conflict")
async def conflict():
    raise StockConflict("stale")


@sample_router.get("/invalid")
async def invalid():
    raise ValidationError({"quantity": ["Quantity must be at least 1"]})


@sample_router.get("/upstream")
async def upstream():
    raise UpstreamUnavailable("cart-service unreachable")


@sample_router.get("/crash")
async def crash():
    raise RuntimeError("unexpected")


@pytest.fixture()
def client(catalog_bed):
    app = create_app(
        service="sample-service",
        domain=catalog_bed.domain,
        routers=[sample_router],
        metrics_name="sample_service",
        title="Sample",
        metrics_alias="/metrics/sample",
    )
    return TestClient(app, raise_server_exceptions=False)


class TestErrorResponses:
    def test_not_found(self, client):
        response = client.get("/sample/not-found")
        assert response.status_code == 404
        assert response.json() == {"error": "Thing not found"}

    def test_empty_cart(self, client):
        response = client.get("/sample/empty-cart")
        assert response.status_code == 400
        assert response.json() == {"error": "Cart is empty"}

    def test_conflict(self, client):
        assert client.get("/sample/conflict").status_code == 409

    def test_domain_validation_error(self, client):
        assert client.get("/sample/invalid").status_code == 400

    def test_upstream_failure_is_a_generic_500(self, client):
        response = client.get("/sample/upstream")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_unexpected_failure_is_a_generic_500(self, client):
        response = client.get("/sample/crash")
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestOperationalEndpoints:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok", "service": "sample-service"}

    def test_requests_are_counted_by_route(self, client):
        client.get("/sample/not-found")
        body = client.get("/metrics").text
        assert 'sample_service_http_requests_total{method="GET",route="/sample/not-found",status_code="404"} 1.0' in body

    def test_metrics_requests_are_not_counted(self, client):
        client.get("/metrics")
        body = client.get("/metrics/sample").text
        assert 'route="/metrics"' not in body

    def test_request_id_is_accepted(self, client):
        response = client.get("/health", headers={"x-request-id": "req-123"})
        assert response.status_code == 200
