"""Prometheus metrics sink for a ShopMate service.

Each app owns one ``ServiceMetrics`` instance, created once when the app is
built and reachable from handlers through ``request.app.state.metrics``.
Counters live in a per-app ``CollectorRegistry`` so that several services can
be assembled in one process (tests, local runs) without name clashes.
"""

from fastapi import Request
from fastapi.responses import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    GCCollector,
    Histogram,
    PlatformCollector,
    ProcessCollector,
    generate_latest,
)

# Business counters per service: metric suffix -> help text
_SERVICE_COUNTERS = {
    "product_service": {
        "views": "Total product views",
    },
    "cart_service": {
        "items_added": "Total items added to cart",
    },
    "order_service": {
        "orders_created": "Total orders created",
        "order_value": "Total value of orders created",
    },
    "frontend_service": {},
}


class ServiceMetrics:
    def __init__(self, service: str, registry: CollectorRegistry | None = None):
        self.service = service
        self.prefix = service.replace("-", "_")
        self.registry = registry or CollectorRegistry()

        ProcessCollector(namespace=self.prefix, registry=self.registry)
        PlatformCollector(registry=self.registry)
        GCCollector(registry=self.registry)

        self.http_requests = Counter(
            f"{self.prefix}_http_requests",
            "Total HTTP requests",
            ["method", "route", "status_code"],
            registry=self.registry,
        )
        self.http_duration = Histogram(
            f"{self.prefix}_http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "route"],
            registry=self.registry,
        )
        self._counters = {
            name: Counter(f"{self.prefix}_{name}", help_text, registry=self.registry)
            for name, help_text in _SERVICE_COUNTERS.get(self.prefix, {}).items()
        }

    def observe_request(self, method: str, route: str, status_code: int, duration: float) -> None:
        self.http_requests.labels(method=method, route=route, status_code=str(status_code)).inc()
        self.http_duration.labels(method=method, route=route).observe(duration)

    def increment(self, name: str, amount: float = 1) -> None:
        """Increment one of the service's business counters."""
        self._counters[name].inc(amount)

    def value(self, name: str) -> float:
        """Current value of a business counter, as exported."""
        return self.registry.get_sample_value(f"{self.prefix}_{name}_total") or 0.0

    def render(self) -> Response:
        return Response(content=generate_latest(self.registry), media_type=CONTENT_TYPE_LATEST)


def route_template(request: Request) -> str:
    """Matched route path (``/api/products/{product_id}``) to keep label cardinality bounded."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def get_metrics(request: Request) -> ServiceMetrics:
    """FastAPI dependency returning the app's metrics sink."""
    return request.app.state.metrics

