"""FastAPI application factory shared by the four ShopMate services.

Every service gets the same shell: Protean domain context per request,
request logging, Prometheus request metrics, ``/health``, ``/metrics`` and
the error mapping from ``shared.errors``.
"""

import time
from collections.abc import Callable, Iterable
from uuid import uuid4

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.domain import Domain

from shared.errors import register_error_handlers
from shared.logging import add_context, clear_context, get_logger
from shared.metrics import ServiceMetrics, route_template

logger = get_logger(__name__)


def create_app(
    service: str,
    domain: Domain,
    routers: Iterable[APIRouter],
    metrics_name: str,
    title: str,
    lifespan: Callable | None = None,
    middleware: Iterable[Callable] = (),
    metrics_alias: str | None = None,
) -> FastAPI:
    """Build a service app.

    Args:
        service: Name reported by ``/health`` (e.g. ``product-service``).
        domain: The Protean domain owning the service's store.
        routers: API routers to mount.
        metrics_name: Prefix for Prometheus metrics (e.g. ``product_service``).
        title: OpenAPI title.
        lifespan: Optional lifespan context manager (startup seeding, etc.).
        middleware: Extra ``http`` middleware functions; they run inside the
            domain context.
        metrics_alias: Optional extra path serving the same exposition
            (e.g. ``/metrics/product``).
    """
    app = FastAPI(title=title, lifespan=lifespan)
    app.state.service = service
    app.state.metrics = ServiceMetrics(metrics_name)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Middleware added later wraps the ones added before it.
    for func in middleware:
        app.middleware("http")(func)

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """Log and count every request."""
        clear_context()
        add_context(service=service, request_id=request.headers.get("x-request-id") or str(uuid4()))
        started = time.perf_counter()
        logger.debug("request.started", method=request.method, path=request.url.path)

        response = await call_next(request)

        duration = time.perf_counter() - started
        if not request.url.path.startswith("/metrics"):
            request.app.state.metrics.observe_request(
                request.method, route_template(request), response.status_code, duration
            )
        logger.info(
            "request.completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration * 1000, 2),
        )
        return response

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the service's Protean domain context for each request."""
        with domain.domain_context():
            response = await call_next(request)
        return response

    register_error_handlers(app)

    for router in routers:
        app.include_router(router)

    @app.get("/health", tags=["ops"])
    async def health():
        return JSONResponse(content={"status": "ok", "service": service})

    async def metrics(request: Request):
        return request.app.state.metrics.render()

    app.add_api_route("/metrics", metrics, methods=["GET"], tags=["ops"])
    if metrics_alias:
        app.add_api_route(metrics_alias, metrics, methods=["GET"], tags=["ops"], include_in_schema=False)

    return app
