"""Service-level error taxonomy and its mapping onto HTTP responses.

Domain invariant violations raised inside aggregates stay Protean
``ValidationError``s and go through Protean's FastAPI handlers. The classes
below cover what happens at the service boundary: missing entities, rejected
requests, stale conditional writes and unreachable siblings.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from shared.logging import get_logger

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(ServiceError):
    status_code = 404


class InvalidRequest(ServiceError):
    status_code = 400


class InsufficientStock(InvalidRequest):
    def __init__(self, message: str = "Insufficient stock"):
        super().__init__(message)


class EmptyCart(InvalidRequest):
    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class StockConflict(ServiceError):
    """A conditional stock write saw a different version than it expected."""

    status_code = 409


class CartConflict(ServiceError):
    """A cart line changed between the read and a write that depended on it."""

    status_code = 409


class UpstreamUnavailable(ServiceError):
    """A sibling service could not be reached or answered with a server error."""

    status_code = 500


async def _service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def _upstream_error_handler(request: Request, exc: UpstreamUnavailable) -> JSONResponse:
    logger.error("upstream.unavailable", path=request.url.path, reason=exc.message)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.failed", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's domain error handlers plus the service error mapping."""
    register_exception_handlers(app)
    app.add_exception_handler(ServiceError, _service_error_handler)
    app.add_exception_handler(UpstreamUnavailable, _upstream_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)
