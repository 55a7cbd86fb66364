"""HTTP clients for service-to-service calls.

All calls are non-blocking (``httpx.AsyncClient``) and carry no timeout unless
DOWNSTREAM_TIMEOUT is configured. Responses are translated into the service
error taxonomy: 404 -> NotFound, 400 -> InvalidRequest, 409 -> StockConflict,
anything else that fails -> UpstreamUnavailable.
"""

from typing import Any

import httpx

from shared.config import get_settings
from shared.errors import InvalidRequest, NotFound, StockConflict, UpstreamUnavailable
from shared.logging import get_logger

logger = get_logger(__name__)


class ServiceClient:
    service_name = "service"

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                transport=self.transport,
                timeout=self.timeout,
            ) as client:
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error(
                "downstream.unreachable",
                service=self.service_name,
                method=method,
                path=path,
                error=str(exc),
            )
            raise UpstreamUnavailable(f"{self.service_name} unreachable: {exc}") from exc

        if response.is_success:
            return response.json()

        message = _error_message(response)
        if response.status_code == 404:
            raise NotFound(message)
        if response.status_code == 409:
            raise StockConflict(message)
        if response.status_code in (400, 422):
            raise InvalidRequest(message)

        logger.error(
            "downstream.failed",
            service=self.service_name,
            method=method,
            path=path,
            status_code=response.status_code,
        )
        raise UpstreamUnavailable(f"{self.service_name} answered {response.status_code}: {message}")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:300] or response.reason_phrase

    if isinstance(body, dict) and "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(f"{key}: {value}" for key, value in error.items())
        return str(error)
    return str(body)[:300]


class CatalogClient(ServiceClient):
    service_name = "product-service"

    async def list_products(self) -> list[dict]:
        return await self._request("GET", "/api/products")

    async def get_product(self, product_id: int) -> dict:
        return await self._request("GET", f"/api/products/{product_id}")

    async def set_stock(self, product_id: int, stock: int, expected_version: int | None = None) -> dict:
        payload: dict[str, Any] = {"stock": stock}
        if expected_version is not None:
            payload["expectedVersion"] = expected_version
        return await self._request("PUT", f"/api/products/{product_id}/stock", json=payload)


class CartClient(ServiceClient):
    service_name = "cart-service"

    async def get_cart(self, user_id: str) -> list[dict]:
        return await self._request("GET", f"/api/cart/{user_id}")

    async def add_item(self, user_id: str, product_id: int, quantity: int) -> dict:
        return await self._request(
            "POST",
            f"/api/cart/{user_id}/add",
            json={"productId": product_id, "quantity": quantity},
        )

    async def replace_cart(self, user_id: str, items: list[dict]) -> dict:
        return await self._request("PUT", f"/api/cart/{user_id}", json={"items": items})

    async def update_item_quantity(self, user_id: str, product_id: int, quantity: int) -> dict:
        return await self._request(
            "PUT",
            f"/api/cart/{user_id}/items/{product_id}",
            json={"quantity": quantity},
        )

    async def remove_item(self, user_id: str, product_id: int) -> dict:
        return await self._request("DELETE", f"/api/cart/{user_id}/items/{product_id}")

    async def clear_cart(self, user_id: str, restock: bool = False) -> dict:
        params = {"restock": "true"} if restock else None
        return await self._request("DELETE", f"/api/cart/{user_id}", params=params)


class OrderClient(ServiceClient):
    service_name = "order-service"

    async def create_order(self, user_id: str, customer: dict) -> dict:
        return await self._request("POST", "/api/orders", json={"userId": user_id, "customer": customer})

    async def get_order(self, order_id: str) -> dict:
        return await self._request("GET", f"/api/orders/{order_id}")

    async def list_orders_for_user(self, user_id: str) -> list[dict]:
        return await self._request("GET", f"/api/orders/user/{user_id}")


# ---------------------------------------------------------------------------
# FastAPI dependencies (overridden in tests to wire services in-process)
# ---------------------------------------------------------------------------
def get_catalog_client() -> CatalogClient:
    settings = get_settings()
    return CatalogClient(settings.product_service_url, timeout=settings.downstream_timeout)


def get_cart_client() -> CartClient:
    settings = get_settings()
    return CartClient(settings.cart_service_url, timeout=settings.downstream_timeout)


def get_order_client() -> OrderClient:
    settings = get_settings()
    return OrderClient(settings.order_service_url, timeout=settings.downstream_timeout)
