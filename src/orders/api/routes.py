"""FastAPI routes for the Order service."""

from fastapi import APIRouter, Depends

from orders.api.schemas import CreateOrderRequest, OrderResponse
from orders.order.checkout import place_order
from orders.order.queries import get_order, orders_for_user
from shared.clients import CartClient, CatalogClient, get_cart_client, get_catalog_client
from shared.metrics import ServiceMetrics, get_metrics

order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse, response_model_by_alias=True)
async def create_order(
    body: CreateOrderRequest,
    cart: CartClient = Depends(get_cart_client),
    catalog: CatalogClient = Depends(get_catalog_client),
    metrics: ServiceMetrics = Depends(get_metrics),
) -> dict:
    result = await place_order(cart, catalog, body.user_id, body.customer.model_dump())
    if result.created:
        metrics.increment("orders_created")
        metrics.increment("order_value", result.order["total"])
    return result.order


@order_router.get("/user/{user_id}", response_model=list[OrderResponse], response_model_by_alias=True)
async def list_user_orders(user_id: str) -> list[dict]:
    return [order.to_wire() for order in orders_for_user(user_id)]


@order_router.get("/{order_id}", response_model=OrderResponse, response_model_by_alias=True)
async def get_order_by_id(order_id: str) -> dict:
    return get_order(order_id).to_wire()
