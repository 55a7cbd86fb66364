"""FastAPI routes for the Cart service."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from carts.api.schemas import AddItemRequest, CartResponse, ReplaceCartRequest, UpdateQuantityRequest
from carts.cart import stock
from carts.cart.management import ClearCart, ReplaceCart
from shared.clients import CatalogClient, get_catalog_client
from shared.metrics import ServiceMetrics, get_metrics

cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("/{user_id}")
async def get_cart(user_id: str) -> list[dict]:
    cart = stock.current_cart(user_id)
    return cart.lines() if cart else []


@cart_router.post("/{user_id}/add", response_model=CartResponse)
async def add_to_cart(
    user_id: str,
    body: AddItemRequest,
    catalog: CatalogClient = Depends(get_catalog_client),
    metrics: ServiceMetrics = Depends(get_metrics),
) -> CartResponse:
    lines = await stock.add_item(catalog, user_id, body.product_id, body.quantity)
    metrics.increment("items_added")
    return CartResponse(cart=lines)


@cart_router.put("/{user_id}", response_model=CartResponse)
async def replace_cart(user_id: str, body: ReplaceCartRequest) -> CartResponse:
    items = [{"product_id": line.product_id, "quantity": line.quantity} for line in body.items]
    lines = current_domain.process(ReplaceCart(user_id=user_id, items=json.dumps(items)), asynchronous=False)
    return CartResponse(cart=lines)


@cart_router.delete("/{user_id}", response_model=CartResponse)
async def clear_cart(
    user_id: str,
    restock: bool = False,
    catalog: CatalogClient = Depends(get_catalog_client),
) -> CartResponse:
    if restock:
        lines = await stock.clear_with_restock(catalog, user_id)
    else:
        lines = current_domain.process(ClearCart(user_id=user_id), asynchronous=False)
    return CartResponse(cart=lines)


@cart_router.put("/{user_id}/items/{product_id}", response_model=CartResponse)
async def update_item_quantity(
    user_id: str,
    product_id: int,
    body: UpdateQuantityRequest,
    catalog: CatalogClient = Depends(get_catalog_client),
) -> CartResponse:
    lines = await stock.update_item_quantity(catalog, user_id, product_id, body.quantity)
    return CartResponse(cart=lines)


@cart_router.delete("/{user_id}/items/{product_id}", response_model=CartResponse)
async def remove_item(
    user_id: str,
    product_id: int,
    catalog: CatalogClient = Depends(get_catalog_client),
) -> CartResponse:
    lines = await stock.remove_item(catalog, user_id, product_id)
    return CartResponse(cart=lines)
