"""Browser-facing pages and form actions.

Pages fan out to the product, cart and order services. A failing downstream
call never surfaces as a 500 here: pages render empty, and form actions
redirect back to where the shopper came from.
"""

from pathlib import Path
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from shared.clients import (
    CartClient,
    CatalogClient,
    OrderClient,
    get_cart_client,
    get_catalog_client,
    get_order_client,
)
from shared.errors import ServiceError
from storefront.domain import logger
from storefront.web.sessions import current_session

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

web_router = APIRouter(tags=["storefront"])


def _user_id(request: Request) -> str:
    return current_session(request).user_id


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


def _render(request: Request, name: str, status_code: int = 200, **context):
    return templates.TemplateResponse(request, name, context, status_code=status_code)


async def _cart_count(cart: CartClient, user_id: str) -> int:
    try:
        return len(await cart.get_cart(user_id))
    except ServiceError:
        return 0


# ---------------------------------------------------------------------------
# Catalog pages
# ---------------------------------------------------------------------------
@web_router.get("/")
async def home(request: Request, cart: CartClient = Depends(get_cart_client)):
    return _render(request, "home.html", cart_count=await _cart_count(cart, _user_id(request)))


@web_router.get("/products")
async def products_page(
    request: Request,
    error: str | None = None,
    catalog: CatalogClient = Depends(get_catalog_client),
    cart: CartClient = Depends(get_cart_client),
):
    try:
        products = await catalog.list_products()
    except ServiceError as exc:
        logger.error("storefront.products.failed", error=exc.message)
        products = []

    return _render(
        request,
        "products.html",
        products=products,
        error=error,
        cart_count=await _cart_count(cart, _user_id(request)),
    )


@web_router.get("/products/{product_id}")
async def product_page(
    request: Request,
    product_id: int,
    catalog: CatalogClient = Depends(get_catalog_client),
    cart: CartClient = Depends(get_cart_client),
):
    cart_count = await _cart_count(cart, _user_id(request))
    try:
        product = await catalog.get_product(product_id)
    except ServiceError as exc:
        logger.error("storefront.product.failed", product_id=product_id, error=exc.message)
        return _render(request, "error.html", status_code=404, message="Product not found", cart_count=cart_count)

    return _render(request, "product.html", product=product, cart_count=cart_count)


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@web_router.get("/cart")
async def cart_page(
    request: Request,
    catalog: CatalogClient = Depends(get_catalog_client),
    cart: CartClient = Depends(get_cart_client),
):
    try:
        lines = await cart.get_cart(_user_id(request))
        rows = []
        for line in lines:
            product = await catalog.get_product(line["productId"])
            rows.append(
                {
                    **product,
                    "quantity": line["quantity"],
                    "item_total": round(product["price"] * line["quantity"], 2),
                }
            )
    except ServiceError as exc:
        logger.error("storefront.cart.failed", error=exc.message)
        return _render(request, "cart.html", rows=[], total=0, cart_count=0)

    total = round(sum(row["item_total"] for row in rows), 2)
    return _render(request, "cart.html", rows=rows, total=total, cart_count=len(lines))


@web_router.post("/cart/add")
async def add_to_cart(
    request: Request,
    product_id: int = Form(..., alias="productId"),
    quantity: int = Form(1),
    cart: CartClient = Depends(get_cart_client),
):
    try:
        await cart.add_item(_user_id(request), product_id, quantity)
    except ServiceError as exc:
        logger.error("storefront.cart.add_failed", product_id=product_id, error=exc.message)
        return _redirect("/products?error=" + quote("Failed to add item to cart"))
    return _redirect("/cart")


@web_router.post("/cart/update/{product_id}")
async def update_cart_item(
    request: Request,
    product_id: int,
    quantity: int = Form(...),
    cart: CartClient = Depends(get_cart_client),
):
    try:
        await cart.update_item_quantity(_user_id(request), product_id, quantity)
    except ServiceError as exc:
        logger.error("storefront.cart.update_failed", product_id=product_id, error=exc.message)
    return _redirect("/cart")


@web_router.get("/cart/remove/{product_id}")
async def remove_cart_item(request: Request, product_id: int, cart: CartClient = Depends(get_cart_client)):
    try:
        await cart.remove_item(_user_id(request), product_id)
    except ServiceError as exc:
        logger.error("storefront.cart.remove_failed", product_id=product_id, error=exc.message)
    return _redirect("/cart")


@web_router.get("/cart/clear")
async def clear_cart(request: Request, cart: CartClient = Depends(get_cart_client)):
    try:
        await cart.clear_cart(_user_id(request), restock=True)
    except ServiceError as exc:
        logger.error("storefront.cart.clear_failed", error=exc.message)
    return _redirect("/cart")


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@web_router.get("/orders/checkout")
async def checkout_page(request: Request, cart: CartClient = Depends(get_cart_client)):
    return _render(request, "checkout.html", cart_count=await _cart_count(cart, _user_id(request)))


@web_router.post("/orders/place")
async def place_order(
    request: Request,
    name: str = Form(...),
    email: str = Form(...),
    address: str = Form(...),
    orders: OrderClient = Depends(get_order_client),
    cart: CartClient = Depends(get_cart_client),
):
    user_id = _user_id(request)
    try:
        order = await orders.create_order(user_id, {"name": name, "email": email, "address": address})
    except ServiceError as exc:
        logger.error("storefront.order.place_failed", error=exc.message)
        return _render(
            request,
            "error.html",
            status_code=500,
            message="Failed to place order",
            cart_count=await _cart_count(cart, user_id),
        )
    return _redirect(f"/orders/confirmation/{order['id']}")


@web_router.get("/orders/confirmation/{order_id}")
async def confirmation_page(
    request: Request,
    order_id: str,
    orders: OrderClient = Depends(get_order_client),
    cart: CartClient = Depends(get_cart_client),
):
    cart_count = await _cart_count(cart, _user_id(request))
    try:
        order = await orders.get_order(order_id)
    except ServiceError as exc:
        logger.error("storefront.order.lookup_failed", order_id=order_id, error=exc.message)
        return _render(request, "error.html", status_code=404, message="Order not found", cart_count=cart_count)

    return _render(request, "confirmation.html", order=order, cart_count=cart_count)


@web_router.get("/orders")
async def orders_page(
    request: Request,
    orders: OrderClient = Depends(get_order_client),
    cart: CartClient = Depends(get_cart_client),
):
    try:
        user_orders = await orders.list_orders_for_user(_user_id(request))
    except ServiceError as exc:
        logger.error("storefront.orders.failed", error=exc.message)
        user_orders = []

    return _render(
        request,
        "orders.html",
        orders=user_orders,
        cart_count=await _cart_count(cart, _user_id(request)),
    )
