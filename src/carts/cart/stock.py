"""Stock coordination with the catalog service.

All stock mutations made on behalf of carts go through ``adjust_stock``: read
the product, compute the new level, and write it back conditionally on the
version that was read. A concurrent writer makes the write fail with
``StockConflict``; the read-compute-write is then retried a bounded number
of times.

The cart flows sequence two stores without a shared transaction. Stock is
reserved before units enter the cart and released before they leave it; when
the cart write fails, the stock move is undone. Cart writes that depend on a
quantity read earlier are conditional on it.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from carts.cart.cart import Cart
from carts.cart.items import AddCartItem, RemoveCartItem, SetCartItemQuantity
from carts.domain import logger
from shared.clients import CatalogClient
from shared.config import get_settings
from shared.errors import CartConflict, InsufficientStock, NotFound, StockConflict


async def adjust_stock(catalog: CatalogClient, product_id: int, delta: int, attempts: int | None = None) -> int:
    """Apply ``delta`` to a product's stock and return the new level.

    Raises InsufficientStock if the result would go below zero.
    """
    attempts = attempts or get_settings().stock_update_attempts

    for attempt in range(1, attempts + 1):
        product = await catalog.get_product(product_id)
        new_stock = product["stock"] + delta
        if new_stock < 0:
            raise InsufficientStock()

        try:
            await catalog.set_stock(product_id, new_stock, expected_version=product["version"])
            return new_stock
        except StockConflict:
            logger.warning("stock.conflict", product_id=product_id, attempt=attempt, delta=delta)

    raise StockConflict(f"Stock for product {product_id} kept changing; gave up after {attempts} attempts")


async def reserve_stock(catalog: CatalogClient, product_id: int, quantity: int) -> int:
    return await adjust_stock(catalog, product_id, -quantity)


async def release_stock(catalog: CatalogClient, product_id: int, quantity: int) -> int:
    return await adjust_stock(catalog, product_id, quantity)


def current_cart(user_id):
    try:
        return current_domain.repository_for(Cart).get(user_id)
    except ObjectNotFoundError:
        return None


async def add_item(catalog: CatalogClient, user_id: str, product_id: int, quantity: int) -> list[dict]:
    """Add units of a product to a cart, taking them out of stock."""
    await reserve_stock(catalog, product_id, quantity)

    try:
        lines = current_domain.process(
            AddCartItem(user_id=user_id, product_id=product_id, quantity=quantity), asynchronous=False
        )
    except Exception:
        logger.error("cart.add.compensating", user_id=user_id, product_id=product_id, quantity=quantity)
        await release_stock(catalog, product_id, quantity)
        raise

    logger.info("cart.item.added", user_id=user_id, product_id=product_id, quantity=quantity)
    return lines


async def update_item_quantity(
    catalog: CatalogClient, user_id: str, product_id: int, new_quantity: int, attempts: int | None = None
) -> list[dict]:
    """Set a line's quantity and move the difference in or out of stock.

    A quantity of zero or less removes the line and returns all of its units.
    The cart write is conditional on the quantity the delta was computed from;
    if the line changed in between, the reservation is released and the update
    starts over from the new quantity.
    """
    attempts = attempts or get_settings().stock_update_attempts

    for attempt in range(1, attempts + 1):
        cart = current_cart(user_id)
        current = cart.quantity_of(product_id) if cart else 0
        if not current:
            raise NotFound("Item not found in cart")

        if new_quantity <= 0:
            return await remove_item(catalog, user_id, product_id)

        delta = new_quantity - current
        if delta > 0:
            await reserve_stock(catalog, product_id, delta)

        try:
            lines = current_domain.process(
                SetCartItemQuantity(
                    user_id=user_id,
                    product_id=product_id,
                    quantity=new_quantity,
                    expected_quantity=current,
                ),
                asynchronous=False,
            )
        except CartConflict:
            logger.warning("cart.update.conflict", user_id=user_id, product_id=product_id, attempt=attempt)
            if delta > 0:
                await release_stock(catalog, product_id, delta)
            continue
        except Exception:
            if delta > 0:
                await release_stock(catalog, product_id, delta)
            raise

        if delta < 0:
            await release_stock(catalog, product_id, -delta)

        logger.info("cart.item.updated", user_id=user_id, product_id=product_id, quantity=new_quantity)
        return lines

    raise CartConflict(f"Cart line for product {product_id} kept changing; gave up after {attempts} attempts")


async def remove_item(catalog: CatalogClient, user_id: str, product_id: int) -> list[dict]:
    """Put a line's units back into stock, then remove the line from the cart.

    The removal is conditional on the quantity that was released. If it fails,
    the units are taken out of stock again.
    """
    cart = current_cart(user_id)
    quantity = cart.quantity_of(product_id) if cart else 0
    if not quantity:
        raise NotFound("Item not found in cart")

    await release_stock(catalog, product_id, quantity)

    try:
        lines = current_domain.process(
            RemoveCartItem(user_id=user_id, product_id=product_id, expected_quantity=quantity),
            asynchronous=False,
        )
    except Exception:
        logger.error("cart.remove.compensating", user_id=user_id, product_id=product_id, quantity=quantity)
        await reserve_stock(catalog, product_id, quantity)
        raise

    logger.info("cart.item.removed", user_id=user_id, product_id=product_id, quantity=quantity)
    return lines


async def clear_with_restock(catalog: CatalogClient, user_id: str) -> list[dict]:
    """Return every line's units to stock and empty the cart, line by line.

    A line leaves the cart only after its units are back in stock, so a failure
    part way through leaves the unreleased lines in the cart.
    """
    cart = current_cart(user_id)
    if cart is None:
        return []

    lines = cart.lines()
    for line in lines:
        await remove_item(catalog, user_id, line["productId"])

    logger.info("cart.cleared", user_id=user_id, restocked_lines=len(lines))
    return current_cart(user_id).lines()
