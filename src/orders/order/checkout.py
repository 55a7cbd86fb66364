"""Checkout — turns a user's cart into a confirmed order.

The order is stored with ``cart_cleared=False`` before the cart service is
asked to empty the cart, and marked cleared afterwards. If the cart call
fails, a later checkout of the same cart by the same customer, within
CHECKOUT_RETRY_MINUTES, finds the pending order and finishes it instead of
placing a second one.
"""

import json
from dataclasses import dataclass

from protean.utils.globals import current_domain

from orders.domain import logger
from orders.order.placement import MarkCartCleared, PlaceOrder
from orders.order.queries import get_order, pending_order_for_cart
from shared.clients import CartClient, CatalogClient
from shared.errors import EmptyCart


@dataclass
class CheckoutResult:
    order: dict
    created: bool


async def place_order(cart: CartClient, catalog: CatalogClient, user_id: str, customer: dict) -> CheckoutResult:
    cart_lines = await cart.get_cart(user_id)
    if not cart_lines:
        raise EmptyCart()

    pending = pending_order_for_cart(user_id, cart_lines, customer)
    if pending is not None:
        logger.warning("checkout.resumed", user_id=user_id, order_id=str(pending.id))
        await _empty_cart(cart, user_id, str(pending.id))
        return CheckoutResult(order=get_order(str(pending.id)).to_wire(), created=False)

    lines = []
    for line in cart_lines:
        product = await catalog.get_product(line["productId"])
        lines.append(
            {
                "product": {"id": product["id"], "name": product["name"], "price": product["price"]},
                "quantity": line["quantity"],
            }
        )

    order_id = current_domain.process(
        PlaceOrder(user_id=user_id, customer=json.dumps(customer), lines=json.dumps(lines)),
        asynchronous=False,
    )
    logger.info("checkout.order_placed", user_id=user_id, order_id=order_id)

    await _empty_cart(cart, user_id, order_id)
    return CheckoutResult(order=get_order(order_id).to_wire(), created=True)


async def _empty_cart(cart: CartClient, user_id: str, order_id: str) -> None:
    await cart.clear_cart(user_id)
    current_domain.process(MarkCartCleared(order_id=order_id), asynchronous=False)
