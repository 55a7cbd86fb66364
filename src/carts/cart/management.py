"""Whole-cart operations: replace and clear."""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from carts.cart.cart import Cart
from carts.cart.items import load_or_create_cart
from carts.domain import carts


@carts.command(part_of="Cart")
class ReplaceCart:
    """Unconditionally overwrite the stored item list."""

    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of {product_id, quantity}


@carts.command(part_of="Cart")
class ClearCart:
    """Empty the cart. Stock is not touched; callers restore it beforehand."""

    user_id = Identifier(required=True)


@carts.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(ReplaceCart)
    def replace_cart(self, command):
        items = json.loads(command.items) if isinstance(command.items, str) else command.items
        cart = load_or_create_cart(command.user_id)
        cart.replace_items(items)
        current_domain.repository_for(Cart).add(cart)
        return cart.lines()

    @handle(ClearCart)
    def clear_cart(self, command):
        cart = load_or_create_cart(command.user_id)
        cart.clear()
        current_domain.repository_for(Cart).add(cart)
        return cart.lines()
