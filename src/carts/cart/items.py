"""Cart item commands and their handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from carts.cart.cart import Cart
from carts.domain import carts


def load_or_create_cart(user_id):
    repo = current_domain.repository_for(Cart)
    try:
        return repo.get(user_id)
    except ObjectNotFoundError:
        return Cart.create(user_id)


@carts.command(part_of="Cart")
class AddCartItem:
    user_id = Identifier(required=True)
    product_id = Integer(required=True)
    quantity = Integer(required=True, min_value=1)


@carts.command(part_of="Cart")
class SetCartItemQuantity:
    user_id = Identifier(required=True)
    product_id = Integer(required=True)
    quantity = Integer(required=True, min_value=1)
    expected_quantity = Integer()  # Optional: makes the write conditional


@carts.command(part_of="Cart")
class RemoveCartItem:
    user_id = Identifier(required=True)
    product_id = Integer(required=True)
    expected_quantity = Integer()


@carts.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddCartItem)
    def add_cart_item(self, command):
        cart = load_or_create_cart(command.user_id)
        cart.add_item(product_id=command.product_id, quantity=command.quantity)
        current_domain.repository_for(Cart).add(cart)
        return cart.lines()

    @handle(SetCartItemQuantity)
    def set_cart_item_quantity(self, command):
        cart = load_or_create_cart(command.user_id)
        cart.set_item_quantity(
            product_id=command.product_id,
            new_quantity=command.quantity,
            expected_quantity=command.expected_quantity,
        )
        current_domain.repository_for(Cart).add(cart)
        return cart.lines()

    @handle(RemoveCartItem)
    def remove_cart_item(self, command):
        cart = load_or_create_cart(command.user_id)
        cart.remove_item(product_id=command.product_id, expected_quantity=command.expected_quantity)
        current_domain.repository_for(Cart).add(cart)
        return cart.lines()
