"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from carts.domain import carts


@carts.event(part_of="Cart")
class CartItemAdded:
    """Units of a product were added to the cart (merged into an existing line if present)."""

    __version__ = 1

    user_id = Identifier(required=True)
    product_id = Integer(required=True)
    quantity = Integer(required=True)
    line_quantity = Integer(required=True)


@carts.event(part_of="Cart")
class CartItemQuantityChanged:
    __version__ = 1

    user_id = Identifier(required=True)
    product_id = Integer(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@carts.event(part_of="Cart")
class CartItemRemoved:
    __version__ = 1

    user_id = Identifier(required=True)
    product_id = Integer(required=True)
    quantity = Integer(required=True)


@carts.event(part_of="Cart")
class CartReplaced:
    """The whole item list was overwritten by the caller."""

    __version__ = 1

    user_id = Identifier(required=True)
    line_count = Integer(required=True)


@carts.event(part_of="Cart")
class CartCleared:
    __version__ = 1

    user_id = Identifier(required=True)
