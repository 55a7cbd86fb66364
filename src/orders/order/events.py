"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer

from orders.domain import orders


@orders.event(part_of="Order")
class OrderPlaced:
    """A cart was converted into a confirmed order at current catalog prices."""

    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    placed_at = DateTime(required=True)


@orders.event(part_of="Order")
class OrderCartCleared:
    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
