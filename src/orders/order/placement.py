"""Order placement — commands and handler."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from orders.domain import orders
from orders.order.order import Order
from shared.errors import NotFound


@orders.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    customer = Text(required=True)  # JSON: {name, email, address}
    lines = Text(required=True)  # JSON: list of {product: {id, name, price}, quantity}


@orders.command(part_of="Order")
class MarkCartCleared:
    order_id = Identifier(required=True)


@orders.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        customer = json.loads(command.customer) if isinstance(command.customer, str) else command.customer
        lines = json.loads(command.lines) if isinstance(command.lines, str) else command.lines

        order = Order.create(user_id=command.user_id, customer=customer, lines=lines)
        current_domain.repository_for(Order).add(order)
        return str(order.id)

    @handle(MarkCartCleared)
    def mark_cart_cleared(self, command):
        repo = current_domain.repository_for(Order)
        try:
            order = repo.get(command.order_id)
        except ObjectNotFoundError:
            raise NotFound("Order not found") from None

        order.mark_cart_cleared()
        repo.add(order)
