"""Read access to stored orders."""

from datetime import datetime, timedelta

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from orders.order.order import Order
from shared.config import get_settings
from shared.errors import NotFound


def get_order(order_id: str) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFound("Order not found") from None


def orders_for_user(user_id: str) -> list[Order]:
    """All of a user's orders, newest first."""
    found = current_domain.repository_for(Order)._dao.query.filter(user_id=user_id).all().items
    return sorted(found, key=lambda order: order.date, reverse=True)


def pending_order_for_cart(
    user_id: str, cart_lines: list[dict], customer: dict, now: datetime | None = None
) -> Order | None:
    """The newest recent order placed from ``cart_lines`` for ``customer`` whose cart was never emptied."""
    window = timedelta(minutes=get_settings().checkout_retry_minutes)
    for order in orders_for_user(user_id):
        if order.is_retry_of(cart_lines, customer, window, now=now):
            return order
    return None
