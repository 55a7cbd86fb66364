"""Order aggregate — a confirmed purchase with its priced line snapshot.

Line items are denormalised copies of the product (id, name, price) as it was
when the order was placed, so later catalog edits never change an order.
``cart_cleared`` records whether the cart that produced the order has been
emptied; an order left with ``cart_cleared=False`` marks a checkout that
stopped half way.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Dict, Float, Identifier, List, String, ValueObject

from orders.domain import orders
from orders.order.events import OrderCartCleared, OrderPlaced
from shared.config import get_settings


class OrderStatus(Enum):
    CONFIRMED = "Confirmed"


@orders.value_object(part_of="Order")
class Customer:
    """Contact and delivery details captured at checkout."""

    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    address = String(required=True, max_length=500)


@orders.aggregate(schema_name=get_settings().orders_table, limit=None)
class Order:
    user_id = Identifier(required=True)
    date = DateTime(required=True)
    customer = ValueObject(Customer)
    items = List(content_type=Dict, default=list)  # [{"product": {...}, "quantity": int, "item_total": float}]
    total = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.CONFIRMED.value)
    cart_cleared = Boolean(default=False)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id, customer, lines):
        """Price cart lines and build a confirmed order.

        Args:
            user_id: Owner of the cart being checked out.
            customer: Dict with name, email, address.
            lines: List of dicts with ``product`` (id, name, price) and
                ``quantity``. Prices are the catalog's current ones.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        items = [
            {
                "product": {
                    "id": line["product"]["id"],
                    "name": line["product"]["name"],
                    "price": line["product"]["price"],
                },
                "quantity": line["quantity"],
                "item_total": round(line["product"]["price"] * line["quantity"], 2),
            }
            for line in lines
        ]
        total = round(sum(item["item_total"] for item in items), 2)
        now = datetime.now(UTC)

        order = cls(
            user_id=user_id,
            date=now,
            customer=Customer(**customer),
            items=items,
            total=total,
            status=OrderStatus.CONFIRMED.value,
            cart_cleared=False,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=user_id,
                item_count=len(items),
                total=total,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Behaviour
    # -------------------------------------------------------------------
    def mark_cart_cleared(self):
        if self.cart_cleared:
            return

        self.cart_cleared = True
        self.raise_(OrderCartCleared(order_id=str(self.id), user_id=self.user_id))

    def matches_cart(self, cart_lines):
        """True if the order was placed from exactly these cart lines, in order."""
        ordered = [(item["product"]["id"], item["quantity"]) for item in self.items or []]
        return ordered == [(line["productId"], line["quantity"]) for line in cart_lines]

    def is_retry_of(self, cart_lines, customer, window, now=None):
        """True if a checkout of ``cart_lines`` for ``customer`` repeats this unfinished one.

        Only orders whose cart was never cleared, placed for the same customer
        details and no longer than ``window`` ago qualify.
        """
        if self.cart_cleared or not self.matches_cart(cart_lines):
            return False

        placed = self.customer
        if (placed.name, placed.email, placed.address) != (
            customer.get("name"),
            customer.get("email"),
            customer.get("address"),
        ):
            return False

        now = now or datetime.now(UTC)
        placed_at = self.date if self.date.tzinfo else self.date.replace(tzinfo=UTC)
        return now - placed_at <= window

    def to_wire(self):
        return {
            "id": str(self.id),
            "userId": self.user_id,
            "date": self.date.isoformat() if self.date else None,
            "customer": {
                "name": self.customer.name,
                "email": self.customer.email,
                "address": self.customer.address,
            }
            if self.customer
            else None,
            "items": [
                {
                    "product": dict(item["product"]),
                    "quantity": item["quantity"],
                    "itemTotal": item["item_total"],
                }
                for item in self.items or []
            ],
            "total": self.total,
            "status": self.status,
        }
