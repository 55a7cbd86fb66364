"""Cart aggregate — the ordered list of products a user has selected.

Lines are kept in insertion order. The store itself enforces no uniqueness;
``add_item`` merges quantities so that each product appears at most once.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Dict, Identifier, List

from carts.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemQuantityChanged,
    CartItemRemoved,
    CartReplaced,
)
from carts.domain import carts
from shared.config import get_settings
from shared.errors import CartConflict


@carts.aggregate(schema_name=get_settings().carts_table)
class Cart:
    user_id = Identifier(identifier=True, required=True)
    items = List(content_type=Dict, default=list)  # [{"product_id": int, "quantity": int}]
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        return cls(user_id=user_id, items=[], updated_at=datetime.now(UTC))

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def quantity_of(self, product_id):
        line = self._line(product_id)
        return line["quantity"] if line else 0

    def lines(self):
        """Cart lines in their wire shape: ``[{"productId": 1, "quantity": 2}]``."""
        return [{"productId": line["product_id"], "quantity": line["quantity"]} for line in self.items or []]

    def _line(self, product_id):
        return next((line for line in self.items or [] if line["product_id"] == product_id), None)

    def _check_expected(self, product_id, actual, expected):
        if expected is not None and expected != actual:
            raise CartConflict(f"Cart line for product {product_id} holds {actual}, expected {expected}")

    def _touch(self, items):
        # Reassign rather than mutate so the change is tracked on the aggregate
        self.items = items
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def add_item(self, product_id, quantity):
        """Add units of a product, merging into the existing line if there is one."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        items = [dict(line) for line in self.items or []]
        existing = next((line for line in items if line["product_id"] == product_id), None)
        if existing:
            existing["quantity"] += quantity
            line_quantity = existing["quantity"]
        else:
            items.append({"product_id": product_id, "quantity": quantity})
            line_quantity = quantity

        self._touch(items)
        self.raise_(
            CartItemAdded(
                user_id=self.user_id,
                product_id=product_id,
                quantity=quantity,
                line_quantity=line_quantity,
            )
        )

    def set_item_quantity(self, product_id, new_quantity, expected_quantity=None):
        """Overwrite a line's quantity.

        With ``expected_quantity`` the write only goes through if the line still
        holds that many units.
        """
        if new_quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        previous = self.quantity_of(product_id)
        if not previous:
            raise ValidationError({"product_id": ["Item not found in cart"]})
        self._check_expected(product_id, previous, expected_quantity)

        items = [
            {**line, "quantity": new_quantity} if line["product_id"] == product_id else dict(line)
            for line in self.items
        ]
        self._touch(items)
        self.raise_(
            CartItemQuantityChanged(
                user_id=self.user_id,
                product_id=product_id,
                previous_quantity=previous,
                new_quantity=new_quantity,
            )
        )

    def remove_item(self, product_id, expected_quantity=None):
        removed = self.quantity_of(product_id)
        if not removed:
            raise ValidationError({"product_id": ["Item not found in cart"]})
        self._check_expected(product_id, removed, expected_quantity)

        self._touch([dict(line) for line in self.items if line["product_id"] != product_id])
        self.raise_(CartItemRemoved(user_id=self.user_id, product_id=product_id, quantity=removed))

    def replace_items(self, items):
        """Overwrite the whole item list. ``items`` are ``{"product_id", "quantity"}`` dicts."""
        self._touch([{"product_id": item["product_id"], "quantity": item["quantity"]} for item in items])
        self.raise_(CartReplaced(user_id=self.user_id, line_count=len(items)))

    def clear(self):
        self._touch([])
        self.raise_(CartCleared(user_id=self.user_id))
