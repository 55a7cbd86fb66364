"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared across users.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks what a simulated shopper has put in the cart and ordered."""

    cart: dict[int, int] = field(default_factory=dict)
    order_ids: list[str] = field(default_factory=list)

    def add(self, product_id: int, quantity: int) -> None:
        self.cart[product_id] = self.cart.get(product_id, 0) + quantity

    def clear(self) -> None:
        self.cart.clear()
