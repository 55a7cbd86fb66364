"""Storefront load test scenarios.

Shoppers drive the browser-facing pages, so one journey exercises all four
services. Locust's client keeps cookies, so each simulated user holds one
session for its lifetime.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import customer_data, product_id, quantity
from loadtests.helpers.state import ShopperState


class ShopperJourney(SequentialTaskSet):
    """Browse -> View Product -> Add to Cart (x2) -> Adjust -> Checkout -> Orders."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def home(self):
        self.client.get("/", name="GET /")

    @task
    def browse(self):
        self.client.get("/products", name="GET /products")

    @task
    def view_product(self):
        self.client.get(f"/products/{product_id()}", name="GET /products/{id}")

    @task
    def add_first_item(self):
        self._add_item()

    @task
    def add_second_item(self):
        self._add_item()

    @task
    def adjust_quantity(self):
        if not self.state.cart:
            return
        chosen = random.choice(list(self.state.cart))
        new_quantity = max(self.state.cart[chosen] - 1, 0)
        with self.client.post(
            f"/cart/update/{chosen}",
            data={"quantity": new_quantity},
            allow_redirects=False,
            catch_response=True,
            name="POST /cart/update/{id}",
        ) as resp:
            if resp.status_code != 303:
                resp.failure(f"Update cart failed: {resp.status_code}")
                return
            if new_quantity:
                self.state.cart[chosen] = new_quantity
            else:
                self.state.cart.pop(chosen)

    @task
    def view_cart(self):
        self.client.get("/cart", name="GET /cart")

    @task
    def checkout(self):
        if not self.state.cart:
            self.interrupt()
            return
        self.client.get("/orders/checkout", name="GET /orders/checkout")
        with self.client.post(
            "/orders/place",
            data=customer_data(),
            allow_redirects=False,
            catch_response=True,
            name="POST /orders/place",
        ) as resp:
            if resp.status_code == 303:
                self.state.order_ids.append(resp.headers["location"].rsplit("/", 1)[-1])
                self.state.clear()
            else:
                resp.failure(f"Place order failed: {resp.status_code}")
                self.interrupt()

    @task
    def view_confirmation(self):
        order_id = self.state.order_ids[-1]
        self.client.get(f"/orders/confirmation/{order_id}", name="GET /orders/confirmation/{id}")

    @task
    def order_history(self):
        self.client.get("/orders", name="GET /orders")
        self.interrupt()

    def _add_item(self):
        chosen, units = product_id(), quantity()
        with self.client.post(
            "/cart/add",
            data={"productId": chosen, "quantity": units},
            allow_redirects=False,
            catch_response=True,
            name="POST /cart/add",
        ) as resp:
            if resp.status_code == 303 and resp.headers.get("location") == "/cart":
                self.state.add(chosen, units)
            else:
                resp.failure("Add to cart redirected back to products (out of stock?)")


class AbandonedCartJourney(SequentialTaskSet):
    """Add to Cart -> View Cart -> Clear Cart (stock goes back to the catalog)."""

    @task
    def add_item(self):
        self.client.post(
            "/cart/add",
            data={"productId": product_id(), "quantity": quantity()},
            name="POST /cart/add",
        )

    @task
    def view_cart(self):
        self.client.get("/cart", name="GET /cart")

    @task
    def clear_cart(self):
        self.client.get("/cart/clear", name="GET /cart/clear")
        self.interrupt()


class ShopperUser(HttpUser):
    tasks = {ShopperJourney: 3, AbandonedCartJourney: 1}
    wait_time = between(1, 3)


class BrowsingUser(HttpUser):
    """Window shopper: reads pages, never touches the cart."""

    wait_time = between(0.5, 2)

    @task(3)
    def browse(self):
        self.client.get("/products", name="GET /products")

    @task(5)
    def view_product(self):
        self.client.get(f"/products/{product_id()}", name="GET /products/{id}")

    @task(1)
    def home(self):
        self.client.get("/", name="GET /")
