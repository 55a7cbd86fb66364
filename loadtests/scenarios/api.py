"""Service API load test scenarios.

Talks to the cart and order services directly, bypassing the storefront.
Service URLs default to the local ports and can be overridden per run with
environment variables.
"""

import os

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import customer_data, product_id, quantity, user_id
from loadtests.helpers.response import extract_error_detail


class CheckoutApiJourney(SequentialTaskSet):
    """Add Items -> Read Cart -> Create Order -> Read Order -> List Orders."""

    def on_start(self):
        self.user_id = user_id()
        self.order_id = None

    @task
    def add_items(self):
        for _ in range(2):
            with self.client.post(
                f"{self.user.cart_service_url}/api/cart/{self.user_id}/add",
                json={"productId": product_id(), "quantity": quantity()},
                catch_response=True,
                name="POST /api/cart/{userId}/add",
            ) as resp:
                if resp.status_code != 200:
                    resp.failure(f"Add item failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def read_cart(self):
        self.client.get(f"{self.user.cart_service_url}/api/cart/{self.user_id}", name="GET /api/cart/{userId}")

    @task
    def create_order(self):
        with self.client.post(
            f"{self.user.order_service_url}/api/orders",
            json={"userId": self.user_id, "customer": customer_data()},
            catch_response=True,
            name="POST /api/orders",
        ) as resp:
            if resp.status_code == 201:
                self.order_id = resp.json()["id"]
            else:
                resp.failure(f"Create order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def read_order(self):
        self.client.get(f"{self.user.order_service_url}/api/orders/{self.order_id}", name="GET /api/orders/{id}")

    @task
    def list_orders(self):
        self.client.get(
            f"{self.user.order_service_url}/api/orders/user/{self.user_id}",
            name="GET /api/orders/user/{userId}",
        )
        self.interrupt()


class CheckoutApiUser(HttpUser):
    product_service_url = os.getenv("PRODUCT_SERVICE_URL", "http://localhost:3001")
    cart_service_url = os.getenv("CART_SERVICE_URL", "http://localhost:3002")
    order_service_url = os.getenv("ORDER_SERVICE_URL", "http://localhost:3003")
    host = cart_service_url

    tasks = [CheckoutApiJourney]
    wait_time = between(1, 2)
