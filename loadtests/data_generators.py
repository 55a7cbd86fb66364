"""Faker-based data generators for Locust load test scenarios."""

import random

from faker import Faker

fake = Faker()

# Product ids of the seeded sample catalog
SEEDED_PRODUCT_IDS = [1, 2, 3, 4, 5]


def product_id() -> int:
    return random.choice(SEEDED_PRODUCT_IDS)


def quantity() -> int:
    """Small quantities so that a run doesn't drain the seeded stock immediately."""
    return random.choices([1, 2, 3], weights=[70, 20, 10])[0]


def customer_data() -> dict:
    """Checkout form / ``customer`` payload."""
    return {
        "name": fake.name()[:255],
        "email": fake.email(),
        "address": fake.address().replace("\n", ", ")[:500],
    }


def user_id() -> str:
    return fake.uuid4()
