"""Catalog bootstrap — seeds the sample products into an empty table.

Products are written one at a time. A failure part-way leaves a partially
populated catalog; the next boot sees a non-empty table and does nothing.
"""

from protean.utils.globals import current_domain

from catalog.domain import logger
from catalog.product.product import Product

SAMPLE_PRODUCTS = [
    {
        "id": 1,
        "name": "Smartphone X12 Pro",
        "price": 699.99,
        "description": "Latest flagship smartphone with advanced features",
        "image": "/images/smartphone.jpg",
        "stock": 50,
    },
    {
        "id": 2,
        "name": "UltraBook Pro 16",
        "price": 1299.99,
        "description": "High-performance laptop for professionals",
        "image": "/images/laptop.jpg",
        "stock": 30,
    },
    {
        "id": 3,
        "name": "SoundWave Elite Headphones",
        "price": 199.99,
        "description": "Premium wireless headphones with noise cancellation",
        "image": "/images/headphones.jpg",
        "stock": 100,
    },
    {
        "id": 4,
        "name": "FitTech Pro Smartwatch",
        "price": 249.99,
        "description": "Advanced fitness tracking smartwatch",
        "image": "/images/smartwatch.jpg",
        "stock": 45,
    },
    {
        "id": 5,
        "name": "SlimTab Ultra",
        "price": 499.99,
        "description": "Ultra-thin tablet for creativity and productivity",
        "image": "/images/tablet.jpg",
        "stock": 25,
    },
]


def seed_catalog(products=None):
    """Seed the catalog if it is empty. Returns the number of products written."""
    products = SAMPLE_PRODUCTS if products is None else products
    repo = current_domain.repository_for(Product)

    existing = repo._dao.query.all().items
    if existing:
        logger.info("catalog.seed.skipped", existing_products=len(existing))
        return 0

    logger.info("catalog.seed.started", products=len(products))
    for data in products:
        repo.add(Product.create(**data))
    logger.info("catalog.seed.completed", products=len(products))
    return len(products)

