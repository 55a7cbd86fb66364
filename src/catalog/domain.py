"""Catalog bounded context — the product table and its stock levels.

Leaf service: owns no logic beyond listing, reading and writing products.
"""

import structlog
from protean.domain import Domain

catalog = Domain(name="catalog")

logger = structlog.get_logger(__name__)
