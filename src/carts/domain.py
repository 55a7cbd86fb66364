"""Carts bounded context — per-user shopping carts.

Owns the carts table and coordinates stock with the catalog service whenever
cart quantities change.
"""

import structlog
from protean.domain import Domain

carts = Domain(name="carts")

logger = structlog.get_logger(__name__)
