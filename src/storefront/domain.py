"""Storefront bounded context — browser sessions.

The storefront owns nothing but sessions; pages are assembled from the
product, cart and order services.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
