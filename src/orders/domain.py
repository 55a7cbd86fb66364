"""Orders bounded context — confirmed orders and the checkout that creates them.

Orders snapshot product names and prices at creation time and are never
edited afterwards, apart from recording that the source cart was emptied.
"""

import structlog
from protean.domain import Domain

orders = Domain(name="orders")

logger = structlog.get_logger(__name__)
