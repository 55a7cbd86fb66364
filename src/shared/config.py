"""Environment-driven settings shared by all ShopMate services.

Every option can be overridden through an environment variable and falls back
to a hard-coded default suitable for the in-cluster deployment.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

_DEFAULT_PRODUCT_SERVICE_URL = "http://product-service:3001"
_DEFAULT_CART_SERVICE_URL = "http://cart-service:3002"
_DEFAULT_ORDER_SERVICE_URL = "http://order-service:3003"


def _service_url(name: str, default: str) -> str:
    """Resolve a sibling service URL, falling back to BASE_URL, then the default."""
    return (os.getenv(name) or os.getenv("BASE_URL") or default).rstrip("/")


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    return float(value) if value else None


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    product_service_url: str = _DEFAULT_PRODUCT_SERVICE_URL
    cart_service_url: str = _DEFAULT_CART_SERVICE_URL
    order_service_url: str = _DEFAULT_ORDER_SERVICE_URL
    products_table: str = "shopmate-eks-products-dev"
    carts_table: str = "shopmate-eks-carts-dev"
    orders_table: str = "shopmate-eks-orders-dev"
    sessions_table: str = "shopmate-eks-sessions-dev"
    # Kept for deployment config compatibility; the Protean provider ignores it
    region: str = "ap-southeast-1"
    session_secret: str = "shopmate-default-secret"
    session_ttl_hours: int = 24
    downstream_timeout: float | None = None
    stock_update_attempts: int = 3
    checkout_retry_minutes: int = 30

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            environment=(os.getenv("ENVIRONMENT") or "development").lower(),
            product_service_url=_service_url("PRODUCT_SERVICE_URL", _DEFAULT_PRODUCT_SERVICE_URL),
            cart_service_url=_service_url("CART_SERVICE_URL", _DEFAULT_CART_SERVICE_URL),
            order_service_url=_service_url("ORDER_SERVICE_URL", _DEFAULT_ORDER_SERVICE_URL),
            products_table=os.getenv("PRODUCTS_TABLE", cls.products_table),
            carts_table=os.getenv("CARTS_TABLE", cls.carts_table),
            orders_table=os.getenv("ORDERS_TABLE", cls.orders_table),
            sessions_table=os.getenv("SESSIONS_TABLE", cls.sessions_table),
            region=os.getenv("AWS_REGION", cls.region),
            session_secret=os.getenv("SESSION_SECRET", cls.session_secret),
            session_ttl_hours=int(os.getenv("SESSION_TTL_HOURS", cls.session_ttl_hours)),
            downstream_timeout=_optional_float("DOWNSTREAM_TIMEOUT"),
            stock_update_attempts=int(os.getenv("STOCK_UPDATE_ATTEMPTS", cls.stock_update_attempts)),
            checkout_retry_minutes=int(os.getenv("CHECKOUT_RETRY_MINUTES", cls.checkout_retry_minutes)),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read from the environment once."""
    return Settings.from_env()


def service_port(default: int) -> int:
    return int(os.getenv("PORT", default))
