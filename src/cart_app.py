"""ShopMate cart service.

Usage:
    uvicorn cart_app:app --app-dir src --port 3002
    python src/cart_app.py
"""

import uvicorn

from shared.config import service_port
from shared.logging import configure_logging

configure_logging("cart-service")

from carts.domain import carts  # noqa: E402

carts.init()

from carts.app import build_app  # noqa: E402

app = build_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=service_port(3002))
