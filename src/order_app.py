"""ShopMate order service.

Usage:
    uvicorn order_app:app --app-dir src --port 3003
    python src/order_app.py
"""

import uvicorn

from shared.config import service_port
from shared.logging import configure_logging

configure_logging("order-service")

from orders.domain import orders  # noqa: E402

orders.init()

from orders.app import build_app  # noqa: E402

app = build_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=service_port(3003))
