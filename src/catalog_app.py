"""ShopMate product service.

Usage:
    uvicorn catalog_app:app --app-dir src --port 3001
    python src/catalog_app.py
"""

import uvicorn

from shared.config import service_port
from shared.logging import configure_logging

configure_logging("product-service")

from catalog.domain import catalog  # noqa: E402

catalog.init()

from catalog.app import build_app  # noqa: E402

app = build_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=service_port(3001))
