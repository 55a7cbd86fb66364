"""ShopMate storefront (frontend service).

Usage:
    uvicorn storefront_app:app --app-dir src --port 3000
    python src/storefront_app.py
"""

import uvicorn

from shared.config import service_port
from shared.logging import configure_logging

configure_logging("frontend-service")

from storefront.domain import storefront  # noqa: E402

storefront.init()

from storefront.app import build_app  # noqa: E402

app = build_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=service_port(3000))
