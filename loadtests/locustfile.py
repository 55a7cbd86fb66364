"""ShopMate Load Testing — Locust entry point.

Usage:
    # All scenarios against a local storefront (web UI):
    locust -f loadtests/locustfile.py --host http://localhost:3000

    # Shopper journeys only, headless:
    locust -f loadtests/locustfile.py ShopperUser --headless \
           -u 50 -r 5 -t 300s --host http://localhost:3000 --csv=results/loadtest

    # Cart/order APIs directly:
    locust -f loadtests/locustfile.py CheckoutApiUser --host http://localhost:3002
"""

import logging
import time

import requests
from locust import events

from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.api import CheckoutApiUser  # noqa: F401
from loadtests.scenarios.storefront import BrowsingUser, ShopperUser  # noqa: F401

logger = logging.getLogger("loadtest")

BUSINESS_METRICS = ("product_service_views", "cart_service_items_added", "order_service_orders_created")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request."""
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print the business counters of every service when the test ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    for url in (CheckoutApiUser.product_service_url, CheckoutApiUser.cart_service_url, CheckoutApiUser.order_service_url):
        try:
            resp = requests.get(f"{url}/metrics", timeout=5)
        except requests.RequestException as e:
            print(f"[LOADTEST] Could not fetch {url}/metrics: {e}")
            continue

        lines = [
            line
            for line in resp.text.split("\n")
            if line.startswith(BUSINESS_METRICS) and not line.startswith("#")
        ]
        for line in lines:
            print(f"  {line}")
    print()
