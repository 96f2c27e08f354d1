"""SkyElectroTech Load Testing — Locust entry point.

Discovers all user classes from the scenarios package. Run specific
scenarios with Locust's class selection.

Usage:
    # All scenarios (web UI):
    locust -f loadtests/locustfile.py --host http://localhost:8000

    # Mixed workload only:
    locust -f loadtests/locustfile.py MixedWorkloadUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py MixedWorkloadUser --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest

Tokens are signed locally, so export the API's ``JWT_SECRET`` first.
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.catalog import CatalogAdminUser  # noqa: F401
from loadtests.scenarios.mixed import MixedWorkloadUser  # noqa: F401
from loadtests.scenarios.shopping import ShopperUser, WarehouseUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Extracts the API error message so the log shows "Cart is empty" instead
    of just "400".
    """
    if exception:
        logger.error("[EXCEPTION] %s %s: %s", request_type, name, exception)
    elif response is not None and response.status_code >= 400:
        detail = extract_error_detail(response)
        logger.error("[%s] %s %s: %s", response.status_code, request_type, name, detail)


@events.test_start.add_listener
def on_test_start(environment, **_kwargs):
    """Log a marker when load test begins."""
    print(f"\n[LOADTEST] Started at {time.strftime('%H:%M:%S')}")
    print(f"[LOADTEST] Target host: {environment.host}")
    print()


@events.test_stop.add_listener
def on_test_stop(environment, **_kwargs):
    """Print the storefront's sales summary when the test ends."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    if not environment.host:
        return

    from loadtests.helpers.auth import bearer_headers

    try:
        resp = requests.get(
            f"{environment.host}/api/orders/stats/summary",
            headers=bearer_headers("admin"),
            timeout=5,
        )
    except requests.RequestException as e:
        print(f"[LOADTEST] Could not fetch sales summary: {e}")
        return

    if resp.status_code != 200:
        print(f"[LOADTEST] Sales summary unavailable: {extract_error_detail(resp)}")
        return

    summary = resp.json()["data"]["summary"]
    print("\n[LOADTEST] Final sales summary:")
    for status, count in summary["orders_by_status"].items():
        print(f"  {status:<10} {count}")
    print(f"  revenue    {summary['total_revenue']}")
    print(f"  items sold {summary['items_sold']}")
    print()
