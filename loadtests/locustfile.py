"""Marketplace Load Testing: Locust entry point.

Discovers all user classes from the scenarios package.
Run specific user types with Locust's class selection.

Usage:
    # All user types (web UI):
    locust -f loadtests/locustfile.py --host http://localhost:8000

    # Admin dashboard only:
    locust -f loadtests/locustfile.py AdminDashboardUser

    # Headless (CI mode):
    locust -f loadtests/locustfile.py --headless \
           -u 50 -r 5 -t 300s --csv=results/loadtest
"""

import logging
import time

import requests
from locust import events

# Import all user classes so Locust discovers them
from loadtests.helpers.response import extract_error_detail
from loadtests.scenarios.marketplace import AdminDashboardUser, BuyerUser, SellerOnboardingUser  # noqa: F401

logger = logging.getLogger("loadtest")


@events.request.add_listener
def on_request(request_type, name, response, exception, **_kw):
    """Log error details for every failed request.

    Extracts the API error body so you see "status: Cannot transition from
    Active to Active" instead of just "409".
    """
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
    """Print the marketplace statistics the run produced."""
    print(f"\n[LOADTEST] Stopped at {time.strftime('%H:%M:%S')}")
    try:
        resp = requests.get(f"{environment.host}/marketplace/admin/stats", timeout=5)
        resp.raise_for_status()
        print("\n[LOADTEST] Final marketplace statistics:")
        for key, value in resp.json().items():
            print(f"  {key}: {value}")
        print()
    except requests.RequestException as e:
        print(f"[LOADTEST] Could not fetch marketplace statistics: {e}\n")
