"""Marketplace load test scenarios.

Three user types drive the marketplace API:

- ``SellerOnboardingUser`` registers, gets approved and builds a listing catalogue.
- ``BuyerUser`` buys from an approved seller, messages them and leaves a review.
- ``AdminDashboardUser`` polls statistics and works through the moderation queues.

Sellers and buyers run SequentialTaskSet journeys where each step depends
on the previous one succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    listing_data,
    message_data,
    review_data,
    sale_data,
    seller_registration,
    unique_id,
)
from loadtests.helpers.state import BuyerState, SellerState

ADMIN = "/marketplace/admin"


def _register_approved_seller(client) -> SellerState | None:
    state = SellerState()
    payload = seller_registration()
    with client.post("/marketplace/sellers", json=payload, catch_response=True, name="POST /sellers") as resp:
        if resp.status_code != 201:
            resp.failure(f"Register seller failed: {resp.status_code}")
            return None
        state.seller_id = resp.json()["seller_id"]
        state.customer_id = payload["customer_id"]

    with client.post(
        f"{ADMIN}/sellers/{state.seller_id}/approve",
        catch_response=True,
        name="POST /admin/sellers/{id}/approve",
    ) as resp:
        # Already approved when the marketplace auto-approves sellers
        if resp.status_code in (200, 409):
            state.approval_status = "Approved"
        else:
            resp.failure(f"Approve seller failed: {resp.status_code}")
            return None
    return state


class SellerOnboardingJourney(SequentialTaskSet):
    """Register -> Approve -> List 3 products -> Change a condition -> Dashboard."""

    def on_start(self):
        self.state = None

    @task
    def register_and_approve(self):
        self.state = _register_approved_seller(self.client)
        if self.state is None:
            self.interrupt()

    @task
    def list_products(self):
        for _ in range(3):
            with self.client.post(
                f"/marketplace/sellers/{self.state.seller_id}/products",
                json=listing_data(),
                catch_response=True,
                name="POST /sellers/{id}/products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.listing_ids.append(resp.json()["listing_id"])
                elif resp.status_code == 403:
                    # Quota reached or used products disabled
                    resp.success()
                else:
                    resp.failure(f"Add listing failed: {resp.status_code}")

    @task
    def view_dashboard(self):
        with self.client.get(
            f"/marketplace/sellers/{self.state.seller_id}/dashboard",
            catch_response=True,
            name="GET /sellers/{id}/dashboard",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Dashboard failed: {resp.status_code}")

    @task
    def done(self):
        self.interrupt(reschedule=False)


class BuyerJourney(SequentialTaskSet):
    """Buy -> Message the seller -> Seller replies -> Review -> Read inbox."""

    def on_start(self):
        self.state = BuyerState(customer_id=unique_id("cust"))

    @task
    def find_seller(self):
        seller = _register_approved_seller(self.client)
        if seller is None:
            self.interrupt()
        self.state.seller_id = seller.seller_id

    @task
    def buy(self):
        with self.client.post(
            "/marketplace/sales",
            json=sale_data(self.state.seller_id, self.state.customer_id),
            catch_response=True,
            name="POST /sales",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Record sale failed: {resp.status_code}")

    @task
    def message_seller(self):
        with self.client.post(
            "/marketplace/messages",
            json=message_data(self.state.seller_id, self.state.customer_id),
            catch_response=True,
            name="POST /messages",
        ) as resp:
            if resp.status_code == 201:
                self.state.message_id = resp.json()["message_id"]
            else:
                resp.failure(f"Send message failed: {resp.status_code}")
                self.interrupt()

    @task
    def seller_replies(self):
        with self.client.post(
            f"/marketplace/messages/{self.state.message_id}/reply",
            json={"message": "Thanks for your order, it ships today."},
            catch_response=True,
            name="POST /messages/{id}/reply",
        ) as resp:
            if resp.status_code != 201:
                resp.failure(f"Reply failed: {resp.status_code}")

    @task
    def review_seller(self):
        with self.client.post(
            "/marketplace/reviews",
            json=review_data(self.state.seller_id, self.state.customer_id),
            catch_response=True,
            name="POST /reviews",
        ) as resp:
            if resp.status_code == 201:
                self.state.review_id = resp.json()["review_id"]
            elif resp.status_code == 403:
                # Ratings disabled by configuration
                resp.success()
            else:
                resp.failure(f"Submit review failed: {resp.status_code}")

    @task
    def read_inbox(self):
        self.client.get(
            "/marketplace/messages/threads",
            params={"user_id": self.state.customer_id},
            name="GET /messages/threads",
        )
        self.client.post(
            "/marketplace/messages/read-all",
            json={"user_id": self.state.customer_id},
            name="POST /messages/read-all",
        )

    @task
    def done(self):
        self.interrupt(reschedule=False)


class SellerOnboardingUser(HttpUser):
    tasks = [SellerOnboardingJourney]
    wait_time = between(1, 3)
    weight = 2


class BuyerUser(HttpUser):
    tasks = [BuyerJourney]
    wait_time = between(1, 3)
    weight = 5


class AdminDashboardUser(HttpUser):
    """Polls the admin dashboard and drains the pending seller queue."""

    wait_time = between(2, 5)
    weight = 1

    @task(5)
    def stats(self):
        self.client.get(f"{ADMIN}/stats", name="GET /admin/stats")

    @task(3)
    def approve_pending_sellers(self):
        resp = self.client.get(
            f"{ADMIN}/sellers/pending",
            params={"pageSize": 20, "currentPage": 1},
            name="GET /admin/sellers/pending",
        )
        if resp.status_code != 200:
            return
        seller_ids = [item["seller_id"] for item in resp.json()["items"]]
        if seller_ids:
            self.client.post(
                f"{ADMIN}/sellers/bulk-approve",
                json={"sellerIds": seller_ids},
                name="POST /admin/sellers/bulk-approve",
            )

    @task(2)
    def browse_sellers(self):
        page = random.randint(1, 3)
        self.client.get(
            "/marketplace/sellers",
            params={"pageSize": 20, "currentPage": page},
            name="GET /sellers",
        )

    @task(1)
    def configuration(self):
        self.client.get(f"{ADMIN}/configuration", name="GET /admin/configuration")
