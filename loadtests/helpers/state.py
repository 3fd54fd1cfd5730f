"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared across users.
State tracks entity IDs returned by creation endpoints so follow-up
operations can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class SellerState:
    """Tracks state for a single simulated seller lifecycle."""

    seller_id: str | None = None
    customer_id: str | None = None
    subdomain: str | None = None
    listing_ids: list[str] = field(default_factory=list)
    approval_status: str = "Pending"


@dataclass
class BuyerState:
    """Tracks a buyer's interaction with one seller."""

    customer_id: str | None = None
    seller_id: str | None = None
    message_id: str | None = None
    review_id: str | None = None
