"""Seller notifications: tells sellers about changes to their account.

Delivery is best effort: a failing notifier is logged and never undoes the
state change that triggered it, because the handler only runs after that
change has been committed.
"""

import structlog
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.notifier import get_notifier
from marketplace.seller.events import (
    SellerActivated,
    SellerApproved,
    SellerDeactivated,
    SellerRegistered,
    SellerRejected,
    SellerSuspended,
)
from marketplace.seller.seller import Seller

logger = structlog.get_logger(__name__)


def send_notification(seller_id, event_type: str, payload: dict) -> bool:
    """Send one notice through the configured notifier. Returns False on failure."""
    try:
        get_notifier().notify(str(seller_id), event_type, payload)
    except Exception as exc:
        logger.error(
            "Seller notification failed",
            seller_id=str(seller_id),
            notification_type=event_type,
            error=str(exc),
        )
        return False
    return True


@marketplace.event_handler(part_of=Seller)
class SellerNotificationHandler:
    @handle(SellerRegistered)
    def on_registered(self, event: SellerRegistered) -> None:
        send_notification(
            event.seller_id,
            "registration",
            {
                "company_name": event.company_name,
                "subdomain": event.subdomain,
                "approval_status": event.approval_status,
            },
        )

    @handle(SellerApproved)
    def on_approved(self, event: SellerApproved) -> None:
        send_notification(event.seller_id, "approved", {})

    @handle(SellerRejected)
    def on_rejected(self, event: SellerRejected) -> None:
        send_notification(event.seller_id, "rejected", {"reason": event.reason})

    @handle(SellerSuspended)
    def on_suspended(self, event: SellerSuspended) -> None:
        send_notification(event.seller_id, "suspended", {"reason": event.reason})

    @handle(SellerActivated)
    def on_activated(self, event: SellerActivated) -> None:
        send_notification(event.seller_id, "activated", {"previous_status": event.previous_status})

    @handle(SellerDeactivated)
    def on_deactivated(self, event: SellerDeactivated) -> None:
        send_notification(event.seller_id, "deactivated", {})
