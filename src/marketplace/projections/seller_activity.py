"""SellerActivity: audit trail of a seller's lifecycle, newest first."""

from uuid import uuid4

from protean.core.projector import on
from protean.fields import DateTime, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.seller.events import (
    CommissionRateChanged,
    SellerActivated,
    SellerApproved,
    SellerDeactivated,
    SellerDeleted,
    SellerRegistered,
    SellerRejected,
    SellerSuspended,
)
from marketplace.seller.seller import Seller

DEFAULT_ACTIVITY_LIMIT = 50


@marketplace.projection
class SellerActivity:
    activity_id = Identifier(identifier=True, required=True)
    seller_id = Identifier(required=True)
    activity = String(required=True, max_length=50)
    description = Text()
    occurred_at = DateTime(required=True)


def _record(seller_id, activity, description, occurred_at):
    current_domain.repository_for(SellerActivity).add(
        SellerActivity(
            activity_id=str(uuid4()),
            seller_id=str(seller_id),
            activity=activity,
            description=description,
            occurred_at=occurred_at,
        )
    )


def get_seller_activity_log(seller_id, limit: int = DEFAULT_ACTIVITY_LIMIT) -> list[SellerActivity]:
    repo = current_domain.repository_for(SellerActivity)
    return list(
        repo._dao.query.filter(seller_id=str(seller_id)).order_by("-occurred_at").limit(limit).all().items
    )


@marketplace.projector(projector_for=SellerActivity, aggregates=[Seller])
class SellerActivityProjector:
    @on(SellerRegistered)
    def on_registered(self, event):
        _record(
            event.seller_id,
            "registered",
            f"Registered as {event.company_name} ({event.subdomain}), approval {event.approval_status}",
            event.registered_at,
        )

    @on(SellerApproved)
    def on_approved(self, event):
        _record(event.seller_id, "approved", "Seller approved", event.approved_at)

    @on(SellerRejected)
    def on_rejected(self, event):
        description = f"Seller rejected: {event.reason}" if event.reason else "Seller rejected"
        _record(event.seller_id, "rejected", description, event.rejected_at)

    @on(SellerSuspended)
    def on_suspended(self, event):
        description = f"Seller suspended: {event.reason}" if event.reason else "Seller suspended"
        _record(event.seller_id, "suspended", description, event.suspended_at)

    @on(SellerActivated)
    def on_activated(self, event):
        _record(event.seller_id, "activated", f"Seller activated (was {event.previous_status})", event.activated_at)

    @on(SellerDeactivated)
    def on_deactivated(self, event):
        _record(event.seller_id, "deactivated", "Seller deactivated", event.deactivated_at)

    @on(CommissionRateChanged)
    def on_commission_changed(self, event):
        _record(
            event.seller_id,
            "commission_changed",
            f"Commission rate changed from {event.previous_rate} to {event.new_rate}",
            event.changed_at,
        )

    @on(SellerDeleted)
    def on_deleted(self, event):
        _record(event.seller_id, "deleted", f"Seller {event.subdomain} deleted", event.deleted_at)
