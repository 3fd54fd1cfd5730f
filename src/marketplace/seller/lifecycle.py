"""Seller lifecycle commands: approval, operational status, commission, deletion.

Each handler loads the seller (``ObjectNotFoundError`` propagates unchanged),
applies one state-machine transition on the aggregate and persists it. The
aggregate raises the matching event; notifications and the activity log react
to those events after the unit of work commits.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.exceptions import guarded
from marketplace.policy import get_policy
from marketplace.seller.seller import ApprovalStatus, Seller, SellerStatus

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Seller")
class ApproveSeller:
    seller_id = Identifier(required=True)


@marketplace.command(part_of="Seller")
class RejectSeller:
    seller_id = Identifier(required=True)
    reason = Text()


@marketplace.command(part_of="Seller")
class SuspendSeller:
    seller_id = Identifier(required=True)
    reason = Text()


@marketplace.command(part_of="Seller")
class ActivateSeller:
    seller_id = Identifier(required=True)


@marketplace.command(part_of="Seller")
class DeactivateSeller:
    seller_id = Identifier(required=True)


@marketplace.command(part_of="Seller")
class ChangeCommissionRate:
    seller_id = Identifier(required=True)
    commission_rate = Float(required=True)


@marketplace.command(part_of="Seller")
class UpdateSellerStatus:
    """Admin status setter. Accepts operational and approval status names."""

    seller_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    reason = Text()


@marketplace.command(part_of="Seller")
class DeleteSeller:
    seller_id = Identifier(required=True)


# Status names accepted by UpdateSellerStatus, mapped to the aggregate method
_STATUS_ACTIONS = {
    SellerStatus.ACTIVE.value: "activate",
    SellerStatus.INACTIVE.value: "deactivate",
    SellerStatus.SUSPENDED.value: "suspend",
    ApprovalStatus.APPROVED.value: "approve",
    ApprovalStatus.REJECTED.value: "reject",
}

_TAKES_REASON = {"suspend", "reject"}


def apply_status(seller: Seller, status: str, reason=None) -> None:
    action = _STATUS_ACTIONS.get(status)
    if action is None:
        raise ValidationError(
            {"status": [f"Unknown status '{status}'. Expected one of: {', '.join(_STATUS_ACTIONS)}"]}
        )

    method = getattr(seller, action)
    if action in _TAKES_REASON:
        method(reason)
    else:
        method()


@marketplace.command_handler(part_of=Seller)
class SellerLifecycleHandler:
    @handle(ApproveSeller)
    def approve_seller(self, command):
        with guarded("approve_seller", seller_id=str(command.seller_id)):
            repo = current_domain.repository_for(Seller)
            seller = repo.get(command.seller_id)
            seller.approve()
            repo.add(seller)

        logger.info("Seller approved", seller_id=str(command.seller_id))

    @handle(RejectSeller)
    def reject_seller(self, command):
        with guarded("reject_seller", seller_id=str(command.seller_id)):
            repo = current_domain.repository_for(Seller)
            seller = repo.get(command.seller_id)
            seller.reject(command.reason)
            repo.add(seller)

        logger.info("Seller rejected", seller_id=str(command.seller_id), reason=command.reason)

    @handle(SuspendSeller)
    def suspend_seller(self, command):
        with guarded("suspend_seller", seller_id=str(command.seller_id)):
            repo = current_domain.repository_for(Seller)
            seller = repo.get(command.seller_id)
            seller.suspend(command.reason)
            repo.add(seller)

        logger.info("Seller suspended", seller_id=str(command.seller_id), reason=command.reason)

    @handle(ActivateSeller)
    def activate_seller(self, command):
        with guarded("activate_seller", seller_id=str(command.seller_id)):
            repo = current_domain.repository_for(Seller)
            seller = repo.get(command.seller_id)
            seller.activate()
            repo.add(seller)

        logger.info("Seller activated", seller_id=str(command.seller_id))

    @handle(DeactivateSeller)
    def deactivate_seller(self, command):
        with guarded("deactivate_seller", seller_id=str(command.seller_id)):
            repo = current_domain.repository_for(Seller)
            seller = repo.get(command.seller_id)
            seller.deactivate()
            repo.add(seller)

        logger.info("Seller deactivated", seller_id=str(command.seller_id))

    @handle(ChangeCommissionRate)
    def change_commission_rate(self, command):
        policy = get_policy()
        with guarded("change_commission_rate", seller_id=str(command.seller_id)):
            repo = current_domain.repository_for(Seller)
            seller = repo.get(command.seller_id)
            seller.change_commission_rate(
                command.commission_rate,
                min_rate=policy.min_commission_rate,
                max_rate=policy.max_commission_rate,
            )
            repo.add(seller)

        logger.info(
            "Seller commission rate changed",
            seller_id=str(command.seller_id),
            commission_rate=command.commission_rate,
        )

    @handle(UpdateSellerStatus)
    def update_seller_status(self, command):
        with guarded("update_seller_status", seller_id=str(command.seller_id)):
            repo = current_domain.repository_for(Seller)
            seller = repo.get(command.seller_id)
            apply_status(seller, command.status, command.reason)
            repo.add(seller)

        logger.info("Seller status updated", seller_id=str(command.seller_id), status=command.status)

    @handle(DeleteSeller)
    def delete_seller(self, command):
        with guarded("delete_seller", seller_id=str(command.seller_id)):
            repo = current_domain.repository_for(Seller)
            seller = repo.get(command.seller_id)
            seller.mark_deleted()
            # Registered with the unit of work first so SellerDeleted is dispatched
            repo.add(seller)
            repo.discard(seller)

        logger.warning("Seller deleted", seller_id=str(command.seller_id))
