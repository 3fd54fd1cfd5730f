"""Application tests for the seller lifecycle commands."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from marketplace.exceptions import InvalidStateError, OperationFailure
from marketplace.policy import configure_policy
from marketplace.seller.lifecycle import (
    ActivateSeller,
    ApproveSeller,
    ChangeCommissionRate,
    DeactivateSeller,
    DeleteSeller,
    RejectSeller,
    SuspendSeller,
    UpdateSellerStatus,
)
from marketplace.seller.seller import Seller


def _process(command):
    return current_domain.process(command, asynchronous=False)


def _get(seller_id):
    return current_domain.repository_for(Seller).get(seller_id)


class TestApproval:
    def test_approve_pending_seller(self, register_seller, notifier):
        seller_id = register_seller(approve=False)
        _process(ApproveSeller(seller_id=seller_id))

        seller = _get(seller_id)
        assert seller.approval_status == "Approved"
        assert seller.approved_at is not None
        assert seller.can_sell is True
        assert notifier.sent_for(seller_id) == ["registration", "approved"]

    def test_approve_twice_is_invalid(self, seller_id):
        with pytest.raises(InvalidStateError):
            _process(ApproveSeller(seller_id=seller_id))

    def test_reject_records_reason(self, register_seller, notifier):
        seller_id = register_seller(approve=False)
        _process(RejectSeller(seller_id=seller_id, reason="Missing business license"))

        seller = _get(seller_id)
        assert seller.approval_status == "Rejected"
        assert seller.rejection_reason == "Missing business license"
        assert notifier.sent[-1]["payload"] == {"reason": "Missing business license"}

    def test_rejected_seller_can_be_approved_later(self, register_seller):
        seller_id = register_seller(approve=False)
        _process(RejectSeller(seller_id=seller_id, reason="Incomplete"))
        _process(ApproveSeller(seller_id=seller_id))
        seller = _get(seller_id)
        assert seller.is_approved is True
        assert seller.rejection_reason is None

    def test_unknown_seller(self):
        with pytest.raises(ObjectNotFoundError):
            _process(ApproveSeller(seller_id="missing-seller"))


class TestOperationalStatus:
    def test_suspend_and_reactivate(self, seller_id, notifier):
        _process(SuspendSeller(seller_id=seller_id, reason="Chargebacks"))
        seller = _get(seller_id)
        assert seller.status == "Suspended"
        assert seller.suspension_reason == "Chargebacks"
        assert seller.can_sell is False

        _process(ActivateSeller(seller_id=seller_id))
        seller = _get(seller_id)
        assert seller.status == "Active"
        assert seller.suspension_reason is None
        assert notifier.sent_for(seller_id)[-2:] == ["suspended", "activated"]

    def test_deactivate(self, seller_id):
        _process(DeactivateSeller(seller_id=seller_id))
        assert _get(seller_id).status == "Inactive"

    def test_suspending_inactive_seller_is_invalid(self, seller_id):
        _process(DeactivateSeller(seller_id=seller_id))
        with pytest.raises(InvalidStateError):
            _process(SuspendSeller(seller_id=seller_id))

    def test_activating_active_seller_is_invalid(self, seller_id):
        with pytest.raises(InvalidStateError):
            _process(ActivateSeller(seller_id=seller_id))


class TestUpdateSellerStatus:
    @pytest.mark.parametrize("status, field, expected", [
        ("Suspended", "status", "Suspended"),
        ("Inactive", "status", "Inactive"),
        ("Rejected", "approval_status", "Rejected"),
    ])
    def test_status_names_map_to_transitions(self, seller_id, status, field, expected):
        _process(UpdateSellerStatus(seller_id=seller_id, status=status, reason="Admin action"))
        assert getattr(_get(seller_id), field) == expected

    def test_approved_status(self, register_seller):
        seller_id = register_seller(approve=False)
        _process(UpdateSellerStatus(seller_id=seller_id, status="Approved"))
        assert _get(seller_id).is_approved is True

    def test_unknown_status(self, seller_id):
        with pytest.raises(ValidationError) as exc:
            _process(UpdateSellerStatus(seller_id=seller_id, status="Closed"))
        assert "status" in exc.value.messages


class TestCommissionRate:
    def test_change_within_bounds(self, seller_id):
        _process(ChangeCommissionRate(seller_id=seller_id, commission_rate=15.0))
        assert _get(seller_id).commission_rate == 15.0

    def test_change_outside_policy_bounds(self, seller_id):
        configure_policy(min_commission_rate=5.0, max_commission_rate=20.0)
        with pytest.raises(ValidationError):
            _process(ChangeCommissionRate(seller_id=seller_id, commission_rate=30.0))
        assert _get(seller_id).commission_rate == 10.0


class TestDeleteSeller:
    def test_delete_removes_seller(self, seller_id):
        _process(DeleteSeller(seller_id=seller_id))
        with pytest.raises(ObjectNotFoundError):
            _get(seller_id)

    def test_delete_unknown_seller(self):
        with pytest.raises(ObjectNotFoundError):
            _process(DeleteSeller(seller_id="missing-seller"))


class TestUnexpectedFailures:
    def test_repository_failure_becomes_operation_failure(self, seller_id, monkeypatch):
        def broken_suspend(self, reason=None):
            raise RuntimeError("storage offline")

        monkeypatch.setattr(Seller, "suspend", broken_suspend)
        with pytest.raises(OperationFailure) as exc:
            _process(SuspendSeller(seller_id=seller_id))
        assert isinstance(exc.value.__cause__, RuntimeError)
        assert _get(seller_id).status == "Active"
