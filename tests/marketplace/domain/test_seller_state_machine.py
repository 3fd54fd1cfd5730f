"""Tests for the Seller state machines: operational status and approval."""

import pytest
from protean.exceptions import ValidationError

from marketplace.exceptions import InvalidStateError
from marketplace.seller.events import (
    CommissionRateChanged,
    SellerActivated,
    SellerApproved,
    SellerDeactivated,
    SellerRejected,
    SellerSuspended,
)
from marketplace.seller.seller import ApprovalStatus, Seller, SellerStatus


def _seller(status=SellerStatus.ACTIVE, approval=ApprovalStatus.PENDING):
    seller = Seller.register(
        customer_id="cust-001",
        company_name="Acme Tools",
        subdomain="acmetools",
        commission_rate=10.0,
    )
    if approval == ApprovalStatus.APPROVED:
        seller.approve()
    elif approval == ApprovalStatus.REJECTED:
        seller.reject("Incomplete documents")

    if status == SellerStatus.SUSPENDED:
        seller.suspend("Policy review")
    elif status == SellerStatus.INACTIVE:
        seller.deactivate()

    seller._events.clear()
    return seller


class TestApprovalTransitions:
    @pytest.mark.parametrize("start", [ApprovalStatus.PENDING, ApprovalStatus.REJECTED])
    def test_approve_from_pending_or_rejected(self, start):
        seller = _seller(approval=start)
        seller.approve()
        assert seller.approval_status == ApprovalStatus.APPROVED.value
        assert seller.approved_at is not None
        assert seller.rejection_reason is None
        assert isinstance(seller._events[-1], SellerApproved)

    def test_approve_twice_is_invalid(self):
        seller = _seller(approval=ApprovalStatus.APPROVED)
        with pytest.raises(InvalidStateError) as exc:
            seller.approve()
        assert "approval_status" in exc.value.messages

    @pytest.mark.parametrize(
        "start", [ApprovalStatus.PENDING, ApprovalStatus.APPROVED, ApprovalStatus.REJECTED]
    )
    def test_reject_from_any_approval_state(self, start):
        seller = _seller(approval=start)
        seller.reject("Counterfeit goods")
        assert seller.approval_status == ApprovalStatus.REJECTED.value
        assert seller.rejection_reason == "Counterfeit goods"
        assert seller.rejected_at is not None
        event = seller._events[-1]
        assert isinstance(event, SellerRejected)
        assert event.reason == "Counterfeit goods"

    def test_approval_does_not_touch_operational_status(self):
        seller = _seller(status=SellerStatus.SUSPENDED)
        seller.approve()
        assert seller.status == SellerStatus.SUSPENDED.value


class TestStatusTransitions:
    def test_suspend_active_seller(self):
        seller = _seller()
        seller.suspend("Chargebacks")
        assert seller.status == SellerStatus.SUSPENDED.value
        assert seller.suspension_reason == "Chargebacks"
        assert isinstance(seller._events[-1], SellerSuspended)

    @pytest.mark.parametrize("start", [SellerStatus.SUSPENDED, SellerStatus.INACTIVE])
    def test_activate_from_suspended_or_inactive(self, start):
        seller = _seller(status=start)
        seller.activate()
        assert seller.status == SellerStatus.ACTIVE.value
        assert seller.suspension_reason is None
        event = seller._events[-1]
        assert isinstance(event, SellerActivated)
        assert event.previous_status == start.value

    def test_deactivate_active_seller(self):
        seller = _seller()
        seller.deactivate()
        assert seller.status == SellerStatus.INACTIVE.value
        assert isinstance(seller._events[-1], SellerDeactivated)

    @pytest.mark.parametrize(
        "start, action",
        [
            (SellerStatus.ACTIVE, "activate"),
            (SellerStatus.SUSPENDED, "suspend"),
            (SellerStatus.SUSPENDED, "deactivate"),
            (SellerStatus.INACTIVE, "suspend"),
            (SellerStatus.INACTIVE, "deactivate"),
        ],
    )
    def test_invalid_transitions_raise(self, start, action):
        seller = _seller(status=start)
        with pytest.raises(InvalidStateError) as exc:
            getattr(seller, action)()
        assert "status" in exc.value.messages
        assert seller.status == start.value
        assert seller._events == []


class TestCommissionRate:
    def test_change_within_bounds(self):
        seller = _seller()
        seller.change_commission_rate(15.5, min_rate=5.0, max_rate=30.0)
        assert seller.commission_rate == 15.5
        event = seller._events[-1]
        assert isinstance(event, CommissionRateChanged)
        assert event.previous_rate == 10.0
        assert event.new_rate == 15.5

    @pytest.mark.parametrize("rate", [4.99, 30.01])
    def test_change_outside_bounds_rejected(self, rate):
        seller = _seller()
        with pytest.raises(ValidationError) as exc:
            seller.change_commission_rate(rate, min_rate=5.0, max_rate=30.0)
        assert "commission_rate" in exc.value.messages
        assert seller.commission_rate == 10.0
