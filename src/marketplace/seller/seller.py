"""Seller aggregate: a marketplace participant mapped 1:1 to a customer account.

Two independent state dimensions are tracked:

Operational status:
    ACTIVE → SUSPENDED | INACTIVE
    SUSPENDED → ACTIVE
    INACTIVE → ACTIVE

Approval status (moderation):
    PENDING → APPROVED | REJECTED
    REJECTED → APPROVED | REJECTED
    APPROVED → REJECTED

``rating``, ``review_count``, ``product_count`` and ``total_sales`` are
materialized statistics. They are only written by the statistics handlers
in ``marketplace.seller.statistics``.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from marketplace.domain import marketplace
from marketplace.exceptions import InvalidStateError
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

SUBDOMAIN_BASE_LENGTH = 20
SUBDOMAIN_MIN_LENGTH = 2
SUBDOMAIN_MAX_LENGTH = 50

RESERVED_SUBDOMAINS = frozenset(
    {
        "www",
        "admin",
        "api",
        "app",
        "blog",
        "shop",
        "store",
        "marketplace",
        "seller",
        "buyer",
        "customer",
        "user",
        "account",
        "profile",
        "dashboard",
    }
)

_SUBDOMAIN_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]*[a-z0-9]$")


class SellerStatus(Enum):
    INACTIVE = "Inactive"
    ACTIVE = "Active"
    SUSPENDED = "Suspended"


class ApprovalStatus(Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


_STATUS_TRANSITIONS = {
    SellerStatus.ACTIVE: {SellerStatus.SUSPENDED, SellerStatus.INACTIVE},
    SellerStatus.SUSPENDED: {SellerStatus.ACTIVE},
    SellerStatus.INACTIVE: {SellerStatus.ACTIVE},
}

_APPROVAL_TRANSITIONS = {
    ApprovalStatus.PENDING: {ApprovalStatus.APPROVED, ApprovalStatus.REJECTED},
    ApprovalStatus.REJECTED: {ApprovalStatus.APPROVED, ApprovalStatus.REJECTED},
    ApprovalStatus.APPROVED: {ApprovalStatus.REJECTED},
}


def sanitize_subdomain(company_name: str) -> str:
    """Lowercase the company name, drop everything but letters and digits, truncate."""
    return re.sub(r"[^a-z0-9]", "", company_name.lower())[:SUBDOMAIN_BASE_LENGTH]


def is_valid_subdomain_format(subdomain: str) -> bool:
    if not subdomain or not SUBDOMAIN_MIN_LENGTH <= len(subdomain) <= SUBDOMAIN_MAX_LENGTH:
        return False
    if not _SUBDOMAIN_PATTERN.match(subdomain):
        return False
    return subdomain not in RESERVED_SUBDOMAINS


@marketplace.aggregate
class Seller:
    """A seller storefront owned by exactly one customer account."""

    customer_id = Identifier(required=True, unique=True)
    company_name = String(required=True, max_length=255)
    subdomain = String(required=True, max_length=SUBDOMAIN_MAX_LENGTH, unique=True)

    # Business details
    business_license = String(max_length=255)
    tax_id = String(max_length=100)
    phone = String(max_length=50)
    address = String(max_length=255)
    city = String(max_length=100)
    region = String(max_length=100)
    postcode = String(max_length=20)
    country_id = String(max_length=2)

    # State
    status = String(choices=SellerStatus, default=SellerStatus.ACTIVE.value)
    approval_status = String(choices=ApprovalStatus, default=ApprovalStatus.PENDING.value)
    rejection_reason = Text()
    suspension_reason = Text()
    commission_rate = Float(min_value=0.0, max_value=100.0, default=0.0)

    # Materialized statistics
    rating = Float(min_value=0.0, max_value=5.0, default=0.0)
    review_count = Integer(min_value=0, default=0)
    product_count = Integer(min_value=0, default=0)
    total_sales = Float(min_value=0.0, default=0.0)

    # Timestamps
    registered_at = DateTime()
    approved_at = DateTime()
    rejected_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def company_name_minimum_length(self):
        if self.company_name is not None and len(self.company_name.strip()) < 2:
            raise ValidationError({"company_name": ["Company name must be at least 2 characters long"]})

    @invariant.post
    def subdomain_must_be_well_formed(self):
        if self.subdomain is not None and not is_valid_subdomain_format(self.subdomain):
            raise ValidationError({"subdomain": [f"Subdomain '{self.subdomain}' is not valid"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, customer_id, company_name, subdomain, commission_rate, auto_approve=False, **details):
        """Register a new seller. Sellers start Active, and Pending unless auto-approved."""
        now = datetime.now(UTC)
        approval = ApprovalStatus.APPROVED if auto_approve else ApprovalStatus.PENDING

        seller = cls(
            customer_id=customer_id,
            company_name=company_name.strip(),
            subdomain=subdomain,
            status=SellerStatus.ACTIVE.value,
            approval_status=approval.value,
            commission_rate=commission_rate,
            rating=0.0,
            review_count=0,
            product_count=0,
            total_sales=0.0,
            registered_at=now,
            approved_at=now if auto_approve else None,
            updated_at=now,
            **details,
        )

        seller.raise_(
            SellerRegistered(
                seller_id=str(seller.id),
                customer_id=str(customer_id),
                company_name=seller.company_name,
                subdomain=subdomain,
                status=seller.status,
                approval_status=seller.approval_status,
                commission_rate=commission_rate,
                registered_at=now,
            )
        )
        return seller

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_active(self) -> bool:
        return self.status == SellerStatus.ACTIVE.value

    @property
    def is_approved(self) -> bool:
        return self.approval_status == ApprovalStatus.APPROVED.value

    @property
    def is_pending(self) -> bool:
        return self.approval_status == ApprovalStatus.PENDING.value

    @property
    def can_sell(self) -> bool:
        """Active and approved sellers may list products and receive reviews."""
        return self.is_active and self.is_approved

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def _assert_status_transition(self, target):
        current = SellerStatus(self.status)
        if target not in _STATUS_TRANSITIONS.get(current, set()):
            raise InvalidStateError({"status": [f"Cannot transition from {current.value} to {target.value}"]})

    def _assert_approval_transition(self, target):
        current = ApprovalStatus(self.approval_status)
        if target not in _APPROVAL_TRANSITIONS.get(current, set()):
            raise InvalidStateError(
                {"approval_status": [f"Cannot transition from {current.value} to {target.value}"]}
            )

    def approve(self):
        self._assert_approval_transition(ApprovalStatus.APPROVED)

        now = datetime.now(UTC)
        self.approval_status = ApprovalStatus.APPROVED.value
        self.rejection_reason = None
        self.approved_at = now
        self.updated_at = now

        self.raise_(SellerApproved(seller_id=str(self.id), approved_at=now))

    def reject(self, reason=None):
        self._assert_approval_transition(ApprovalStatus.REJECTED)

        now = datetime.now(UTC)
        self.approval_status = ApprovalStatus.REJECTED.value
        self.rejection_reason = reason
        self.rejected_at = now
        self.updated_at = now

        self.raise_(SellerRejected(seller_id=str(self.id), reason=reason, rejected_at=now))

    def suspend(self, reason=None):
        self._assert_status_transition(SellerStatus.SUSPENDED)

        now = datetime.now(UTC)
        self.status = SellerStatus.SUSPENDED.value
        self.suspension_reason = reason
        self.updated_at = now

        self.raise_(SellerSuspended(seller_id=str(self.id), reason=reason, suspended_at=now))

    def activate(self):
        self._assert_status_transition(SellerStatus.ACTIVE)

        now = datetime.now(UTC)
        previous = self.status
        self.status = SellerStatus.ACTIVE.value
        self.suspension_reason = None
        self.updated_at = now

        self.raise_(SellerActivated(seller_id=str(self.id), previous_status=previous, activated_at=now))

    def deactivate(self):
        self._assert_status_transition(SellerStatus.INACTIVE)

        now = datetime.now(UTC)
        self.status = SellerStatus.INACTIVE.value
        self.updated_at = now

        self.raise_(SellerDeactivated(seller_id=str(self.id), deactivated_at=now))

    def change_commission_rate(self, rate, min_rate=0.0, max_rate=100.0):
        if rate < min_rate or rate > max_rate:
            raise ValidationError({"commission_rate": [f"Commission rate must be between {min_rate} and {max_rate}"]})

        now = datetime.now(UTC)
        previous = self.commission_rate
        self.commission_rate = rate
        self.updated_at = now

        self.raise_(
            CommissionRateChanged(
                seller_id=str(self.id),
                previous_rate=previous,
                new_rate=rate,
                changed_at=now,
            )
        )

    def mark_deleted(self):
        """Record the admin deletion; the caller removes the record afterwards."""
        self.raise_(
            SellerDeleted(
                seller_id=str(self.id),
                customer_id=str(self.customer_id),
                subdomain=self.subdomain,
                deleted_at=datetime.now(UTC),
            )
        )

    # -------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------
    def refresh_rating(self, rating, review_count):
        self.rating = rating
        self.review_count = review_count

    def refresh_product_count(self, product_count):
        self.product_count = product_count

    def refresh_total_sales(self, total_sales):
        self.total_sales = total_sales

    def statistics(self) -> dict:
        return {
            "product_count": self.product_count,
            "review_count": self.review_count,
            "rating": self.rating,
            "total_sales": self.total_sales,
        }
