"""Listing aggregate: a catalog product offered by one seller.

The marketplace calls these "products": a listing joins a seller to an item
in the external catalog and carries the condition and approval flag the
marketplace adds on top. A seller lists a given product at most once;
``listing_key`` holds ``"<seller_id>:<product_id>"`` under a unique
constraint so the store enforces that too.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, String

from marketplace.domain import marketplace
from marketplace.listing.events import (
    ListingAdded,
    ListingApproved,
    ListingConditionChanged,
    ListingRejected,
    ListingRemoved,
)


class ProductCondition(Enum):
    NEW = "New"
    USED = "Used"
    REFURBISHED = "Refurbished"
    FOR_PARTS = "ForParts"


def listing_key(seller_id, product_id) -> str:
    return f"{seller_id}:{product_id}"


@marketplace.aggregate
class Listing:
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    listing_key = String(required=True, max_length=255, unique=True)
    condition = String(choices=ProductCondition, default=ProductCondition.NEW.value)
    is_approved = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def add(cls, seller_id, product_id, condition, approved=False):
        now = datetime.now(UTC)
        listing = cls(
            seller_id=seller_id,
            product_id=product_id,
            listing_key=listing_key(seller_id, product_id),
            condition=condition,
            is_approved=approved,
            created_at=now,
            updated_at=now,
        )
        listing.raise_(
            ListingAdded(
                listing_id=str(listing.id),
                seller_id=str(seller_id),
                product_id=str(product_id),
                condition=listing.condition,
                is_approved=approved,
                added_at=now,
            )
        )
        return listing

    @property
    def approval_status(self) -> str:
        return "Approved" if self.is_approved else "Pending"

    def approve(self):
        now = datetime.now(UTC)
        self.is_approved = True
        self.updated_at = now
        self.raise_(
            ListingApproved(
                listing_id=str(self.id),
                seller_id=str(self.seller_id),
                product_id=str(self.product_id),
                approved_at=now,
            )
        )

    def reject(self, reason=None):
        now = datetime.now(UTC)
        self.is_approved = False
        self.updated_at = now
        self.raise_(
            ListingRejected(
                listing_id=str(self.id),
                seller_id=str(self.seller_id),
                product_id=str(self.product_id),
                reason=reason,
                rejected_at=now,
            )
        )

    def change_condition(self, condition):
        now = datetime.now(UTC)
        previous = self.condition
        self.condition = condition
        self.updated_at = now
        self.raise_(
            ListingConditionChanged(
                listing_id=str(self.id),
                seller_id=str(self.seller_id),
                product_id=str(self.product_id),
                previous_condition=previous,
                new_condition=self.condition,
                changed_at=now,
            )
        )

    def mark_removed(self):
        self.raise_(
            ListingRemoved(
                listing_id=str(self.id),
                seller_id=str(self.seller_id),
                product_id=str(self.product_id),
                removed_at=datetime.now(UTC),
            )
        )
