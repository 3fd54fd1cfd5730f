"""SellerReview aggregate: a customer's rating of a seller.

Unlike product reviews, approval is a single flag: a review either counts
towards the seller's rating (``is_approved``) or it does not. Rejecting an
approved review withdraws it; approving a rejected one reinstates it.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from marketplace.domain import marketplace
from marketplace.review.events import (
    SellerReviewApproved,
    SellerReviewDeleted,
    SellerReviewRejected,
    SellerReviewSubmitted,
    SellerReviewUpdated,
)

MIN_RATING = 1
MAX_RATING = 5
TITLE_MAX_LENGTH = 255
COMMENT_MAX_LENGTH = 1000

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


@marketplace.aggregate
class SellerReview:
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier()
    rating = Integer(required=True)
    title = String(max_length=TITLE_MAX_LENGTH)
    comment = String(max_length=COMMENT_MAX_LENGTH)
    is_approved = Boolean(default=False)
    rejection_reason = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def rating_must_be_in_range(self):
        if self.rating is not None and not MIN_RATING <= self.rating <= MAX_RATING:
            raise ValidationError({"rating": [f"Rating must be between {MIN_RATING} and {MAX_RATING}"]})

    @classmethod
    def submit(cls, seller_id, customer_id, rating, title=None, comment=None, order_id=None, approved=False):
        now = datetime.now(UTC)
        review = cls(
            seller_id=seller_id,
            customer_id=customer_id,
            order_id=order_id,
            rating=rating,
            title=title,
            comment=comment,
            is_approved=approved,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            SellerReviewSubmitted(
                review_id=str(review.id),
                seller_id=str(seller_id),
                customer_id=str(customer_id),
                order_id=str(order_id) if order_id else None,
                rating=rating,
                title=title,
                is_approved=approved,
                submitted_at=now,
            )
        )
        return review

    def approve(self):
        now = datetime.now(UTC)
        self.is_approved = True
        self.rejection_reason = None
        self.updated_at = now
        self.raise_(
            SellerReviewApproved(
                review_id=str(self.id),
                seller_id=str(self.seller_id),
                rating=self.rating,
                approved_at=now,
            )
        )

    def reject(self, reason=None):
        now = datetime.now(UTC)
        self.is_approved = False
        self.rejection_reason = reason
        self.updated_at = now
        self.raise_(
            SellerReviewRejected(
                review_id=str(self.id),
                seller_id=str(self.seller_id),
                reason=reason,
                rejected_at=now,
            )
        )

    def update(self, rating=_UNSET, title=_UNSET, comment=_UNSET):
        """Apply a partial update. Approval state is left unchanged."""
        if rating is not _UNSET:
            self.rating = rating
        if title is not _UNSET:
            self.title = title
        if comment is not _UNSET:
            self.comment = comment

        now = datetime.now(UTC)
        self.updated_at = now
        self.raise_(
            SellerReviewUpdated(
                review_id=str(self.id),
                seller_id=str(self.seller_id),
                rating=self.rating,
                updated_at=now,
            )
        )

    def mark_deleted(self):
        self.raise_(
            SellerReviewDeleted(
                review_id=str(self.id),
                seller_id=str(self.seller_id),
                customer_id=str(self.customer_id),
                deleted_at=datetime.now(UTC),
            )
        )
