"""Domain events for the SellerReview aggregate.

Every event carries ``seller_id`` so the seller's rating can be recomputed
without loading the review again (it may already be deleted).
"""

from protean.fields import Boolean, DateTime, Identifier, Integer, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="SellerReview")
class SellerReviewSubmitted:
    __version__ = 1

    review_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier()
    rating = Integer(required=True)
    title = String(max_length=255)
    is_approved = Boolean(required=True)
    submitted_at = DateTime(required=True)


@marketplace.event(part_of="SellerReview")
class SellerReviewApproved:
    __version__ = 1

    review_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    rating = Integer(required=True)
    approved_at = DateTime(required=True)


@marketplace.event(part_of="SellerReview")
class SellerReviewRejected:
    __version__ = 1

    review_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    reason = Text()
    rejected_at = DateTime(required=True)


@marketplace.event(part_of="SellerReview")
class SellerReviewUpdated:
    __version__ = 1

    review_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    rating = Integer(required=True)
    updated_at = DateTime(required=True)


@marketplace.event(part_of="SellerReview")
class SellerReviewDeleted:
    __version__ = 1

    review_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    deleted_at = DateTime(required=True)
