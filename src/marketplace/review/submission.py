"""SubmitSellerReview: a customer rates a seller.

A customer reviews a given seller at most once. When the policy requires a
purchase, the customer must have a recorded sale with that seller. Reviews
start unapproved while moderation is required.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.exceptions import ConflictError, InvalidStateError, PolicyViolationError, guarded
from marketplace.policy import get_policy
from marketplace.review.review import (
    COMMENT_MAX_LENGTH,
    MAX_RATING,
    MIN_RATING,
    TITLE_MAX_LENGTH,
    SellerReview,
)
from marketplace.sale.sale import Sale
from marketplace.seller.seller import Seller

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="SellerReview")
class SubmitSellerReview:
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(max_length=TITLE_MAX_LENGTH)
    comment = String(max_length=COMMENT_MAX_LENGTH)
    order_id = Identifier()


def has_customer_reviewed_seller(customer_id, seller_id) -> bool:
    repo = current_domain.repository_for(SellerReview)
    return repo.find_by_customer_and_seller(customer_id, seller_id) is not None


def can_customer_review_seller(customer_id, seller_id) -> bool:
    """Purchase-based eligibility. Always True unless the policy requires a purchase."""
    if not get_policy().purchase_required_for_rating:
        return True
    return current_domain.repository_for(Sale).has_purchased_from(customer_id, seller_id)


@marketplace.command_handler(part_of=SellerReview)
class SubmitSellerReviewHandler:
    @handle(SubmitSellerReview)
    def submit_review(self, command):
        policy = get_policy()
        if not policy.rating_enabled:
            raise PolicyViolationError({"rating": ["Seller ratings are disabled"]})

        if not MIN_RATING <= command.rating <= MAX_RATING:
            raise ValidationError({"rating": [f"Rating must be between {MIN_RATING} and {MAX_RATING}"]})

        with guarded("submit_review", seller_id=str(command.seller_id), customer_id=str(command.customer_id)):
            seller = current_domain.repository_for(Seller).get(command.seller_id)
            if not seller.can_sell:
                raise InvalidStateError({"seller_id": ["Seller is not accepting reviews"]})

            if not can_customer_review_seller(command.customer_id, command.seller_id):
                raise PolicyViolationError(
                    {"customer_id": ["A purchase from this seller is required before reviewing"]}
                )

            if has_customer_reviewed_seller(command.customer_id, command.seller_id):
                raise ConflictError({"customer_id": ["You have already reviewed this seller"]})

            review = SellerReview.submit(
                seller_id=command.seller_id,
                customer_id=command.customer_id,
                rating=command.rating,
                title=command.title,
                comment=command.comment,
                order_id=command.order_id,
                approved=not policy.review_moderation_required,
            )
            current_domain.repository_for(SellerReview).add(review)

        logger.info(
            "Seller review submitted",
            review_id=str(review.id),
            seller_id=str(command.seller_id),
            rating=command.rating,
            is_approved=review.is_approved,
        )
        return str(review.id)
