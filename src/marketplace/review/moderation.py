"""Review moderation: approve or reject seller reviews, singly or in bulk."""

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.exceptions import guarded
from marketplace.review.review import SellerReview
from marketplace.utils.bulk import run_bulk

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="SellerReview")
class ApproveSellerReview:
    review_id = Identifier(required=True)


@marketplace.command(part_of="SellerReview")
class RejectSellerReview:
    review_id = Identifier(required=True)
    reason = Text()


@marketplace.command_handler(part_of=SellerReview)
class ReviewModerationHandler:
    @handle(ApproveSellerReview)
    def approve_review(self, command):
        with guarded("approve_review", review_id=str(command.review_id)):
            repo = current_domain.repository_for(SellerReview)
            review = repo.get(command.review_id)
            review.approve()
            repo.add(review)

        logger.info("Seller review approved", review_id=str(command.review_id))

    @handle(RejectSellerReview)
    def reject_review(self, command):
        with guarded("reject_review", review_id=str(command.review_id)):
            repo = current_domain.repository_for(SellerReview)
            review = repo.get(command.review_id)
            review.reject(command.reason)
            repo.add(review)

        logger.info("Seller review rejected", review_id=str(command.review_id), reason=command.reason)


def bulk_approve_reviews(review_ids) -> dict:
    return run_bulk(
        review_ids,
        lambda review_id: current_domain.process(ApproveSellerReview(review_id=review_id), asynchronous=False),
        "review_id",
    )


def bulk_reject_reviews(review_ids, reason=None) -> dict:
    return run_bulk(
        review_ids,
        lambda review_id: current_domain.process(
            RejectSellerReview(review_id=review_id, reason=reason), asynchronous=False
        ),
        "review_id",
    )
