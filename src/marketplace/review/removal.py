"""DeleteSellerReview: remove a review and withdraw it from the seller's rating."""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.exceptions import guarded
from marketplace.review.review import SellerReview

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="SellerReview")
class DeleteSellerReview:
    review_id = Identifier(required=True)


@marketplace.command_handler(part_of=SellerReview)
class DeleteSellerReviewHandler:
    @handle(DeleteSellerReview)
    def delete_review(self, command):
        with guarded("delete_review", review_id=str(command.review_id)):
            repo = current_domain.repository_for(SellerReview)
            review = repo.get(command.review_id)
            review.mark_deleted()
            repo.add(review)
            repo.discard(review)

        logger.info("Seller review deleted", review_id=str(command.review_id))
