"""UpdateSellerReview: change the rating or text of an existing review.

When ``customer_id`` is given it must match the review author; admin edits
omit it. The approval flag is left as it is.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.exceptions import guarded
from marketplace.review.review import (
    COMMENT_MAX_LENGTH,
    MAX_RATING,
    MIN_RATING,
    TITLE_MAX_LENGTH,
    SellerReview,
)


@marketplace.command(part_of="SellerReview")
class UpdateSellerReview:
    review_id = Identifier(required=True)
    customer_id = Identifier()
    rating = Integer()
    title = String(max_length=TITLE_MAX_LENGTH)
    comment = String(max_length=COMMENT_MAX_LENGTH)


@marketplace.command_handler(part_of=SellerReview)
class UpdateSellerReviewHandler:
    @handle(UpdateSellerReview)
    def update_review(self, command):
        if command.rating is not None and not MIN_RATING <= command.rating <= MAX_RATING:
            raise ValidationError({"rating": [f"Rating must be between {MIN_RATING} and {MAX_RATING}"]})

        kwargs = {}
        if command.rating is not None:
            kwargs["rating"] = command.rating
        if command.title is not None:
            kwargs["title"] = command.title
        if command.comment is not None:
            kwargs["comment"] = command.comment

        with guarded("update_review", review_id=str(command.review_id)):
            repo = current_domain.repository_for(SellerReview)
            review = repo.get(command.review_id)

            if command.customer_id is not None and str(review.customer_id) != str(command.customer_id):
                raise ValidationError({"customer_id": ["Only the review author can edit this review"]})

            review.update(**kwargs)
            repo.add(review)
