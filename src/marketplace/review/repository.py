"""Repository for the SellerReview aggregate."""

from marketplace.domain import marketplace
from marketplace.review.review import SellerReview


@marketplace.repository(part_of=SellerReview)
class SellerReviewRepository:
    def find_by_customer_and_seller(self, customer_id, seller_id) -> SellerReview | None:
        return self._dao.query.filter(customer_id=str(customer_id), seller_id=str(seller_id)).all().first

    def query_by_seller(self, seller_id, **filters):
        return self._dao.query.filter(seller_id=str(seller_id), **filters).order_by("-created_at")

    def query_all(self, **filters):
        query = self._dao.query.filter(**filters) if filters else self._dao.query
        return query.order_by("-created_at")

    def count(self, **filters) -> int:
        query = self._dao.query.filter(**filters) if filters else self._dao.query
        return query.all().total

    def discard(self, review: SellerReview) -> None:
        self._dao.delete(review)
