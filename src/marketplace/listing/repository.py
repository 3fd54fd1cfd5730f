"""Repository for the Listing aggregate."""

from protean.exceptions import ObjectNotFoundError

from marketplace.domain import marketplace
from marketplace.listing.listing import Listing, listing_key


@marketplace.repository(part_of=Listing)
class ListingRepository:
    def find_by_seller_and_product(self, seller_id, product_id) -> Listing | None:
        return self._dao.query.filter(listing_key=listing_key(seller_id, product_id)).all().first

    def get_by_seller_and_product(self, seller_id, product_id) -> Listing:
        listing = self.find_by_seller_and_product(seller_id, product_id)
        if listing is None:
            raise ObjectNotFoundError(
                {"product_id": [f"Product {product_id} is not listed by seller {seller_id}"]}
            )
        return listing

    def query_by_seller(self, seller_id, **filters):
        return self._dao.query.filter(seller_id=str(seller_id), **filters).order_by("-created_at")

    def query_by_condition(self, condition: str):
        return self._dao.query.filter(condition=condition).order_by("-created_at")

    def count(self, **filters) -> int:
        query = self._dao.query.filter(**filters) if filters else self._dao.query
        return query.all().total

    def count_for_seller(self, seller_id, **filters) -> int:
        return self.count(seller_id=str(seller_id), **filters)

    def discard(self, listing: Listing) -> None:
        self._dao.delete(listing)
