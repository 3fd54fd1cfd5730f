"""Repository for the Seller aggregate."""

from protean.exceptions import ObjectNotFoundError

from marketplace.domain import marketplace
from marketplace.seller.seller import Seller


@marketplace.repository(part_of=Seller)
class SellerRepository:
    def find_by_customer(self, customer_id) -> Seller | None:
        return self._dao.query.filter(customer_id=str(customer_id)).all().first

    def find_by_subdomain(self, subdomain: str) -> Seller | None:
        return self._dao.query.filter(subdomain=subdomain).all().first

    def get_by_subdomain(self, subdomain: str) -> Seller:
        seller = self.find_by_subdomain(subdomain)
        if seller is None:
            raise ObjectNotFoundError({"subdomain": [f"No seller with subdomain '{subdomain}'"]})
        return seller

    def query_by_approval_status(self, approval_status: str):
        """Newest registrations first; page with ``marketplace.utils.queries.paginate``."""
        return self._dao.query.filter(approval_status=approval_status).order_by("-registered_at")

    def count(self, **filters) -> int:
        query = self._dao.query.filter(**filters) if filters else self._dao.query
        return query.all().total

    def discard(self, seller: Seller) -> None:
        self._dao.delete(seller)
