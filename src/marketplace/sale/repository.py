"""Repository for the Sale aggregate."""

from marketplace.domain import marketplace
from marketplace.sale.sale import Sale, sale_key


@marketplace.repository(part_of=Sale)
class SaleRepository:
    def find_by_seller_and_order(self, seller_id, order_id) -> Sale | None:
        return self._dao.query.filter(sale_key=sale_key(seller_id, order_id)).all().first

    def has_purchased_from(self, customer_id, seller_id) -> bool:
        return self._dao.query.filter(customer_id=str(customer_id), seller_id=str(seller_id)).all().total > 0

    def query_by_seller(self, seller_id):
        return self._dao.query.filter(seller_id=str(seller_id)).order_by("-recorded_at")
