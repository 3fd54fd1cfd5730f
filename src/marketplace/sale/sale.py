"""Sale aggregate: revenue attributed to a seller for one order.

Sales are the source of ``Seller.total_sales`` and of purchase-based
eligibility checks for reviews and messaging. ``sale_key`` holds
``"<seller_id>:<order_id>"`` under a unique constraint, so an order is
counted once per seller.
"""

from datetime import UTC, datetime

from protean.fields import DateTime, Float, Identifier, String

from marketplace.domain import marketplace
from marketplace.sale.events import SaleRecorded


def sale_key(seller_id, order_id) -> str:
    return f"{seller_id}:{order_id}"


@marketplace.aggregate
class Sale:
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)
    sale_key = String(required=True, max_length=255, unique=True)
    amount = Float(required=True, min_value=0.0)
    recorded_at = DateTime()

    @classmethod
    def record(cls, seller_id, customer_id, order_id, amount):
        now = datetime.now(UTC)
        sale = cls(
            seller_id=seller_id,
            customer_id=customer_id,
            order_id=order_id,
            sale_key=sale_key(seller_id, order_id),
            amount=amount,
            recorded_at=now,
        )
        sale.raise_(
            SaleRecorded(
                sale_id=str(sale.id),
                seller_id=str(seller_id),
                customer_id=str(customer_id),
                order_id=str(order_id),
                amount=amount,
                recorded_at=now,
            )
        )
        return sale
