"""RecordSale: attribute a completed order to a seller."""

import structlog
from protean import handle
from protean.fields import Float, Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.exceptions import ConflictError, guarded
from marketplace.sale.sale import Sale
from marketplace.seller.seller import Seller

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Sale")
class RecordSale:
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)
    amount = Float(required=True, min_value=0.0)


@marketplace.command_handler(part_of=Sale)
class RecordSaleHandler:
    @handle(RecordSale)
    def record_sale(self, command):
        with guarded("record_sale", seller_id=str(command.seller_id), order_id=str(command.order_id)):
            current_domain.repository_for(Seller).get(command.seller_id)

            repo = current_domain.repository_for(Sale)
            if repo.find_by_seller_and_order(command.seller_id, command.order_id) is not None:
                raise ConflictError({"order_id": ["Sale already recorded for this order and seller"]})

            sale = Sale.record(
                seller_id=command.seller_id,
                customer_id=command.customer_id,
                order_id=command.order_id,
                amount=command.amount,
            )
            repo.add(sale)

        logger.info(
            "Sale recorded",
            seller_id=str(command.seller_id),
            order_id=str(command.order_id),
            amount=command.amount,
        )
        return str(sale.id)
