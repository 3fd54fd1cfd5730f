"""Domain events for the Sale aggregate."""

from protean.fields import DateTime, Float, Identifier

from marketplace.domain import marketplace


@marketplace.event(part_of="Sale")
class SaleRecorded:
    """A completed order line was attributed to a seller."""

    __version__ = 1

    sale_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)
    amount = Float(required=True)
    recorded_at = DateTime(required=True)
