"""Domain events for the Seller aggregate."""

from protean.fields import DateTime, Float, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Seller")
class SellerRegistered:
    """A customer registered as a marketplace seller."""

    __version__ = 1

    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    company_name = String(required=True)
    subdomain = String(required=True)
    status = String(required=True)
    approval_status = String(required=True)
    commission_rate = Float()
    registered_at = DateTime(required=True)


@marketplace.event(part_of="Seller")
class SellerApproved:
    """An admin approved the seller to trade on the marketplace."""

    __version__ = 1

    seller_id = Identifier(required=True)
    approved_at = DateTime(required=True)


@marketplace.event(part_of="Seller")
class SellerRejected:
    """An admin rejected the seller application."""

    __version__ = 1

    seller_id = Identifier(required=True)
    reason = Text()
    rejected_at = DateTime(required=True)


@marketplace.event(part_of="Seller")
class SellerSuspended:
    """An active seller was suspended."""

    __version__ = 1

    seller_id = Identifier(required=True)
    reason = Text()
    suspended_at = DateTime(required=True)


@marketplace.event(part_of="Seller")
class SellerActivated:
    """An inactive or suspended seller was (re)activated."""

    __version__ = 1

    seller_id = Identifier(required=True)
    previous_status = String(required=True)
    activated_at = DateTime(required=True)


@marketplace.event(part_of="Seller")
class SellerDeactivated:
    """An active seller was deactivated."""

    __version__ = 1

    seller_id = Identifier(required=True)
    deactivated_at = DateTime(required=True)


@marketplace.event(part_of="Seller")
class CommissionRateChanged:
    """The commission charged on a seller's sales changed."""

    __version__ = 1

    seller_id = Identifier(required=True)
    previous_rate = Float()
    new_rate = Float(required=True)
    changed_at = DateTime(required=True)


@marketplace.event(part_of="Seller")
class SellerDeleted:
    """An admin removed the seller record."""

    __version__ = 1

    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    subdomain = String()
    deleted_at = DateTime(required=True)
