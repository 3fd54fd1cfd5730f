"""Domain events for the Listing aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String, Text

from marketplace.domain import marketplace


@marketplace.event(part_of="Listing")
class ListingAdded:
    """A seller attached a catalog product to their storefront."""

    __version__ = 1

    listing_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    condition = String(required=True)
    is_approved = Boolean(required=True)
    added_at = DateTime(required=True)


@marketplace.event(part_of="Listing")
class ListingApproved:
    __version__ = 1

    listing_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    approved_at = DateTime(required=True)


@marketplace.event(part_of="Listing")
class ListingRejected:
    """The rejection reason travels only on this event; it is not stored on the listing."""

    __version__ = 1

    listing_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    reason = Text()
    rejected_at = DateTime(required=True)


@marketplace.event(part_of="Listing")
class ListingConditionChanged:
    __version__ = 1

    listing_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_condition = String()
    new_condition = String(required=True)
    changed_at = DateTime(required=True)


@marketplace.event(part_of="Listing")
class ListingRemoved:
    __version__ = 1

    listing_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    removed_at = DateTime(required=True)
