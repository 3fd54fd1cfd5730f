"""Catalog membership: attaching products to sellers and moderating listings.

AddListing enforces, in order: marketplace enabled, a known condition the
policy accepts, the seller's listing quota, one listing per product per
seller, and a seller that is both Active and Approved.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.exceptions import (
    ConflictError,
    InvalidStateError,
    PolicyViolationError,
    QuotaExceededError,
    guarded,
)
from marketplace.listing.listing import Listing, ProductCondition
from marketplace.policy import get_policy
from marketplace.seller.seller import Seller
from marketplace.utils.bulk import run_bulk

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Listing")
class AddListing:
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    condition = String(max_length=20, default=ProductCondition.NEW.value)


@marketplace.command(part_of="Listing")
class RemoveListing:
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)


@marketplace.command(part_of="Listing")
class ApproveListing:
    listing_id = Identifier(required=True)


@marketplace.command(part_of="Listing")
class RejectListing:
    listing_id = Identifier(required=True)
    reason = Text()


@marketplace.command(part_of="Listing")
class ChangeListingCondition:
    seller_id = Identifier(required=True)
    product_id = Identifier(required=True)
    condition = String(required=True, max_length=20)


def validate_condition(condition: str) -> str:
    """Return the condition if it is known and allowed by policy."""
    valid = [c.value for c in ProductCondition]
    if condition not in valid:
        raise ValidationError({"condition": [f"Invalid product condition '{condition}'. Expected one of: {', '.join(valid)}"]})
    if condition != ProductCondition.NEW.value and not get_policy().allow_used_products:
        raise PolicyViolationError({"condition": ["Only new products may be listed on this marketplace"]})
    return condition


def check_quota(seller_id) -> None:
    policy = get_policy()
    if not policy.has_product_quota():
        return
    count = current_domain.repository_for(Listing).count_for_seller(seller_id)
    if count >= policy.max_products_per_seller:
        raise QuotaExceededError(
            {"product_id": [f"Seller has reached the maximum of {policy.max_products_per_seller} products"]}
        )


@marketplace.command_handler(part_of=Listing)
class ListingMembershipHandler:
    @handle(AddListing)
    def add_listing(self, command):
        with guarded("add_listing", seller_id=str(command.seller_id), product_id=str(command.product_id)):
            if not get_policy().enabled:
                raise PolicyViolationError({"marketplace": ["Marketplace is not enabled"]})
            condition = validate_condition(command.condition or ProductCondition.NEW.value)

            seller = current_domain.repository_for(Seller).get(command.seller_id)
            check_quota(command.seller_id)

            repo = current_domain.repository_for(Listing)
            if repo.find_by_seller_and_product(command.seller_id, command.product_id) is not None:
                raise ConflictError({"product_id": ["Product is already listed by this seller"]})

            if not seller.can_sell:
                raise InvalidStateError({"seller_id": ["Seller must be active and approved to add products"]})

            listing = Listing.add(
                seller_id=command.seller_id,
                product_id=command.product_id,
                condition=condition,
                approved=get_policy().listings_auto_approved,
            )
            repo.add(listing)

        logger.info(
            "Listing added",
            listing_id=str(listing.id),
            seller_id=str(command.seller_id),
            product_id=str(command.product_id),
            is_approved=listing.is_approved,
        )
        return str(listing.id)

    @handle(RemoveListing)
    def remove_listing(self, command):
        with guarded("remove_listing", seller_id=str(command.seller_id), product_id=str(command.product_id)):
            repo = current_domain.repository_for(Listing)
            listing = repo.get_by_seller_and_product(command.seller_id, command.product_id)
            listing.mark_removed()
            repo.add(listing)
            repo.discard(listing)

        logger.info("Listing removed", seller_id=str(command.seller_id), product_id=str(command.product_id))

    @handle(ApproveListing)
    def approve_listing(self, command):
        with guarded("approve_listing", listing_id=str(command.listing_id)):
            repo = current_domain.repository_for(Listing)
            listing = repo.get(command.listing_id)
            listing.approve()
            repo.add(listing)

        logger.info("Listing approved", listing_id=str(command.listing_id))

    @handle(RejectListing)
    def reject_listing(self, command):
        with guarded("reject_listing", listing_id=str(command.listing_id)):
            repo = current_domain.repository_for(Listing)
            listing = repo.get(command.listing_id)
            listing.reject(command.reason)
            repo.add(listing)

        logger.info("Listing rejected", listing_id=str(command.listing_id), reason=command.reason)

    @handle(ChangeListingCondition)
    def change_condition(self, command):
        condition = validate_condition(command.condition)
        with guarded("change_listing_condition", seller_id=str(command.seller_id)):
            repo = current_domain.repository_for(Listing)
            listing = repo.get_by_seller_and_product(command.seller_id, command.product_id)
            listing.change_condition(condition)
            repo.add(listing)


def bulk_approve_listings(listing_ids) -> dict:
    return run_bulk(
        listing_ids,
        lambda listing_id: current_domain.process(ApproveListing(listing_id=listing_id), asynchronous=False),
        "listing_id",
    )


def bulk_reject_listings(listing_ids, reason=None) -> dict:
    return run_bulk(
        listing_ids,
        lambda listing_id: current_domain.process(
            RejectListing(listing_id=listing_id, reason=reason), asynchronous=False
        ),
        "listing_id",
    )
