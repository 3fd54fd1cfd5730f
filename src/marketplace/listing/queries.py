"""Read-only listing queries."""

from protean.utils.globals import current_domain

from marketplace.listing.listing import Listing, ProductCondition
from marketplace.policy import get_policy
from marketplace.utils.queries import fetch_all


def _repo():
    return current_domain.repository_for(Listing)


def get_seller_product_count(seller_id) -> int:
    return _repo().count_for_seller(seller_id)


def get_seller_approved_product_count(seller_id) -> int:
    return _repo().count_for_seller(seller_id, is_approved=True)


def get_seller_pending_product_count(seller_id) -> int:
    return _repo().count_for_seller(seller_id, is_approved=False)


def can_add_product(seller_id) -> bool:
    """True while the seller is below the listing quota (always, when unlimited)."""
    policy = get_policy()
    if not policy.has_product_quota():
        return True
    return get_seller_product_count(seller_id) < policy.max_products_per_seller


def product_exists_for_seller(seller_id, product_id) -> bool:
    return _repo().find_by_seller_and_product(seller_id, product_id) is not None


def get_product_approval_status(seller_id, product_id) -> str | None:
    """``Approved`` or ``Pending``; None when the product is not listed by the seller."""
    listing = _repo().find_by_seller_and_product(seller_id, product_id)
    return listing.approval_status if listing else None


def get_available_product_conditions() -> list[str]:
    if not get_policy().allow_used_products:
        return [ProductCondition.NEW.value]
    return [condition.value for condition in ProductCondition]


def get_seller_products(seller_id, **filters) -> list[Listing]:
    return fetch_all(_repo().query_by_seller(seller_id, **filters))


def get_products_by_condition(condition: str) -> list[Listing]:
    return fetch_all(_repo().query_by_condition(condition))


def get_seller_products_by_condition(seller_id, condition: str) -> list[Listing]:
    return get_seller_products(seller_id, condition=condition)


def get_seller_product_statistics(seller_id) -> dict:
    listings = get_seller_products(seller_id)
    by_condition = {condition.value: 0 for condition in ProductCondition}
    approved = 0
    for listing in listings:
        by_condition[listing.condition] = by_condition.get(listing.condition, 0) + 1
        if listing.is_approved:
            approved += 1

    policy = get_policy()
    return {
        "total": len(listings),
        "approved": approved,
        "pending": len(listings) - approved,
        "by_condition": by_condition,
        "max_products": policy.max_products_per_seller,
        "can_add_more": can_add_product(seller_id),
    }
