"""Read-only seller queries, including the seller dashboard."""

from protean.utils.globals import current_domain

from marketplace.listing.queries import get_seller_product_statistics
from marketplace.message.queries import get_recent_messages, get_unread_message_count
from marketplace.review.queries import get_recent_reviews, get_seller_rating_distribution
from marketplace.seller.seller import Seller
from marketplace.utils.queries import fetch_all, paginate


def _repo():
    return current_domain.repository_for(Seller)


def get_seller(seller_id) -> Seller:
    return _repo().get(str(seller_id))


def get_seller_by_customer(customer_id) -> Seller | None:
    return _repo().find_by_customer(customer_id)


def get_seller_by_subdomain(subdomain: str) -> Seller:
    return _repo().get_by_subdomain(subdomain)


def list_sellers(page_size: int = 20, current_page: int = 1, **filters) -> dict:
    query = _repo()._dao.query.filter(**filters) if filters else _repo()._dao.query
    return paginate(query.order_by("-registered_at"), page_size, current_page)


def get_sellers(**filters) -> list[Seller]:
    query = _repo()._dao.query.filter(**filters) if filters else _repo()._dao.query
    return fetch_all(query.order_by("-registered_at"))


def get_dashboard_data(seller_id) -> dict:
    seller = get_seller(seller_id)
    return {
        "seller": seller,
        "statistics": seller.statistics(),
        "products": get_seller_product_statistics(seller_id),
        "rating_distribution": get_seller_rating_distribution(seller_id),
        "recent_reviews": get_recent_reviews(seller_id),
        "recent_messages": get_recent_messages(seller_id, is_seller=True),
        "unread_messages": get_unread_message_count(seller_id, is_seller=True),
    }
