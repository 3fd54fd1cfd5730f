"""Read-only review queries.

Averages are computed from the approved reviews themselves, not from the
seller's stored statistics, so they are also usable to check those.
"""

from protean.utils.globals import current_domain

from marketplace.review.review import MAX_RATING, MIN_RATING, SellerReview
from marketplace.utils.queries import fetch_all

RECENT_REVIEWS_LIMIT = 5


def _repo():
    return current_domain.repository_for(SellerReview)


def _average(ratings) -> float:
    if not ratings:
        return 0.0
    return round(sum(ratings) / len(ratings), 2)


def get_seller_reviews(seller_id, approved_only: bool = True) -> list[SellerReview]:
    filters = {"is_approved": True} if approved_only else {}
    return fetch_all(_repo().query_by_seller(seller_id, **filters))


def get_customer_reviews(customer_id) -> list[SellerReview]:
    return fetch_all(_repo().query_all(customer_id=str(customer_id)))


def get_recent_reviews(seller_id=None, limit: int = RECENT_REVIEWS_LIMIT) -> list[SellerReview]:
    query = _repo().query_by_seller(seller_id) if seller_id else _repo().query_all()
    return list(query.limit(limit).all().items)


def approved_rating_summary(seller_id) -> tuple[float, int]:
    """``(average, count)`` over the seller's approved reviews; ``(0.0, 0)`` when none."""
    ratings = [review.rating for review in get_seller_reviews(seller_id)]
    return _average(ratings), len(ratings)


def get_seller_average_rating(seller_id) -> float:
    return approved_rating_summary(seller_id)[0]


def get_seller_review_count(seller_id) -> int:
    return _repo().count(seller_id=str(seller_id), is_approved=True)


def get_seller_rating_distribution(seller_id) -> dict[int, int]:
    distribution = {score: 0 for score in range(MIN_RATING, MAX_RATING + 1)}
    for review in get_seller_reviews(seller_id):
        distribution[review.rating] += 1
    return distribution


def get_seller_reviews_summary(seller_id) -> dict:
    average, count = approved_rating_summary(seller_id)
    return {
        "average_rating": average,
        "review_count": count,
        "rating_distribution": get_seller_rating_distribution(seller_id),
    }


def get_review_statistics(seller_id=None) -> dict:
    """Marketplace-wide review statistics, or one seller's when ``seller_id`` is given."""
    reviews = get_seller_reviews(seller_id, approved_only=False) if seller_id else fetch_all(_repo().query_all())
    approved = [review.rating for review in reviews if review.is_approved]
    return {
        "total_reviews": len(reviews),
        "approved_reviews": len(approved),
        "pending_reviews": len(reviews) - len(approved),
        "average_rating": _average(approved),
        "recent_reviews": get_recent_reviews(seller_id),
    }
