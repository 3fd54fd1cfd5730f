"""Admin operations: marketplace statistics, the approval queue, bulk moderation.

Single-seller actions go through the lifecycle commands, so admin and
storefront callers share the same rules and events.
"""

import pydantic
import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from marketplace.exceptions import guarded
from marketplace.listing.listing import Listing
from marketplace.message.message import Message
from marketplace.policy import configure_policy, get_policy
from marketplace.projections.seller_activity import DEFAULT_ACTIVITY_LIMIT, get_seller_activity_log
from marketplace.review.review import SellerReview
from marketplace.seller.lifecycle import ApproveSeller, RejectSeller, UpdateSellerStatus
from marketplace.seller.seller import ApprovalStatus, Seller
from marketplace.utils.bulk import run_bulk
from marketplace.utils.queries import fetch_all, paginate

logger = structlog.get_logger(__name__)


def get_stats() -> dict:
    with guarded("retrieve_marketplace_statistics"):
        sellers = current_domain.repository_for(Seller)
        reviews = current_domain.repository_for(SellerReview)
        approved_ratings = [r.rating for r in fetch_all(reviews.query_all(is_approved=True))]

        return {
            "total_sellers": sellers.count(),
            "pending_sellers": sellers.count(approval_status=ApprovalStatus.PENDING.value),
            "approved_sellers": sellers.count(approval_status=ApprovalStatus.APPROVED.value),
            "total_products": current_domain.repository_for(Listing).count(),
            "total_reviews": reviews.count(),
            "total_messages": current_domain.repository_for(Message).count(),
            "average_rating": round(sum(approved_ratings) / len(approved_ratings), 2) if approved_ratings else 0.0,
        }


def get_pending_sellers(page_size: int = 20, current_page: int = 1) -> dict:
    with guarded("retrieve_pending_sellers"):
        query = current_domain.repository_for(Seller).query_by_approval_status(ApprovalStatus.PENDING.value)
        return paginate(query, page_size, current_page)


def approve_seller(seller_id) -> bool:
    current_domain.process(ApproveSeller(seller_id=seller_id), asynchronous=False)
    return True


def reject_seller(seller_id, reason=None) -> bool:
    current_domain.process(RejectSeller(seller_id=seller_id, reason=reason), asynchronous=False)
    return True


def update_seller_status(seller_id, status: str, reason=None) -> bool:
    current_domain.process(
        UpdateSellerStatus(seller_id=seller_id, status=status, reason=reason),
        asynchronous=False,
    )
    return True


def bulk_approve_sellers(seller_ids) -> dict:
    result = run_bulk(seller_ids, approve_seller, "seller_id")
    logger.info("Bulk seller approval", succeeded=len(result["success"]), failed=len(result["failed"]))
    return result


def bulk_reject_sellers(seller_ids, reason=None) -> dict:
    result = run_bulk(seller_ids, lambda seller_id: reject_seller(seller_id, reason), "seller_id")
    logger.info("Bulk seller rejection", succeeded=len(result["success"]), failed=len(result["failed"]))
    return result


def get_activity_log(seller_id, limit: int = DEFAULT_ACTIVITY_LIMIT) -> list:
    # Raises ObjectNotFoundError for unknown sellers
    current_domain.repository_for(Seller).get(str(seller_id))
    return get_seller_activity_log(seller_id, limit)


def get_configuration() -> dict:
    return get_policy().model_dump()


def update_configuration(**changes) -> dict:
    """Apply configuration changes atomically; an invalid change leaves the policy untouched."""
    try:
        policy = configure_policy(**changes)
    except pydantic.ValidationError as exc:
        messages = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "_entity"
            messages.setdefault(field, []).append(error["msg"])
        raise ValidationError(messages) from exc

    logger.info("Marketplace configuration updated", changes=sorted(changes))
    return policy.model_dump()
