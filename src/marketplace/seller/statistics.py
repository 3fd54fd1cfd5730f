"""Seller statistics: keeps the seller's materialized counters consistent.

``rating``, ``review_count``, ``product_count`` and ``total_sales`` are
recomputed in full from their source records whenever a review, listing or
sale changes. The handlers run after the triggering change has committed and
never increment: every run reads all source records afresh, so the handler
that runs last writes counters covering every committed change. Each handler
body runs in its own unit of work, which is where the seller write commits.
"""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from marketplace.domain import marketplace
from marketplace.listing.events import ListingAdded, ListingRemoved
from marketplace.listing.listing import Listing
from marketplace.review.events import (
    SellerReviewApproved,
    SellerReviewDeleted,
    SellerReviewRejected,
    SellerReviewSubmitted,
    SellerReviewUpdated,
)
from marketplace.review.queries import approved_rating_summary
from marketplace.review.review import SellerReview
from marketplace.sale.events import SaleRecorded
from marketplace.sale.sale import Sale
from marketplace.seller.seller import Seller
from marketplace.utils.queries import fetch_all

logger = structlog.get_logger(__name__)


def _refresh(seller_id, apply) -> Seller | None:
    repo = current_domain.repository_for(Seller)
    try:
        seller = repo.get(str(seller_id))
    except ObjectNotFoundError:
        logger.warning("Seller missing during statistics refresh", seller_id=str(seller_id))
        return None
    apply(seller)
    repo.add(seller)
    return seller


def update_seller_rating(seller_id) -> Seller | None:
    """Recompute ``rating`` and ``review_count`` from the approved reviews."""

    def apply(seller):
        average, count = approved_rating_summary(seller_id)
        seller.refresh_rating(average, count)
        logger.debug("Seller rating refreshed", seller_id=str(seller_id), rating=average, review_count=count)

    return _refresh(seller_id, apply)


def update_seller_product_count(seller_id) -> Seller | None:
    def apply(seller):
        seller.refresh_product_count(current_domain.repository_for(Listing).count_for_seller(seller_id))

    return _refresh(seller_id, apply)


def update_seller_total_sales(seller_id) -> Seller | None:
    def apply(seller):
        sales = fetch_all(current_domain.repository_for(Sale).query_by_seller(seller_id))
        seller.refresh_total_sales(round(sum(sale.amount for sale in sales), 2))

    return _refresh(seller_id, apply)


@marketplace.event_handler(part_of=SellerReview)
class SellerRatingHandler:
    @handle(SellerReviewSubmitted)
    def on_submitted(self, event: SellerReviewSubmitted) -> None:
        update_seller_rating(event.seller_id)

    @handle(SellerReviewApproved)
    def on_approved(self, event: SellerReviewApproved) -> None:
        update_seller_rating(event.seller_id)

    @handle(SellerReviewRejected)
    def on_rejected(self, event: SellerReviewRejected) -> None:
        update_seller_rating(event.seller_id)

    @handle(SellerReviewUpdated)
    def on_updated(self, event: SellerReviewUpdated) -> None:
        update_seller_rating(event.seller_id)

    @handle(SellerReviewDeleted)
    def on_deleted(self, event: SellerReviewDeleted) -> None:
        update_seller_rating(event.seller_id)


@marketplace.event_handler(part_of=Listing)
class SellerProductCountHandler:
    @handle(ListingAdded)
    def on_added(self, event: ListingAdded) -> None:
        update_seller_product_count(event.seller_id)

    @handle(ListingRemoved)
    def on_removed(self, event: ListingRemoved) -> None:
        update_seller_product_count(event.seller_id)


@marketplace.event_handler(part_of=Sale)
class SellerSalesHandler:
    @handle(SaleRecorded)
    def on_sale_recorded(self, event: SaleRecorded) -> None:
        update_seller_total_sales(event.seller_id)
