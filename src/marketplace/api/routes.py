"""FastAPI routes for the Marketplace bounded context.

Each route translates between Pydantic schemas (external contract) and
Protean commands or marketplace queries. The admin routes keep the paths and
payloads the admin dashboard already uses.
"""

from typing import Any

from fastapi import APIRouter, Body, Query
from protean.utils.globals import current_domain

from marketplace.admin import management
from marketplace.api.schemas import (
    ActivityResponse,
    AddListingRequest,
    BulkListingsRequest,
    BulkResultResponse,
    BulkReviewsRequest,
    BulkSellersRequest,
    ChangeConditionRequest,
    CommissionRateRequest,
    ConversationRequest,
    CountResponse,
    DashboardResponse,
    ListingIdResponse,
    ListingResponse,
    MarkAllReadRequest,
    MessageIdResponse,
    MessageResponse,
    ReasonRequest,
    RecordSaleRequest,
    RegisterSellerRequest,
    ReplyMessageRequest,
    ReviewIdResponse,
    ReviewResponse,
    ReviewSummaryResponse,
    SaleIdResponse,
    SellerIdResponse,
    SellerPageResponse,
    SellerResponse,
    SendMessageRequest,
    StatsResponse,
    StatusResponse,
    SubmitReviewRequest,
    ThreadResponse,
    UpdateReviewRequest,
    UpdateStatusRequest,
)
from marketplace.listing import queries as listing_queries
from marketplace.listing.membership import (
    AddListing,
    ApproveListing,
    ChangeListingCondition,
    RejectListing,
    RemoveListing,
    bulk_approve_listings,
    bulk_reject_listings,
)
from marketplace.message import queries as message_queries
from marketplace.message.reading import (
    ArchiveConversation,
    DeleteMessage,
    MarkAllMessagesRead,
    MarkMessageRead,
    MarkMessageUnread,
    UnarchiveConversation,
)
from marketplace.message.sending import ReplyToMessage, SendMessage
from marketplace.review import queries as review_queries
from marketplace.review.editing import UpdateSellerReview
from marketplace.review.moderation import (
    ApproveSellerReview,
    RejectSellerReview,
    bulk_approve_reviews,
    bulk_reject_reviews,
)
from marketplace.review.removal import DeleteSellerReview
from marketplace.review.submission import SubmitSellerReview
from marketplace.sale.recording import RecordSale
from marketplace.seller import queries as seller_queries
from marketplace.seller.lifecycle import ChangeCommissionRate, DeleteSeller
from marketplace.seller.registration import RegisterSeller, is_subdomain_available
from marketplace.seller.statistics import (
    update_seller_product_count,
    update_seller_rating,
    update_seller_total_sales,
)
from marketplace.storefront.subdomain import resolve_subdomain, seller_store_config, seller_store_metadata

marketplace_router = APIRouter(prefix="/marketplace", tags=["marketplace"])
admin_router = APIRouter(prefix="/marketplace/admin", tags=["marketplace-admin"])


def _process(command):
    return current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# Sellers
# ---------------------------------------------------------------------------
@marketplace_router.post("/sellers", status_code=201, response_model=SellerIdResponse)
async def register_seller(body: RegisterSellerRequest) -> SellerIdResponse:
    """Register the customer as a seller."""
    seller_id = _process(RegisterSeller(**body.model_dump(exclude_none=True)))
    return SellerIdResponse(seller_id=seller_id)


@marketplace_router.get("/sellers", response_model=SellerPageResponse)
async def list_sellers(
    page_size: int = Query(20, alias="pageSize", ge=1),
    current_page: int = Query(1, alias="currentPage", ge=1),
    status: str | None = None,
    approval_status: str | None = None,
) -> SellerPageResponse:
    filters = {}
    if status:
        filters["status"] = status
    if approval_status:
        filters["approval_status"] = approval_status
    page = seller_queries.list_sellers(page_size, current_page, **filters)
    return SellerPageResponse(
        items=[SellerResponse.from_seller(s) for s in page["items"]],
        total=page["total"],
        page=page["page"],
        page_size=page["page_size"],
    )


@marketplace_router.get("/sellers/{seller_id}", response_model=SellerResponse)
async def get_seller(seller_id: str) -> SellerResponse:
    return SellerResponse.from_seller(seller_queries.get_seller(seller_id))


@marketplace_router.get("/sellers/{seller_id}/dashboard", response_model=DashboardResponse)
async def get_dashboard(seller_id: str) -> DashboardResponse:
    data = seller_queries.get_dashboard_data(seller_id)
    return DashboardResponse(
        seller=SellerResponse.from_seller(data["seller"]),
        statistics=data["statistics"],
        products=data["products"],
        rating_distribution=data["rating_distribution"],
        recent_reviews=[ReviewResponse.from_review(r) for r in data["recent_reviews"]],
        recent_messages=[MessageResponse.from_message(m) for m in data["recent_messages"]],
        unread_messages=data["unread_messages"],
    )


@marketplace_router.get("/subdomains/{subdomain}")
async def check_subdomain(subdomain: str) -> dict:
    return {"subdomain": subdomain, "available": is_subdomain_available(subdomain)}


@marketplace_router.get("/storefront")
async def resolve_storefront(host: str, path: str = "/") -> dict:
    """Resolve the seller storefront addressed by a host and path."""
    subdomain = resolve_subdomain(host, path)
    if subdomain is None:
        return {"subdomain": None, "config": {}, "meta": {}}
    return {
        "subdomain": subdomain,
        "config": seller_store_config(subdomain),
        "meta": seller_store_metadata(subdomain),
    }


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------
@marketplace_router.post("/sellers/{seller_id}/products", status_code=201, response_model=ListingIdResponse)
async def add_listing(seller_id: str, body: AddListingRequest) -> ListingIdResponse:
    listing_id = _process(AddListing(seller_id=seller_id, product_id=body.product_id, condition=body.condition))
    return ListingIdResponse(listing_id=listing_id)


@marketplace_router.get("/sellers/{seller_id}/products", response_model=list[ListingResponse])
async def list_seller_listings(seller_id: str, condition: str | None = None) -> list[ListingResponse]:
    if condition:
        listings = listing_queries.get_seller_products_by_condition(seller_id, condition)
    else:
        listings = listing_queries.get_seller_products(seller_id)
    return [ListingResponse.from_listing(item) for item in listings]


@marketplace_router.get("/sellers/{seller_id}/products/statistics")
async def seller_listing_statistics(seller_id: str) -> dict:
    return listing_queries.get_seller_product_statistics(seller_id)


@marketplace_router.delete("/sellers/{seller_id}/products/{product_id}", response_model=StatusResponse)
async def remove_listing(seller_id: str, product_id: str) -> StatusResponse:
    _process(RemoveListing(seller_id=seller_id, product_id=product_id))
    return StatusResponse()


@marketplace_router.put("/sellers/{seller_id}/products/{product_id}/condition", response_model=StatusResponse)
async def change_listing_condition(seller_id: str, product_id: str, body: ChangeConditionRequest) -> StatusResponse:
    _process(ChangeListingCondition(seller_id=seller_id, product_id=product_id, condition=body.condition))
    return StatusResponse()


@marketplace_router.get("/products", response_model=list[ListingResponse])
async def list_listings_by_condition(condition: str = "New") -> list[ListingResponse]:
    return [ListingResponse.from_listing(item) for item in listing_queries.get_products_by_condition(condition)]


@marketplace_router.get("/products/conditions")
async def available_conditions() -> list[str]:
    return listing_queries.get_available_product_conditions()


@marketplace_router.post("/products/{listing_id}/approve", response_model=StatusResponse)
async def approve_listing(listing_id: str) -> StatusResponse:
    _process(ApproveListing(listing_id=listing_id))
    return StatusResponse()


@marketplace_router.post("/products/{listing_id}/reject", response_model=StatusResponse)
async def reject_listing(listing_id: str, body: ReasonRequest) -> StatusResponse:
    _process(RejectListing(listing_id=listing_id, reason=body.reason))
    return StatusResponse()


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
@marketplace_router.post("/reviews", status_code=201, response_model=ReviewIdResponse)
async def submit_review(body: SubmitReviewRequest) -> ReviewIdResponse:
    review_id = _process(SubmitSellerReview(**body.model_dump(exclude_none=True)))
    return ReviewIdResponse(review_id=review_id)


@marketplace_router.get("/reviews", response_model=list[ReviewResponse])
async def list_reviews(seller_id: str, approved_only: bool = True) -> list[ReviewResponse]:
    reviews = review_queries.get_seller_reviews(seller_id, approved_only=approved_only)
    return [ReviewResponse.from_review(r) for r in reviews]


@marketplace_router.put("/reviews/{review_id}", response_model=StatusResponse)
async def update_review(review_id: str, body: UpdateReviewRequest) -> StatusResponse:
    _process(UpdateSellerReview(review_id=review_id, **body.model_dump(exclude_none=True)))
    return StatusResponse()


@marketplace_router.delete("/reviews/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str) -> StatusResponse:
    _process(DeleteSellerReview(review_id=review_id))
    return StatusResponse()


@marketplace_router.post("/reviews/{review_id}/approve", response_model=StatusResponse)
async def approve_review(review_id: str) -> StatusResponse:
    _process(ApproveSellerReview(review_id=review_id))
    return StatusResponse()


@marketplace_router.post("/reviews/{review_id}/reject", response_model=StatusResponse)
async def reject_review(review_id: str, body: ReasonRequest) -> StatusResponse:
    _process(RejectSellerReview(review_id=review_id, reason=body.reason))
    return StatusResponse()


@marketplace_router.get("/sellers/{seller_id}/reviews/summary", response_model=ReviewSummaryResponse)
async def review_summary(seller_id: str) -> ReviewSummaryResponse:
    return ReviewSummaryResponse(**review_queries.get_seller_reviews_summary(seller_id))


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------
@marketplace_router.post("/messages", status_code=201, response_model=MessageIdResponse)
async def send_message(body: SendMessageRequest) -> MessageIdResponse:
    message_id = _process(SendMessage(**body.model_dump(exclude_none=True)))
    return MessageIdResponse(message_id=message_id)


@marketplace_router.post("/messages/{message_id}/reply", status_code=201, response_model=MessageIdResponse)
async def reply_to_message(message_id: str, body: ReplyMessageRequest) -> MessageIdResponse:
    reply_id = _process(ReplyToMessage(message_id=message_id, **body.model_dump(exclude_none=True)))
    return MessageIdResponse(message_id=reply_id)


@marketplace_router.put("/messages/{message_id}/read", response_model=StatusResponse)
async def mark_message_read(message_id: str) -> StatusResponse:
    _process(MarkMessageRead(message_id=message_id))
    return StatusResponse()


@marketplace_router.put("/messages/{message_id}/unread", response_model=StatusResponse)
async def mark_message_unread(message_id: str) -> StatusResponse:
    _process(MarkMessageUnread(message_id=message_id))
    return StatusResponse()


@marketplace_router.delete("/messages/{message_id}", response_model=StatusResponse)
async def delete_message(message_id: str) -> StatusResponse:
    _process(DeleteMessage(message_id=message_id))
    return StatusResponse()


@marketplace_router.post("/messages/read-all", response_model=CountResponse)
async def mark_all_read(body: MarkAllReadRequest) -> CountResponse:
    return CountResponse(count=_process(MarkAllMessagesRead(user_id=body.user_id, is_seller=body.is_seller)))


@marketplace_router.get("/messages/conversation", response_model=list[MessageResponse])
async def get_conversation(
    seller_id: str, customer_id: str, limit: int = Query(50, ge=1), offset: int = Query(0, ge=0)
) -> list[MessageResponse]:
    messages = message_queries.get_conversation(seller_id, customer_id, limit, offset)
    return [MessageResponse.from_message(m) for m in messages]


@marketplace_router.get("/messages/threads", response_model=list[ThreadResponse])
async def get_threads(user_id: str, is_seller: bool = False, archived: bool = False) -> list[ThreadResponse]:
    if archived:
        threads = message_queries.get_archived_conversations(user_id, is_seller)
    else:
        threads = message_queries.get_message_threads(user_id, is_seller)
    return [
        ThreadResponse(
            seller_id=t["seller_id"],
            customer_id=t["customer_id"],
            message_count=t["message_count"],
            unread_count=t["unread_count"],
            last_message=MessageResponse.from_message(t["last_message"]),
        )
        for t in threads
    ]


@marketplace_router.get("/messages/unread-count", response_model=CountResponse)
async def unread_count(user_id: str, is_seller: bool = False) -> CountResponse:
    return CountResponse(count=message_queries.get_unread_message_count(user_id, is_seller))


@marketplace_router.get("/messages/search", response_model=list[MessageResponse])
async def search_messages(user_id: str, q: str, is_seller: bool = False) -> list[MessageResponse]:
    return [MessageResponse.from_message(m) for m in message_queries.search_messages(user_id, q, is_seller)]


@marketplace_router.get("/messages/statistics")
async def message_statistics(user_id: str, is_seller: bool = False) -> dict:
    return message_queries.get_message_statistics(user_id, is_seller)


@marketplace_router.post("/messages/archive", response_model=CountResponse)
async def archive_conversation(body: ConversationRequest) -> CountResponse:
    return CountResponse(count=_process(ArchiveConversation(**body.model_dump())))


@marketplace_router.post("/messages/unarchive", response_model=CountResponse)
async def unarchive_conversation(body: ConversationRequest) -> CountResponse:
    return CountResponse(count=_process(UnarchiveConversation(**body.model_dump())))


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------
@marketplace_router.post("/sales", status_code=201, response_model=SaleIdResponse)
async def record_sale(body: RecordSaleRequest) -> SaleIdResponse:
    return SaleIdResponse(sale_id=_process(RecordSale(**body.model_dump())))


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
@admin_router.get("/stats", response_model=StatsResponse)
async def get_stats() -> StatsResponse:
    return StatsResponse(**management.get_stats())


@admin_router.get("/sellers/pending", response_model=SellerPageResponse)
async def get_pending_sellers(
    page_size: int = Query(20, alias="pageSize", ge=1),
    current_page: int = Query(1, alias="currentPage", ge=1),
) -> SellerPageResponse:
    page = management.get_pending_sellers(page_size, current_page)
    return SellerPageResponse(
        items=[SellerResponse.from_seller(s) for s in page["items"]],
        total=page["total"],
        page=page["page"],
        page_size=page["page_size"],
    )


@admin_router.post("/sellers/bulk-approve", response_model=BulkResultResponse)
async def bulk_approve_sellers(body: BulkSellersRequest) -> BulkResultResponse:
    return BulkResultResponse(**management.bulk_approve_sellers(body.seller_ids))


@admin_router.post("/sellers/bulk-reject", response_model=BulkResultResponse)
async def bulk_reject_sellers(body: BulkSellersRequest) -> BulkResultResponse:
    return BulkResultResponse(**management.bulk_reject_sellers(body.seller_ids, body.reason))


@admin_router.post("/sellers/{seller_id}/approve", response_model=bool)
async def approve_seller(seller_id: str) -> bool:
    return management.approve_seller(seller_id)


@admin_router.post("/sellers/{seller_id}/reject", response_model=bool)
async def reject_seller(seller_id: str, body: ReasonRequest) -> bool:
    return management.reject_seller(seller_id, body.reason)


@admin_router.put("/sellers/{seller_id}/status", response_model=bool)
async def update_seller_status(seller_id: str, body: UpdateStatusRequest) -> bool:
    return management.update_seller_status(seller_id, body.status, body.reason)


@admin_router.put("/sellers/{seller_id}/commission", response_model=StatusResponse)
async def change_commission_rate(seller_id: str, body: CommissionRateRequest) -> StatusResponse:
    _process(ChangeCommissionRate(seller_id=seller_id, commission_rate=body.commission_rate))
    return StatusResponse()


@admin_router.delete("/sellers/{seller_id}", response_model=StatusResponse)
async def delete_seller(seller_id: str) -> StatusResponse:
    _process(DeleteSeller(seller_id=seller_id))
    return StatusResponse()


@admin_router.get("/sellers/{seller_id}/activity", response_model=list[ActivityResponse])
async def get_activity_log(seller_id: str, limit: int = Query(50, ge=1)) -> list[ActivityResponse]:
    return [
        ActivityResponse(activity=a.activity, description=a.description, occurred_at=a.occurred_at)
        for a in management.get_activity_log(seller_id, limit)
    ]


@admin_router.post("/sellers/{seller_id}/statistics/refresh", response_model=SellerResponse)
async def refresh_seller_statistics(seller_id: str) -> SellerResponse:
    """Recompute every materialized counter of the seller from source records."""
    seller_queries.get_seller(seller_id)
    update_seller_rating(seller_id)
    update_seller_product_count(seller_id)
    update_seller_total_sales(seller_id)
    return SellerResponse.from_seller(seller_queries.get_seller(seller_id))


@admin_router.post("/products/bulk-approve", response_model=BulkResultResponse)
async def bulk_approve_products(body: BulkListingsRequest) -> BulkResultResponse:
    return BulkResultResponse(**bulk_approve_listings(body.listing_ids))


@admin_router.post("/products/bulk-reject", response_model=BulkResultResponse)
async def bulk_reject_products(body: BulkListingsRequest) -> BulkResultResponse:
    return BulkResultResponse(**bulk_reject_listings(body.listing_ids, body.reason))


@admin_router.post("/reviews/bulk-approve", response_model=BulkResultResponse)
async def bulk_approve_seller_reviews(body: BulkReviewsRequest) -> BulkResultResponse:
    return BulkResultResponse(**bulk_approve_reviews(body.review_ids))


@admin_router.post("/reviews/bulk-reject", response_model=BulkResultResponse)
async def bulk_reject_seller_reviews(body: BulkReviewsRequest) -> BulkResultResponse:
    return BulkResultResponse(**bulk_reject_reviews(body.review_ids, body.reason))


@admin_router.get("/configuration", response_model=dict[str, Any])
async def get_configuration() -> dict[str, Any]:
    return management.get_configuration()


@admin_router.post("/configuration", response_model=bool)
async def update_configuration(changes: dict = Body(...)) -> bool:
    management.update_configuration(**changes)
    return True
