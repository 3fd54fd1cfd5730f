"""Pydantic request/response schemas for the Marketplace API.

These are separate from Protean commands (anti-corruption pattern). Request
schemas only describe shape; business limits (rating range, message length,
commission bounds) are enforced by the domain so they surface as 400 errors
with field detail. Camel-case aliases match the admin dashboard's payloads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class RegisterSellerRequest(BaseModel):
    customer_id: str
    company_name: str
    subdomain: str | None = None
    commission_rate: float | None = None
    business_license: str | None = None
    tax_id: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    region: str | None = None
    postcode: str | None = None
    country_id: str | None = None


class ReasonRequest(BaseModel):
    reason: str | None = None


class UpdateStatusRequest(BaseModel):
    status: str
    reason: str | None = None


class CommissionRateRequest(BaseModel):
    commission_rate: float


class BulkSellersRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    seller_ids: list[str] = Field(alias="sellerIds")
    reason: str | None = None


class BulkListingsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    listing_ids: list[str] = Field(alias="productIds")
    reason: str | None = None


class BulkReviewsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    review_ids: list[str] = Field(alias="reviewIds")
    reason: str | None = None


class AddListingRequest(BaseModel):
    product_id: str
    condition: str = "New"


class ChangeConditionRequest(BaseModel):
    condition: str


class SubmitReviewRequest(BaseModel):
    seller_id: str
    customer_id: str
    rating: int
    title: str | None = None
    comment: str | None = None
    order_id: str | None = None


class UpdateReviewRequest(BaseModel):
    customer_id: str | None = None
    rating: int | None = None
    title: str | None = None
    comment: str | None = None


class SendMessageRequest(BaseModel):
    seller_id: str
    customer_id: str
    message: str
    subject: str | None = None
    order_id: str | None = None
    is_seller_message: bool = False


class ReplyMessageRequest(BaseModel):
    message: str
    subject: str | None = None


class MarkAllReadRequest(BaseModel):
    user_id: str
    is_seller: bool = False


class ConversationRequest(BaseModel):
    seller_id: str
    customer_id: str


class RecordSaleRequest(BaseModel):
    seller_id: str
    customer_id: str
    order_id: str
    amount: float


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class StatusResponse(BaseModel):
    status: str = "ok"


class SellerIdResponse(BaseModel):
    seller_id: str


class ListingIdResponse(BaseModel):
    listing_id: str


class ReviewIdResponse(BaseModel):
    review_id: str


class MessageIdResponse(BaseModel):
    message_id: str


class SaleIdResponse(BaseModel):
    sale_id: str


class CountResponse(BaseModel):
    count: int


class SellerResponse(BaseModel):
    seller_id: str
    customer_id: str
    company_name: str
    subdomain: str
    status: str
    approval_status: str
    commission_rate: float
    rating: float
    review_count: int
    product_count: int
    total_sales: float
    rejection_reason: str | None = None
    suspension_reason: str | None = None
    registered_at: datetime | None = None
    approved_at: datetime | None = None

    @classmethod
    def from_seller(cls, seller) -> SellerResponse:
        return cls(
            seller_id=str(seller.id),
            customer_id=str(seller.customer_id),
            company_name=seller.company_name,
            subdomain=seller.subdomain,
            status=seller.status,
            approval_status=seller.approval_status,
            commission_rate=seller.commission_rate,
            rating=seller.rating,
            review_count=seller.review_count,
            product_count=seller.product_count,
            total_sales=seller.total_sales,
            rejection_reason=seller.rejection_reason,
            suspension_reason=seller.suspension_reason,
            registered_at=seller.registered_at,
            approved_at=seller.approved_at,
        )


class SellerPageResponse(BaseModel):
    items: list[SellerResponse]
    total: int
    page: int
    page_size: int


class ListingResponse(BaseModel):
    listing_id: str
    seller_id: str
    product_id: str
    condition: str
    is_approved: bool

    @classmethod
    def from_listing(cls, listing) -> ListingResponse:
        return cls(
            listing_id=str(listing.id),
            seller_id=str(listing.seller_id),
            product_id=str(listing.product_id),
            condition=listing.condition,
            is_approved=listing.is_approved,
        )


class ReviewResponse(BaseModel):
    review_id: str
    seller_id: str
    customer_id: str
    order_id: str | None = None
    rating: int
    title: str | None = None
    comment: str | None = None
    is_approved: bool
    created_at: datetime | None = None

    @classmethod
    def from_review(cls, review) -> ReviewResponse:
        return cls(
            review_id=str(review.id),
            seller_id=str(review.seller_id),
            customer_id=str(review.customer_id),
            order_id=str(review.order_id) if review.order_id else None,
            rating=review.rating,
            title=review.title,
            comment=review.comment,
            is_approved=review.is_approved,
            created_at=review.created_at,
        )


class MessageResponse(BaseModel):
    message_id: str
    seller_id: str
    customer_id: str
    order_id: str | None = None
    subject: str | None = None
    message: str
    is_seller_message: bool
    is_read: bool
    is_archived: bool
    created_at: datetime | None = None

    @classmethod
    def from_message(cls, message) -> MessageResponse:
        return cls(
            message_id=str(message.id),
            seller_id=str(message.seller_id),
            customer_id=str(message.customer_id),
            order_id=str(message.order_id) if message.order_id else None,
            subject=message.subject,
            message=message.message,
            is_seller_message=message.is_seller_message,
            is_read=message.is_read,
            is_archived=message.is_archived,
            created_at=message.created_at,
        )


class ThreadResponse(BaseModel):
    seller_id: str
    customer_id: str
    message_count: int
    unread_count: int
    last_message: MessageResponse


class StatsResponse(BaseModel):
    total_sellers: int
    pending_sellers: int
    approved_sellers: int
    total_products: int
    total_reviews: int
    total_messages: int
    average_rating: float


class BulkResultResponse(BaseModel):
    success: list[str]
    failed: list[dict[str, str]]


class ActivityResponse(BaseModel):
    activity: str
    description: str | None = None
    occurred_at: datetime


class ReviewSummaryResponse(BaseModel):
    average_rating: float
    review_count: int
    rating_distribution: dict[int, int]


class DashboardResponse(BaseModel):
    seller: SellerResponse
    statistics: dict[str, Any]
    products: dict[str, Any]
    rating_distribution: dict[int, int]
    recent_reviews: list[ReviewResponse]
    recent_messages: list[MessageResponse]
    unread_messages: int
