"""Faker-based data generators for the marketplace load test scenarios.

Each generator produces payloads that pass the marketplace's validation rules
(company name length, rating range, message length) and match the field
names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

PRODUCT_CONDITIONS = ["New", "Used", "Refurbished", "ForParts"]


def unique_id(prefix: str) -> str:
    """Generate ids like 'cust-lt-a1b2c3d4' that never collide across users."""
    return f"{prefix}-lt-{uuid.uuid4().hex[:8]}"


# ---------- Sellers ----------


def seller_registration() -> dict:
    """RegisterSellerRequest payload. The subdomain is left to the server."""
    return {
        "customer_id": unique_id("cust"),
        "company_name": fake.company()[:255],
        "phone": fake.phone_number()[:50],
        "address": fake.street_address()[:255],
        "city": fake.city()[:100],
        "postcode": fake.postcode()[:20],
        "country_id": fake.country_code(),
    }


# ---------- Listings ----------


def listing_data(allow_used: bool = True) -> dict:
    condition = random.choice(PRODUCT_CONDITIONS) if allow_used else "New"
    return {"product_id": unique_id("prod"), "condition": condition}


# ---------- Reviews ----------


def review_data(seller_id: str, customer_id: str | None = None) -> dict:
    """SubmitReviewRequest payload skewed towards good ratings, like real marketplaces."""
    return {
        "seller_id": seller_id,
        "customer_id": customer_id or unique_id("cust"),
        "rating": random.choices([1, 2, 3, 4, 5], weights=[5, 5, 10, 30, 50])[0],
        "title": fake.sentence(nb_words=5)[:255],
        "comment": fake.paragraph(nb_sentences=3)[:1000],
    }


# ---------- Messages ----------


def message_data(seller_id: str, customer_id: str, order_id: str | None = None) -> dict:
    return {
        "seller_id": seller_id,
        "customer_id": customer_id,
        "subject": fake.sentence(nb_words=4)[:255],
        "message": fake.paragraph(nb_sentences=4)[:5000],
        "order_id": order_id or unique_id("ord"),
    }


def sale_data(seller_id: str, customer_id: str) -> dict:
    return {
        "seller_id": seller_id,
        "customer_id": customer_id,
        "order_id": unique_id("ord"),
        "amount": round(random.uniform(5.0, 500.0), 2),
    }
