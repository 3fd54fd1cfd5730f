"""Marketplace policy: runtime switches and limits consulted by every operation.

Values come from ``MARKETPLACE_<FIELD>`` environment variables (for example
``MARKETPLACE_MAX_PRODUCTS_PER_SELLER=50``) and can be changed at runtime from
the admin configuration endpoint via ``configure_policy()``.
"""

import os

from pydantic import BaseModel, ConfigDict, Field, model_validator

ENV_PREFIX = "MARKETPLACE_"


class MarketplacePolicy(BaseModel):
    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    # General
    enabled: bool = True
    allow_seller_registration: bool = True
    require_seller_approval: bool = True
    allow_subdomain: bool = True
    allow_subdirectory: bool = True
    base_url: str = "https://marketplace.example.com/"

    # Sellers
    auto_approve_sellers: bool = False
    max_products_per_seller: int = Field(default=100, ge=0)  # 0 = unlimited

    # Listings
    require_product_approval: bool = True
    auto_approve_products: bool = False
    allow_used_products: bool = True

    # Commission
    default_commission_rate: float = Field(default=10.0, ge=0, le=100)
    min_commission_rate: float = Field(default=0.0, ge=0, le=100)
    max_commission_rate: float = Field(default=100.0, ge=0, le=100)
    commission_tax_included: bool = False

    # Messaging
    messaging_enabled: bool = True
    allow_anonymous_messages: bool = False

    # Reviews
    rating_enabled: bool = True
    purchase_required_for_rating: bool = False
    review_moderation_required: bool = True

    @model_validator(mode="after")
    def commission_bounds_are_ordered(self):
        if self.min_commission_rate > self.max_commission_rate:
            raise ValueError("min_commission_rate cannot exceed max_commission_rate")
        if not self.min_commission_rate <= self.default_commission_rate <= self.max_commission_rate:
            raise ValueError("default_commission_rate must lie between the minimum and maximum rates")
        return self

    @classmethod
    def from_env(cls, environ=None) -> "MarketplacePolicy":
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = f"{ENV_PREFIX}{name.upper()}"
            if key in environ:
                values[name] = environ[key]
        return cls.model_validate(values)

    @property
    def sellers_auto_approved(self) -> bool:
        return self.auto_approve_sellers or not self.require_seller_approval

    @property
    def listings_auto_approved(self) -> bool:
        return self.auto_approve_products or not self.require_product_approval

    def has_product_quota(self) -> bool:
        return self.max_products_per_seller > 0

    def commission_settings(self) -> dict:
        return {
            "default_rate": self.default_commission_rate,
            "min_rate": self.min_commission_rate,
            "max_rate": self.max_commission_rate,
            "tax_included": self.commission_tax_included,
        }


_policy_instance = None


def get_policy() -> MarketplacePolicy:
    """Return the active marketplace policy (singleton, loaded from the environment)."""
    global _policy_instance
    if _policy_instance is None:
        _policy_instance = MarketplacePolicy.from_env()
    return _policy_instance


def configure_policy(**overrides) -> MarketplacePolicy:
    """Replace the active policy with a copy carrying ``overrides``.

    The whole policy is re-validated, so an invalid combination leaves the
    current policy untouched.
    """
    global _policy_instance
    current = get_policy()
    _policy_instance = MarketplacePolicy.model_validate({**current.model_dump(), **overrides})
    return _policy_instance


def reset_policy():
    """Reset the policy singleton (useful for testing)."""
    global _policy_instance
    _policy_instance = None
