"""Seller registration: command, handler, and subdomain allocation.

A customer account may own at most one seller. The pre-checks below give
callers a precise reason; the unique constraints on ``customer_id`` and
``subdomain`` make the store the final arbiter under concurrent attempts.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.exceptions import ConflictError, PolicyViolationError, guarded
from marketplace.policy import get_policy
from marketplace.seller.seller import Seller, is_valid_subdomain_format, sanitize_subdomain

logger = structlog.get_logger(__name__)

# Upper bound on numeric suffixes tried for one company name
MAX_SUBDOMAIN_ATTEMPTS = 1000
FALLBACK_SUBDOMAIN = "seller"

_DETAIL_FIELDS = (
    "business_license",
    "tax_id",
    "phone",
    "address",
    "city",
    "region",
    "postcode",
    "country_id",
)


@marketplace.command(part_of="Seller")
class RegisterSeller:
    """Register a customer account as a marketplace seller."""

    customer_id = Identifier(required=True)
    company_name = String(required=True, max_length=255)
    subdomain = String(max_length=50)
    commission_rate = Float(min_value=0.0, max_value=100.0)
    business_license = String(max_length=255)
    tax_id = String(max_length=100)
    phone = String(max_length=50)
    address = String(max_length=255)
    city = String(max_length=100)
    region = String(max_length=100)
    postcode = String(max_length=20)
    country_id = String(max_length=2)


def can_register(customer_id) -> bool:
    """True when the customer does not already own a seller."""
    return current_domain.repository_for(Seller).find_by_customer(customer_id) is None


def is_subdomain_available(subdomain: str) -> bool:
    """True when the subdomain passes format checks and no seller owns it."""
    if not is_valid_subdomain_format(subdomain):
        return False
    return current_domain.repository_for(Seller).find_by_subdomain(subdomain) is None


def generate_subdomain(company_name: str) -> str:
    """Derive an unused subdomain from a company name.

    The sanitized name is tried first, then the name with suffixes 1, 2, 3...
    """
    base = sanitize_subdomain(company_name) or FALLBACK_SUBDOMAIN

    if is_subdomain_available(base):
        return base

    for counter in range(1, MAX_SUBDOMAIN_ATTEMPTS + 1):
        candidate = f"{base}{counter}"
        if is_subdomain_available(candidate):
            return candidate

    raise ConflictError({"subdomain": [f"No available subdomain could be derived from '{company_name}'"]})


def validate_registration(command) -> None:
    policy = get_policy()
    if not policy.enabled:
        raise PolicyViolationError({"marketplace": ["Marketplace is not enabled"]})
    if not policy.allow_seller_registration:
        raise PolicyViolationError({"registration": ["Seller registration is not allowed"]})

    if not command.company_name or len(command.company_name.strip()) < 2:
        raise ValidationError({"company_name": ["Company name must be at least 2 characters long"]})

    if not can_register(command.customer_id):
        raise ConflictError({"customer_id": ["Customer is already registered as a seller"]})

    if command.subdomain:
        if not is_valid_subdomain_format(command.subdomain):
            raise ValidationError({"subdomain": [f"Subdomain '{command.subdomain}' is not valid"]})
        if not is_subdomain_available(command.subdomain):
            raise ConflictError({"subdomain": [f"Subdomain '{command.subdomain}' is already taken"]})

    if command.commission_rate is not None and not (
        policy.min_commission_rate <= command.commission_rate <= policy.max_commission_rate
    ):
        raise ValidationError(
            {
                "commission_rate": [
                    f"Commission rate must be between {policy.min_commission_rate} and {policy.max_commission_rate}"
                ]
            }
        )


@marketplace.command_handler(part_of=Seller)
class RegisterSellerHandler:
    @handle(RegisterSeller)
    def register_seller(self, command):
        policy = get_policy()

        with guarded("register_seller", customer_id=str(command.customer_id)):
            validate_registration(command)
            subdomain = command.subdomain or generate_subdomain(command.company_name)
            commission_rate = (
                command.commission_rate if command.commission_rate is not None else policy.default_commission_rate
            )

            seller = Seller.register(
                customer_id=command.customer_id,
                company_name=command.company_name,
                subdomain=subdomain,
                commission_rate=commission_rate,
                auto_approve=policy.sellers_auto_approved,
                **{name: getattr(command, name) for name in _DETAIL_FIELDS},
            )
            current_domain.repository_for(Seller).add(seller)

        logger.info(
            "Seller registered",
            seller_id=str(seller.id),
            customer_id=str(command.customer_id),
            subdomain=subdomain,
            approval_status=seller.approval_status,
        )
        return str(seller.id)
