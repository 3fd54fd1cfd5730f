"""Storefront resolution: maps an incoming request to a seller storefront.

Sellers are reachable at ``<subdomain>.<marketplace host>`` when subdomain
routing is allowed, and at ``/seller/<subdomain>/`` when subdirectory routing
is allowed. The resolved seller is returned to the caller; nothing is kept in
module state between requests.
"""

import re
from urllib.parse import urlsplit, urlunsplit

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from marketplace.policy import get_policy
from marketplace.seller.seller import Seller

_LABEL_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9]$")
_PATH_PATTERN = re.compile(r"^/seller/([a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9])/")


def base_host() -> str:
    """Hostname of the main marketplace store, taken from the configured base URL."""
    return (urlsplit(get_policy().base_url).hostname or "").lower()


def subdomain_from_host(host: str, main_host: str | None = None) -> str | None:
    """First label of ``host``; None for the main store itself.

    When ``main_host`` is given, the main host (bare or ``www.``) never names a
    seller. Hosts outside the main host fall back to the first-label rule.
    """
    hostname = host.split(":", 1)[0].strip().lower()
    if main_host:
        if hostname in (main_host, f"www.{main_host}"):
            return None
        if hostname.endswith(f".{main_host}"):
            label = hostname[: -len(main_host) - 1].split(".")[0]
            return label if _LABEL_PATTERN.match(label) else None
    parts = hostname.split(".")
    # subdomain.domain.tld at minimum
    if len(parts) < 3:
        return None
    if not _LABEL_PATTERN.match(parts[0]):
        return None
    return parts[0]


def subdomain_from_path(path: str) -> str | None:
    match = _PATH_PATTERN.match(path or "")
    return match.group(1).lower() if match else None


def resolve_subdomain(host: str, path: str = "/") -> str | None:
    """Subdomain addressed by a request, or None when it targets the main store."""
    policy = get_policy()
    if policy.allow_subdomain and host:
        subdomain = subdomain_from_host(host, base_host())
        if subdomain:
            return subdomain
    if policy.allow_subdirectory:
        return subdomain_from_path(path)
    return None


def _find_seller(subdomain: str) -> Seller | None:
    try:
        return current_domain.repository_for(Seller).get_by_subdomain(subdomain)
    except ObjectNotFoundError:
        return None


def resolve_seller(host: str, path: str = "/") -> Seller | None:
    subdomain = resolve_subdomain(host, path)
    return _find_seller(subdomain) if subdomain else None


def seller_store_url(subdomain: str) -> str:
    policy = get_policy()
    base_url = policy.base_url
    if policy.allow_subdomain:
        parts = urlsplit(base_url)
        return urlunsplit(parts._replace(netloc=f"{subdomain}.{parts.netloc}"))
    if policy.allow_subdirectory:
        return f"{base_url.rstrip('/')}/seller/{subdomain}/"
    return base_url


def seller_store_config(subdomain: str) -> dict:
    """Storefront settings for a seller; empty when no seller owns the subdomain."""
    seller = _find_seller(subdomain)
    if seller is None:
        return {}
    return {
        "seller_id": str(seller.id),
        "store_url": seller_store_url(subdomain),
        "is_active": seller.is_active,
        "is_approved": seller.is_approved,
        "company_name": seller.company_name,
        "rating": seller.rating,
        "review_count": seller.review_count,
        "product_count": seller.product_count,
    }


def seller_store_metadata(subdomain: str) -> dict:
    seller = _find_seller(subdomain)
    if seller is None:
        return {
            "title": "Store Not Found",
            "description": "The requested store could not be found",
            "keywords": "",
            "robots": "noindex,nofollow",
        }
    return {
        "title": f"{seller.company_name} - Marketplace Store",
        "description": f"Shop at {seller.company_name} marketplace store",
        "keywords": f"{seller.company_name}, marketplace, store, shop",
        "robots": "index,follow",
    }
