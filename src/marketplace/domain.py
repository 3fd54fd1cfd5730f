"""Marketplace bounded context: Sellers, Listings, Seller Reviews, and Messaging.

Handles the seller approval lifecycle, catalogue membership with per-seller
quotas, seller reviews with rating aggregation, and buyer/seller messaging.
Seller statistics are materialized on the Seller aggregate and recomputed
by event handlers after every change to the underlying records.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
marketplace = Domain(name="marketplace")
