"""Marketplace error taxonomy.

Input-shape problems are reported with Protean's ``ValidationError`` and missing
records with ``ObjectNotFoundError``; both propagate unchanged. The classes below
cover the rule violations that depend on existing state or runtime policy.
"""

from contextlib import contextmanager

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class MarketplaceError(Exception):
    """Base class for marketplace rule violations.

    ``messages`` follows Protean's shape: ``{field_or_topic: [message, ...]}``.
    """

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = {"_entity": [messages]}
        self.messages = messages
        super().__init__(messages)

    @property
    def reason(self) -> str:
        """The first human-readable message, for storefront callers."""
        for values in self.messages.values():
            if isinstance(values, list | tuple):
                if values:
                    return str(values[0])
            elif values:
                return str(values)
        return str(self)


class ConflictError(MarketplaceError):
    """A uniqueness rule was violated (duplicate listing, review, subdomain, seller)."""


class PolicyViolationError(MarketplaceError):
    """The operation is disabled or restricted by marketplace configuration."""


class QuotaExceededError(PolicyViolationError):
    """The seller has reached the configured listing quota."""


class InvalidStateError(MarketplaceError):
    """The referenced record is not in a state that permits the operation."""


class OperationFailure(MarketplaceError):
    """An unexpected failure in an underlying collaborator.

    The original exception is chained as ``__cause__``; ``messages`` never
    carries its details.
    """


PASSTHROUGH_ERRORS = (ValidationError, ObjectNotFoundError, MarketplaceError)


@contextmanager
def guarded(operation: str, **context):
    """Wrap unexpected failures raised inside a marketplace operation.

    Taxonomy errors pass through untouched. Anything else is logged with its
    traceback and re-raised as ``OperationFailure``.
    """
    try:
        yield
    except PASSTHROUGH_ERRORS:
        raise
    except Exception as exc:
        logger.exception("Marketplace operation failed", operation=operation, **context)
        raise OperationFailure({"_entity": [f"Unable to {operation.replace('_', ' ')}."]}) from exc


def describe_error(exc: Exception) -> str:
    """Flatten an error into a single line for bulk operation results."""
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict):
        parts = []
        for key, values in messages.items():
            if isinstance(values, list | tuple):
                values = ", ".join(str(v) for v in values)
            parts.append(f"{key}: {values}")
        return "; ".join(parts)
    return str(exc)
