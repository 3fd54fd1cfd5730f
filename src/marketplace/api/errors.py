"""HTTP mapping for marketplace errors.

Protean's ``register_exception_handlers`` covers ``ValidationError`` (400) and
``ObjectNotFoundError`` (404). The handlers below add the marketplace rule
violations. Error bodies follow the same ``{"error": messages}`` shape.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from marketplace.exceptions import (
    ConflictError,
    InvalidStateError,
    MarketplaceError,
    OperationFailure,
    PolicyViolationError,
)

logger = structlog.get_logger(__name__)

# Most specific first; QuotaExceededError is a PolicyViolationError
_STATUS_CODES = (
    (ConflictError, 409),
    (InvalidStateError, 409),
    (PolicyViolationError, 403),
    (OperationFailure, 500),
)


def status_code_for(exc: MarketplaceError) -> int:
    for error_class, status_code in _STATUS_CODES:
        if isinstance(exc, error_class):
            return status_code
    return 400


async def marketplace_error_handler(request: Request, exc: MarketplaceError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("Marketplace request failed", path=request.url.path, error=exc.reason)
    return JSONResponse(status_code=status_code, content={"error": exc.messages})


def register_marketplace_exception_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(MarketplaceError, marketplace_error_handler)
