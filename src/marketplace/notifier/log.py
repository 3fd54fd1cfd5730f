"""Logging notifier: emits seller notifications to the structured log."""

from uuid import uuid4

import structlog

from marketplace.notifier.port import NotifierPort

logger = structlog.get_logger(__name__)


class LoggingNotifier(NotifierPort):
    def notify(self, seller_id: str, event_type: str, payload: dict) -> dict:
        notification_id = f"ntf-{uuid4().hex[:12]}"
        logger.info(
            "Seller notification",
            notification_id=notification_id,
            seller_id=seller_id,
            template=f"marketplace_seller_{event_type}",
            **payload,
        )
        return {"notification_id": notification_id, "status": "sent"}
