"""Fake notifier: records notifications in memory for testing."""

from uuid import uuid4

from marketplace.notifier.port import NotifierPort


class FakeNotifier(NotifierPort):
    """Notifier that records notifications for test assertions."""

    def __init__(self):
        self.sent: list[dict] = []
        self.should_fail = False

    def configure(self, should_fail: bool = False):
        """Make subsequent ``notify`` calls raise, to exercise best-effort delivery."""
        self.should_fail = should_fail

    def notify(self, seller_id: str, event_type: str, payload: dict) -> dict:
        if self.should_fail:
            raise ConnectionError("Notification transport unavailable")

        notification_id = f"ntf-{uuid4().hex[:12]}"
        self.sent.append(
            {
                "notification_id": notification_id,
                "seller_id": seller_id,
                "event_type": event_type,
                "payload": payload,
            }
        )
        return {"notification_id": notification_id, "status": "sent"}

    def sent_for(self, seller_id: str) -> list[str]:
        """Event types delivered for a seller, in order."""
        return [n["event_type"] for n in self.sent if n["seller_id"] == seller_id]

    def reset(self):
        self.sent.clear()
        self.should_fail = False
