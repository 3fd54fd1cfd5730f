"""Notifier port: abstract interface for seller notifications."""

from abc import ABC, abstractmethod


class NotifierPort(ABC):
    """Abstract interface for seller notification adapters."""

    @abstractmethod
    def notify(self, seller_id: str, event_type: str, payload: dict) -> dict:
        """Deliver a notification about a seller lifecycle change.

        Returns:
            dict with keys: notification_id, status ("sent" or "ignored"), error (optional)
        """
        ...
