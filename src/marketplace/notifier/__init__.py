"""Seller notification adapters: pluggable delivery for seller lifecycle notices.

Provides singleton access to the configured notifier. Uses the fake adapter
by default; ``NOTIFIER_ADAPTER=log`` writes notifications to the structured
log instead.
"""

import os

_notifier_instance = None


def get_notifier():
    """Return the configured notifier adapter (singleton)."""
    global _notifier_instance
    if _notifier_instance is None:
        adapter = os.environ.get("NOTIFIER_ADAPTER", "fake")
        if adapter == "fake":
            from marketplace.notifier.fake import FakeNotifier

            _notifier_instance = FakeNotifier()
        elif adapter == "log":
            from marketplace.notifier.log import LoggingNotifier

            _notifier_instance = LoggingNotifier()
        else:
            raise ValueError(f"Unknown notifier adapter: {adapter}")
    return _notifier_instance


def reset_notifier():
    """Reset the notifier singleton (useful for testing)."""
    global _notifier_instance
    _notifier_instance = None
