"""Read-only message queries.

``user_id`` with ``is_seller`` names one side of a conversation: a seller id
when ``is_seller`` is True, a customer id otherwise.
"""

from protean.utils.globals import current_domain

from marketplace.message.message import Message
from marketplace.utils.queries import fetch_all

RECENT_MESSAGES_LIMIT = 10


def _repo():
    return current_domain.repository_for(Message)


def get_conversation(seller_id, customer_id, limit: int = 50, offset: int = 0) -> list[Message]:
    """Oldest first, so the result reads top to bottom."""
    query = _repo().query_conversation(seller_id, customer_id)
    return list(query.limit(limit).offset(offset).all().items)


def get_unread_message_count(user_id, is_seller: bool = False) -> int:
    return _repo().query_inbox(user_id, is_seller, is_read=False).all().total


def get_recent_messages(user_id, is_seller: bool = False, limit: int = RECENT_MESSAGES_LIMIT) -> list[Message]:
    return list(_repo().query_for_user(user_id, is_seller).limit(limit).all().items)


def _threads(messages, user_id, is_seller: bool) -> list[dict]:
    threads = {}
    # Messages arrive newest first, so the first one seen per pair is the latest
    for message in messages:
        key = (str(message.seller_id), str(message.customer_id))
        thread = threads.get(key)
        if thread is None:
            thread = threads[key] = {
                "seller_id": key[0],
                "customer_id": key[1],
                "last_message": message,
                "message_count": 0,
                "unread_count": 0,
            }
        thread["message_count"] += 1
        if not message.is_read and message.is_addressed_to(user_id, is_seller):
            thread["unread_count"] += 1
    return list(threads.values())


def get_message_threads(user_id, is_seller: bool = False) -> list[dict]:
    """One entry per counterpart, latest conversation first. Archived conversations are left out."""
    messages = fetch_all(_repo().query_for_user(user_id, is_seller, is_archived=False))
    return _threads(messages, user_id, is_seller)


def get_archived_conversations(user_id, is_seller: bool = False) -> list[dict]:
    messages = fetch_all(_repo().query_for_user(user_id, is_seller, is_archived=True))
    return _threads(messages, user_id, is_seller)


def search_messages(user_id, term: str, is_seller: bool = False) -> list[Message]:
    """Case-insensitive match on subject or body."""
    needle = term.strip().lower()
    if not needle:
        return []
    return [
        message
        for message in fetch_all(_repo().query_for_user(user_id, is_seller))
        if needle in (message.message or "").lower() or needle in (message.subject or "").lower()
    ]


def get_message_statistics(user_id, is_seller: bool = False) -> dict:
    messages = fetch_all(_repo().query_for_user(user_id, is_seller))
    received = [m for m in messages if m.is_addressed_to(user_id, is_seller)]
    return {
        "total": len(messages),
        "sent": len(messages) - len(received),
        "received": len(received),
        "unread": sum(1 for m in received if not m.is_read),
        "archived": sum(1 for m in messages if m.is_archived),
        "conversations": len({(str(m.seller_id), str(m.customer_id)) for m in messages}),
    }
