"""Application tests for buyer/seller messaging."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from marketplace.exceptions import OperationFailure, PolicyViolationError
from marketplace.message.message import MESSAGE_MAX_LENGTH, Message
from marketplace.message.queries import (
    get_archived_conversations,
    get_conversation,
    get_message_statistics,
    get_message_threads,
    get_unread_message_count,
    search_messages,
)
from marketplace.message.reading import (
    ArchiveConversation,
    DeleteMessage,
    MarkAllMessagesRead,
    MarkMessageRead,
    MarkMessageUnread,
    UnarchiveConversation,
)
from marketplace.message.repository import MessageRepository
from marketplace.message.sending import ReplyToMessage, SendMessage, is_messaging_allowed
from marketplace.policy import configure_policy
from marketplace.sale.recording import RecordSale
from marketplace.seller.lifecycle import SuspendSeller

CUSTOMER = "cust-msg-001"


def _send(seller_id, message="Is this still in stock?", customer_id=CUSTOMER, order_id="ord-100", **overrides):
    return current_domain.process(
        SendMessage(seller_id=seller_id, customer_id=customer_id, message=message, order_id=order_id, **overrides),
        asynchronous=False,
    )


def _reply(message_id, message="Yes, ships tomorrow"):
    return current_domain.process(ReplyToMessage(message_id=message_id, message=message), asynchronous=False)


def _get(message_id):
    return current_domain.repository_for(Message).get(message_id)


class TestSendMessage:
    def test_message_is_stored_unread(self, seller_id):
        message_id = _send(seller_id, subject="Stock question")
        message = _get(message_id)
        assert message.subject == "Stock question"
        assert message.is_seller_message is False
        assert message.is_read is False
        assert message.is_archived is False

    def test_maximum_length_accepted(self, seller_id):
        message_id = _send(seller_id, message="x" * MESSAGE_MAX_LENGTH)
        assert len(_get(message_id).message) == MESSAGE_MAX_LENGTH

    def test_too_long_rejected(self, seller_id):
        with pytest.raises(ValidationError):
            _send(seller_id, message="x" * (MESSAGE_MAX_LENGTH + 1))

    def test_blank_message_rejected(self, seller_id):
        with pytest.raises(ValidationError):
            _send(seller_id, message="   ")

    def test_messaging_disabled(self, seller_id):
        configure_policy(messaging_enabled=False)
        with pytest.raises(PolicyViolationError):
            _send(seller_id)


class TestMessagingPermission:
    def test_requires_a_relationship(self, seller_id):
        assert is_messaging_allowed(seller_id, CUSTOMER) is False
        with pytest.raises(PolicyViolationError):
            _send(seller_id, order_id=None)

    def test_order_reference_allows_messaging(self, seller_id):
        assert is_messaging_allowed(seller_id, CUSTOMER, order_id="ord-100") is True

    def test_recorded_sale_allows_messaging(self, seller_id):
        current_domain.process(
            RecordSale(seller_id=seller_id, customer_id=CUSTOMER, order_id="ord-7", amount=20.0),
            asynchronous=False,
        )
        assert _send(seller_id, order_id=None)

    def test_existing_conversation_allows_follow_up(self, seller_id):
        _send(seller_id)
        assert is_messaging_allowed(seller_id, CUSTOMER) is True
        assert _send(seller_id, message="One more thing", order_id=None)

    def test_inactive_seller(self, seller_id):
        current_domain.process(SuspendSeller(seller_id=seller_id), asynchronous=False)
        assert is_messaging_allowed(seller_id, CUSTOMER, order_id="ord-100") is False

    def test_unknown_seller(self):
        assert is_messaging_allowed("missing-seller", CUSTOMER, order_id="ord-100") is False

    def test_anonymous_messages(self, seller_id):
        configure_policy(allow_anonymous_messages=True)
        assert _send(seller_id, customer_id="stranger", order_id=None)


class TestReply:
    def test_reply_flips_direction(self, seller_id):
        original = _send(seller_id, subject="Shipping")
        reply = _get(_reply(original))

        assert reply.is_seller_message is True
        assert reply.subject == "Re: Shipping"
        assert str(reply.seller_id) == seller_id
        assert reply.customer_id == CUSTOMER

    def test_reply_to_reply_keeps_single_prefix(self, seller_id):
        original = _send(seller_id, subject="Shipping")
        answer = _reply(original)
        assert _get(_reply(answer, "Thanks!")).subject == "Re: Shipping"

    def test_reply_to_unknown_message(self):
        with pytest.raises(ObjectNotFoundError):
            _reply("missing-message")


class TestReadState:
    def test_mark_read_and_unread(self, seller_id):
        message_id = _send(seller_id)
        assert get_unread_message_count(seller_id, is_seller=True) == 1

        current_domain.process(MarkMessageRead(message_id=message_id), asynchronous=False)
        assert get_unread_message_count(seller_id, is_seller=True) == 0

        current_domain.process(MarkMessageUnread(message_id=message_id), asynchronous=False)
        assert _get(message_id).is_read is False

    def test_unread_count_only_counts_inbox(self, seller_id):
        _reply(_send(seller_id))
        assert get_unread_message_count(seller_id, is_seller=True) == 1
        assert get_unread_message_count(CUSTOMER) == 1

    def test_mark_all_read(self, seller_id):
        _send(seller_id)
        _send(seller_id, message="Hello again")
        changed = current_domain.process(MarkAllMessagesRead(user_id=seller_id, is_seller=True), asynchronous=False)
        assert changed == 2
        assert get_unread_message_count(seller_id, is_seller=True) == 0

    def test_delete(self, seller_id):
        message_id = _send(seller_id)
        current_domain.process(DeleteMessage(message_id=message_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            _get(message_id)


class TestConversations:
    def test_conversation_reads_oldest_first(self, seller_id):
        first = _send(seller_id, message="First")
        second = _reply(first, "Second")
        assert [str(m.id) for m in get_conversation(seller_id, CUSTOMER)] == [first, second]

    def test_threads(self, register_seller):
        seller_a = register_seller()
        seller_b = register_seller()
        _send(seller_a)
        _reply(_send(seller_b))

        threads = {t["seller_id"]: t for t in get_message_threads(CUSTOMER)}
        assert threads[seller_a]["message_count"] == 1
        assert threads[seller_a]["unread_count"] == 0
        assert threads[seller_b]["message_count"] == 2
        assert threads[seller_b]["unread_count"] == 1

    def test_archive_hides_thread(self, seller_id):
        _reply(_send(seller_id))
        archived = current_domain.process(
            ArchiveConversation(seller_id=seller_id, customer_id=CUSTOMER), asynchronous=False
        )
        assert archived == 2
        assert get_message_threads(CUSTOMER) == []
        assert len(get_archived_conversations(CUSTOMER)) == 1

        restored = current_domain.process(
            UnarchiveConversation(seller_id=seller_id, customer_id=CUSTOMER), asynchronous=False
        )
        assert restored == 2
        assert get_archived_conversations(CUSTOMER) == []

    def test_search(self, seller_id):
        _send(seller_id, message="Do you ship to Norway?", subject="Delivery")
        _send(seller_id, message="What is the warranty?")
        assert [m.message for m in search_messages(CUSTOMER, "NORWAY")] == ["Do you ship to Norway?"]
        assert len(search_messages(CUSTOMER, "delivery")) == 1
        assert search_messages(CUSTOMER, "  ") == []

    def test_statistics(self, seller_id):
        _reply(_send(seller_id))
        stats = get_message_statistics(seller_id, is_seller=True)
        assert stats == {
            "total": 2,
            "sent": 1,
            "received": 1,
            "unread": 1,
            "archived": 0,
            "conversations": 1,
        }


class TestStoreFailures:
    def test_mark_read_lookup_failure_becomes_operation_failure(self, seller_id, monkeypatch):
        message_id = _send(seller_id)

        def store_down(self, identifier):
            raise ConnectionError("store down")

        monkeypatch.setattr(MessageRepository, "get", store_down)
        with pytest.raises(OperationFailure) as exc:
            current_domain.process(MarkMessageRead(message_id=message_id), asynchronous=False)
        assert isinstance(exc.value.__cause__, ConnectionError)

    def test_permission_lookup_failure_becomes_operation_failure(self, seller_id, monkeypatch):
        def store_down(self, seller_id, customer_id):
            raise ConnectionError("store down")

        monkeypatch.setattr(MessageRepository, "has_conversation", store_down)
        with pytest.raises(OperationFailure) as exc:
            _send(seller_id, order_id=None)
        assert isinstance(exc.value.__cause__, ConnectionError)
