"""Domain events for the Message aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from marketplace.domain import marketplace


@marketplace.event(part_of="Message")
class MessageSent:
    __version__ = 1

    message_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier()
    subject = String(max_length=255)
    is_seller_message = Boolean(required=True)
    reply_to = Identifier()
    sent_at = DateTime(required=True)


@marketplace.event(part_of="Message")
class MessageDeleted:
    __version__ = 1

    message_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    deleted_at = DateTime(required=True)
