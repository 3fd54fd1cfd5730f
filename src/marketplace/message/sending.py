"""Sending messages between sellers and customers.

Unless anonymous messaging is enabled, a customer and a seller may only
exchange messages when the seller exists and is active, and the two already
have a relationship: a recorded sale, an earlier conversation, or an order
referenced by the message itself.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.exceptions import PolicyViolationError, guarded
from marketplace.message.message import MESSAGE_MAX_LENGTH, SUBJECT_MAX_LENGTH, Message
from marketplace.policy import get_policy
from marketplace.sale.sale import Sale
from marketplace.seller.seller import Seller

logger = structlog.get_logger(__name__)

REPLY_PREFIX = "Re: "


@marketplace.command(part_of="Message")
class SendMessage:
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    message = String(required=True, max_length=MESSAGE_MAX_LENGTH)
    subject = String(max_length=SUBJECT_MAX_LENGTH)
    order_id = Identifier()
    is_seller_message = Boolean(default=False)


@marketplace.command(part_of="Message")
class ReplyToMessage:
    message_id = Identifier(required=True)
    message = String(required=True, max_length=MESSAGE_MAX_LENGTH)
    subject = String(max_length=SUBJECT_MAX_LENGTH)


def is_messaging_allowed(seller_id, customer_id, order_id=None) -> bool:
    if get_policy().allow_anonymous_messages:
        return True

    try:
        seller = current_domain.repository_for(Seller).get(str(seller_id))
    except ObjectNotFoundError:
        return False
    if not seller.is_active:
        return False

    if order_id:
        return True
    if current_domain.repository_for(Sale).has_purchased_from(customer_id, seller_id):
        return True
    return current_domain.repository_for(Message).has_conversation(seller_id, customer_id)


def _reply_subject(subject):
    if not subject:
        return None
    if subject.startswith(REPLY_PREFIX):
        return subject
    return f"{REPLY_PREFIX}{subject}"[:SUBJECT_MAX_LENGTH]


def send(seller_id, customer_id, message, subject=None, order_id=None, is_seller_message=False, reply_to=None):
    if not get_policy().messaging_enabled:
        raise PolicyViolationError({"messaging": ["Messaging is disabled"]})
    if not message or not message.strip():
        raise ValidationError({"message": ["Message cannot be empty"]})
    with guarded("send_message", seller_id=str(seller_id), customer_id=str(customer_id)):
        if not is_messaging_allowed(seller_id, customer_id, order_id):
            raise PolicyViolationError(
                {"customer_id": ["Messaging is not allowed between this customer and seller"]}
            )

        msg = Message.send(
            seller_id=seller_id,
            customer_id=customer_id,
            message=message,
            subject=subject,
            order_id=order_id,
            is_seller_message=is_seller_message,
            reply_to=reply_to,
        )
        current_domain.repository_for(Message).add(msg)

    logger.info(
        "Message sent",
        message_id=str(msg.id),
        seller_id=str(seller_id),
        customer_id=str(customer_id),
        is_seller_message=is_seller_message,
    )
    return str(msg.id)


@marketplace.command_handler(part_of=Message)
class SendMessageHandler:
    @handle(SendMessage)
    def send_message(self, command):
        return send(
            seller_id=command.seller_id,
            customer_id=command.customer_id,
            message=command.message,
            subject=command.subject,
            order_id=command.order_id,
            is_seller_message=bool(command.is_seller_message),
        )

    @handle(ReplyToMessage)
    def reply_to_message(self, command):
        with guarded("reply_to_message", message_id=str(command.message_id)):
            original = current_domain.repository_for(Message).get(command.message_id)
        return send(
            seller_id=original.seller_id,
            customer_id=original.customer_id,
            message=command.message,
            subject=command.subject or _reply_subject(original.subject),
            order_id=original.order_id,
            is_seller_message=not original.is_seller_message,
            reply_to=original.id,
        )
