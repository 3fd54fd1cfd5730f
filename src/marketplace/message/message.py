"""Message aggregate: one message between a seller and a customer.

``is_seller_message`` gives the direction: True when the seller wrote to the
customer. The recipient is therefore the customer for seller messages and the
seller otherwise. Read and archive flags are plain idempotent toggles.
"""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Identifier, String

from marketplace.domain import marketplace
from marketplace.message.events import MessageDeleted, MessageSent

SUBJECT_MAX_LENGTH = 255
MESSAGE_MAX_LENGTH = 5000


@marketplace.aggregate
class Message:
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier()
    subject = String(max_length=SUBJECT_MAX_LENGTH)
    message = String(required=True, max_length=MESSAGE_MAX_LENGTH)
    is_seller_message = Boolean(default=False)
    is_read = Boolean(default=False)
    is_archived = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def send(cls, seller_id, customer_id, message, subject=None, order_id=None, is_seller_message=False, reply_to=None):
        now = datetime.now(UTC)
        msg = cls(
            seller_id=seller_id,
            customer_id=customer_id,
            order_id=order_id,
            subject=subject,
            message=message,
            is_seller_message=is_seller_message,
            is_read=False,
            is_archived=False,
            created_at=now,
            updated_at=now,
        )
        msg.raise_(
            MessageSent(
                message_id=str(msg.id),
                seller_id=str(seller_id),
                customer_id=str(customer_id),
                order_id=str(order_id) if order_id else None,
                subject=subject,
                is_seller_message=is_seller_message,
                reply_to=str(reply_to) if reply_to else None,
                sent_at=now,
            )
        )
        return msg

    def is_addressed_to(self, user_id, is_seller: bool) -> bool:
        if is_seller:
            return not self.is_seller_message and str(self.seller_id) == str(user_id)
        return self.is_seller_message and str(self.customer_id) == str(user_id)

    def mark_read(self):
        if not self.is_read:
            self.is_read = True
            self.updated_at = datetime.now(UTC)

    def mark_unread(self):
        if self.is_read:
            self.is_read = False
            self.updated_at = datetime.now(UTC)

    def archive(self):
        if not self.is_archived:
            self.is_archived = True
            self.updated_at = datetime.now(UTC)

    def unarchive(self):
        if self.is_archived:
            self.is_archived = False
            self.updated_at = datetime.now(UTC)

    def mark_deleted(self):
        self.raise_(
            MessageDeleted(
                message_id=str(self.id),
                seller_id=str(self.seller_id),
                customer_id=str(self.customer_id),
                deleted_at=datetime.now(UTC),
            )
        )
