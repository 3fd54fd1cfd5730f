"""Message state changes: read flags, archiving, deletion."""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.exceptions import guarded
from marketplace.message.message import Message
from marketplace.utils.queries import fetch_all

logger = structlog.get_logger(__name__)


@marketplace.command(part_of="Message")
class MarkMessageRead:
    message_id = Identifier(required=True)


@marketplace.command(part_of="Message")
class MarkMessageUnread:
    message_id = Identifier(required=True)


@marketplace.command(part_of="Message")
class MarkAllMessagesRead:
    user_id = Identifier(required=True)
    is_seller = Boolean(default=False)


@marketplace.command(part_of="Message")
class DeleteMessage:
    message_id = Identifier(required=True)


@marketplace.command(part_of="Message")
class ArchiveConversation:
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@marketplace.command(part_of="Message")
class UnarchiveConversation:
    seller_id = Identifier(required=True)
    customer_id = Identifier(required=True)


@marketplace.command_handler(part_of=Message)
class MessageStateHandler:
    @handle(MarkMessageRead)
    def mark_read(self, command):
        with guarded("mark_message_read", message_id=str(command.message_id)):
            repo = current_domain.repository_for(Message)
            message = repo.get(command.message_id)
            message.mark_read()
            repo.add(message)

    @handle(MarkMessageUnread)
    def mark_unread(self, command):
        with guarded("mark_message_unread", message_id=str(command.message_id)):
            repo = current_domain.repository_for(Message)
            message = repo.get(command.message_id)
            message.mark_unread()
            repo.add(message)

    @handle(MarkAllMessagesRead)
    def mark_all_read(self, command):
        """Marks every unread message addressed to the user. Returns how many changed."""
        is_seller = bool(command.is_seller)
        with guarded("mark_all_messages_read", user_id=str(command.user_id)):
            repo = current_domain.repository_for(Message)
            unread = fetch_all(repo.query_inbox(command.user_id, is_seller, is_read=False))
            for message in unread:
                message.mark_read()
                repo.add(message)

        logger.info("Messages marked read", user_id=str(command.user_id), count=len(unread))
        return len(unread)

    @handle(DeleteMessage)
    def delete_message(self, command):
        with guarded("delete_message", message_id=str(command.message_id)):
            repo = current_domain.repository_for(Message)
            message = repo.get(command.message_id)
            message.mark_deleted()
            repo.add(message)
            repo.discard(message)

    @handle(ArchiveConversation)
    def archive_conversation(self, command):
        return self._set_archived(command.seller_id, command.customer_id, archived=True)

    @handle(UnarchiveConversation)
    def unarchive_conversation(self, command):
        return self._set_archived(command.seller_id, command.customer_id, archived=False)

    def _set_archived(self, seller_id, customer_id, archived: bool) -> int:
        with guarded("archive_conversation", seller_id=str(seller_id), customer_id=str(customer_id)):
            repo = current_domain.repository_for(Message)
            messages = fetch_all(repo.query_conversation(seller_id, customer_id, is_archived=not archived))
            for message in messages:
                if archived:
                    message.archive()
                else:
                    message.unarchive()
                repo.add(message)
        return len(messages)
