"""Repository for the Message aggregate."""

from marketplace.domain import marketplace
from marketplace.message.message import Message


@marketplace.repository(part_of=Message)
class MessageRepository:
    def query_for_user(self, user_id, is_seller: bool, **filters):
        """Every message the user took part in, newest first."""
        party = {"seller_id": str(user_id)} if is_seller else {"customer_id": str(user_id)}
        return self._dao.query.filter(**party, **filters).order_by("-created_at")

    def query_inbox(self, user_id, is_seller: bool, **filters):
        """Messages addressed to the user: customer-to-seller for sellers and the reverse for customers."""
        return self.query_for_user(user_id, is_seller, is_seller_message=not is_seller, **filters)

    def query_conversation(self, seller_id, customer_id, **filters):
        return self._dao.query.filter(
            seller_id=str(seller_id), customer_id=str(customer_id), **filters
        ).order_by("created_at")

    def has_conversation(self, seller_id, customer_id) -> bool:
        return self.query_conversation(seller_id, customer_id).all().total > 0

    def count(self, **filters) -> int:
        query = self._dao.query.filter(**filters) if filters else self._dao.query
        return query.all().total

    def discard(self, message: Message) -> None:
        self._dao.delete(message)
