"""BDD tests for buyer/seller messaging."""

from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

from marketplace.message.queries import get_unread_message_count
from marketplace.message.sending import ReplyToMessage, SendMessage

scenarios("features/messaging.feature")


def _send(context, attempt, customer_id, text, order_id):
    context["message_id"] = attempt(
        lambda: SendMessage(seller_id=context["seller_id"], customer_id=customer_id, message=text, order_id=order_id)
    )


@given(parsers.cfparse('customer "{customer_id}" sent a message about order "{order_id}"'))
def sent_message(context, attempt, customer_id, order_id):
    _send(context, attempt, customer_id, "Where is my parcel?", order_id)
    assert context["error"] is None


@when(parsers.cfparse('customer "{customer_id}" sends a message of {length:d} characters about order "{order_id}"'))
def send_sized_message(context, attempt, customer_id, length, order_id):
    _send(context, attempt, customer_id, "x" * length, order_id)


@when(parsers.cfparse('the seller replies "{text}"'))
def seller_replies(context, text):
    current_domain.process(ReplyToMessage(message_id=context["message_id"], message=text), asynchronous=False)


@then(parsers.re(r"the seller has (?P<count>\d+) unread messages?"))
def seller_unread(context, count):
    assert get_unread_message_count(context["seller_id"], is_seller=True) == int(count)


@then(parsers.re(r'customer "(?P<customer_id>[^"]+)" has (?P<count>\d+) unread messages?'))
def customer_unread(customer_id, count):
    assert get_unread_message_count(customer_id) == int(count)


@then("the message is refused as invalid")
def message_refused(context):
    assert isinstance(context["error"], ValidationError)
