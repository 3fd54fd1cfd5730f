"""Shared BDD fixtures and step definitions for the marketplace."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then, when

from marketplace.exceptions import ConflictError, MarketplaceError
from marketplace.seller.lifecycle import ApproveSeller
from marketplace.seller.registration import RegisterSeller
from marketplace.seller.seller import Seller


@pytest.fixture()
def context():
    """Mutable scenario state: the current seller id and the last captured error."""
    return {"seller_id": None, "error": None}


@pytest.fixture()
def attempt(context):
    """Process a command, storing a marketplace or validation error instead of raising it."""

    def _attempt(build_command):
        context["error"] = None
        try:
            return current_domain.process(build_command(), asynchronous=False)
        except (MarketplaceError, ValidationError) as exc:
            context["error"] = exc
            return None

    return _attempt


@pytest.fixture()
def current_seller(context):
    return lambda: current_domain.repository_for(Seller).get(context["seller_id"])


def _register(context, attempt, customer_id, company_name):
    seller_id = attempt(lambda: RegisterSeller(customer_id=customer_id, company_name=company_name))
    if seller_id is not None:
        context["seller_id"] = seller_id


# ---------------------------------------------------------------------------
# Given / When steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('customer "{customer_id}" registered the company "{company_name}"'))
def registered_seller(context, attempt, customer_id, company_name):
    _register(context, attempt, customer_id, company_name)
    assert context["error"] is None


@when(parsers.cfparse('customer "{customer_id}" registers the company "{company_name}"'))
def register_seller(context, attempt, customer_id, company_name):
    _register(context, attempt, customer_id, company_name)


@given("the admin approves the seller")
@when("the admin approves the seller")
def approve_seller(context):
    current_domain.process(ApproveSeller(seller_id=context["seller_id"]), asynchronous=False)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the seller's approval status is \"{status}\""))
def approval_status_is(current_seller, status):
    assert current_seller().approval_status == status


@then("the registration fails with a conflict")
def registration_conflict(context):
    assert isinstance(context["error"], ConflictError)
