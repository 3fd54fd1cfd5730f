import os

import pytest


@pytest.fixture(scope="session")
def _marketplace_domain(request):
    """Initialize the marketplace domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from marketplace.domain import marketplace

    marketplace.init()
    return marketplace


@pytest.fixture(scope="session", autouse=True)
def setup_db(_marketplace_domain):
    from marketplace.utils.db import drop_db, setup_db

    setup_db(_marketplace_domain)

    yield

    drop_db(_marketplace_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_marketplace_domain):
    """Push domain context before each test; reset data, policy and notifier after."""
    from marketplace.notifier import reset_notifier
    from marketplace.policy import reset_policy

    reset_policy()
    reset_notifier()

    ctx = _marketplace_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()

    reset_policy()
    reset_notifier()


@pytest.fixture()
def notifier():
    from marketplace.notifier import get_notifier

    return get_notifier()


@pytest.fixture()
def register_seller():
    """Register a seller through the command handler and return its id."""
    from protean import current_domain

    from marketplace.seller.lifecycle import ApproveSeller
    from marketplace.seller.registration import RegisterSeller
    from marketplace.seller.seller import Seller

    counter = {"n": 0}

    def _register(company_name=None, customer_id=None, approve=True, **extra):
        counter["n"] += 1
        seller_id = current_domain.process(
            RegisterSeller(
                customer_id=customer_id or f"cust-seller-{counter['n']:03d}",
                company_name=company_name or f"Seller Company {counter['n']}",
                **extra,
            ),
            asynchronous=False,
        )
        if approve and not current_domain.repository_for(Seller).get(seller_id).is_approved:
            current_domain.process(ApproveSeller(seller_id=seller_id), asynchronous=False)
        return seller_id

    return _register


@pytest.fixture()
def seller_id(register_seller):
    """An active, approved seller."""
    return register_seller(company_name="Acme Tools")
