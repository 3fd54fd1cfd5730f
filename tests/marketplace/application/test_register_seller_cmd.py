"""Application tests for the RegisterSeller command handler."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from marketplace.exceptions import ConflictError, OperationFailure, PolicyViolationError
from marketplace.policy import configure_policy
from marketplace.seller.registration import (
    RegisterSeller,
    can_register,
    generate_subdomain,
    is_subdomain_available,
)
from marketplace.seller.repository import SellerRepository
from marketplace.seller.seller import Seller


def _register(**overrides):
    defaults = {
        "customer_id": "cust-reg-001",
        "company_name": "Acme Tools",
    }
    defaults.update(overrides)
    return current_domain.process(RegisterSeller(**defaults), asynchronous=False)


class TestRegisterSeller:
    def test_registration_persists_pending_seller(self):
        seller_id = _register()
        seller = current_domain.repository_for(Seller).get(seller_id)
        assert seller.company_name == "Acme Tools"
        assert seller.subdomain == "acmetools"
        assert seller.status == "Active"
        assert seller.approval_status == "Pending"
        assert seller.can_sell is False

    def test_default_commission_rate_applied(self):
        configure_policy(default_commission_rate=12.5)
        seller = current_domain.repository_for(Seller).get(_register())
        assert seller.commission_rate == 12.5

    def test_explicit_commission_rate(self):
        seller = current_domain.repository_for(Seller).get(_register(commission_rate=7.0))
        assert seller.commission_rate == 7.0

    def test_commission_rate_outside_policy_bounds(self):
        configure_policy(min_commission_rate=5.0, max_commission_rate=20.0)
        with pytest.raises(ValidationError):
            _register(commission_rate=25.0)

    def test_statistics_start_at_zero(self):
        seller = current_domain.repository_for(Seller).get(_register())
        assert seller.statistics() == {
            "product_count": 0,
            "review_count": 0,
            "rating": 0.0,
            "total_sales": 0.0,
        }

    def test_business_details_are_stored(self):
        seller_id = _register(tax_id="DE123456789", city="Berlin", country_id="DE")
        seller = current_domain.repository_for(Seller).get(seller_id)
        assert seller.tax_id == "DE123456789"
        assert seller.city == "Berlin"
        assert seller.country_id == "DE"

    def test_short_company_name_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _register(company_name=" A ")
        assert "company_name" in exc.value.messages


class TestOneSellerPerCustomer:
    def test_second_registration_conflicts(self):
        _register()
        assert can_register("cust-reg-001") is False
        with pytest.raises(ConflictError):
            _register(company_name="Acme Tools Two")

    def test_other_customer_can_register(self):
        _register()
        assert can_register("cust-reg-002") is True


class TestSubdomainAllocation:
    def test_same_company_name_gets_suffix(self):
        first = _register(customer_id="cust-a")
        second = _register(customer_id="cust-b")
        third = _register(customer_id="cust-c")
        repo = current_domain.repository_for(Seller)
        assert [repo.get(i).subdomain for i in (first, second, third)] == ["acmetools", "acmetools1", "acmetools2"]

    def test_reserved_name_is_not_generated(self):
        assert generate_subdomain("Admin") == "admin1"

    def test_name_without_letters_or_digits_falls_back(self):
        assert generate_subdomain("!!!") == "seller1"

    def test_explicit_subdomain(self):
        seller = current_domain.repository_for(Seller).get(_register(subdomain="acme-store"))
        assert seller.subdomain == "acme-store"

    def test_invalid_explicit_subdomain(self):
        with pytest.raises(ValidationError):
            _register(subdomain="-acme")

    def test_reserved_explicit_subdomain(self):
        with pytest.raises(ValidationError):
            _register(subdomain="www")

    def test_taken_explicit_subdomain(self):
        _register(customer_id="cust-a")
        assert is_subdomain_available("acmetools") is False
        with pytest.raises(ConflictError):
            _register(customer_id="cust-b", subdomain="acmetools")


class TestRegistrationPolicy:
    def test_marketplace_disabled(self):
        configure_policy(enabled=False)
        with pytest.raises(PolicyViolationError):
            _register()

    def test_registration_closed(self):
        configure_policy(allow_seller_registration=False)
        with pytest.raises(PolicyViolationError):
            _register()

    def test_auto_approval(self):
        configure_policy(auto_approve_sellers=True)
        seller = current_domain.repository_for(Seller).get(_register())
        assert seller.approval_status == "Approved"
        assert seller.approved_at is not None
        assert seller.can_sell is True

    def test_approval_not_required(self):
        configure_policy(require_seller_approval=False)
        seller = current_domain.repository_for(Seller).get(_register())
        assert seller.is_approved is True


class TestRegistrationNotification:
    def test_seller_is_notified(self, notifier):
        seller_id = _register()
        assert notifier.sent_for(seller_id) == ["registration"]
        payload = notifier.sent[0]["payload"]
        assert payload["subdomain"] == "acmetools"
        assert payload["approval_status"] == "Pending"

    def test_notifier_failure_keeps_registration(self, notifier):
        notifier.configure(should_fail=True)
        seller_id = _register()
        assert current_domain.repository_for(Seller).get(seller_id).company_name == "Acme Tools"
        assert notifier.sent == []


class TestStoreFailures:
    def test_account_lookup_failure_becomes_operation_failure(self, monkeypatch):
        def store_down(self, customer_id):
            raise ConnectionError("store down")

        monkeypatch.setattr(SellerRepository, "find_by_customer", store_down)
        with pytest.raises(OperationFailure) as exc:
            _register()
        assert isinstance(exc.value.__cause__, ConnectionError)
        assert exc.value.reason == "Unable to register seller."
