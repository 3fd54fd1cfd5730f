"""Application tests for RecordSale and the seller's total sales."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError

from marketplace.exceptions import ConflictError, OperationFailure
from marketplace.sale.recording import RecordSale
from marketplace.sale.repository import SaleRepository
from marketplace.seller.seller import Seller


def _record(seller_id, order_id="ord-001", amount=25.0, customer_id="cust-sale-001"):
    return current_domain.process(
        RecordSale(seller_id=seller_id, customer_id=customer_id, order_id=order_id, amount=amount),
        asynchronous=False,
    )


class TestRecordSale:
    def test_total_sales_accumulate(self, seller_id):
        _record(seller_id, "ord-001", 25.0)
        _record(seller_id, "ord-002", 14.99)
        assert current_domain.repository_for(Seller).get(seller_id).total_sales == 39.99

    def test_duplicate_order_conflicts(self, seller_id):
        _record(seller_id)
        with pytest.raises(ConflictError):
            _record(seller_id)

    def test_same_order_for_different_sellers(self, register_seller):
        assert _record(register_seller())
        assert _record(register_seller())

    def test_negative_amount(self, seller_id):
        with pytest.raises(ValidationError):
            _record(seller_id, amount=-1.0)

    def test_unknown_seller(self):
        with pytest.raises(ObjectNotFoundError):
            _record("missing-seller")


class TestStoreFailures:
    def test_duplicate_lookup_failure_becomes_operation_failure(self, seller_id, monkeypatch):
        def store_down(self, seller_id, order_id):
            raise ConnectionError("store down")

        monkeypatch.setattr(SaleRepository, "find_by_seller_and_order", store_down)
        with pytest.raises(OperationFailure) as exc:
            _record(seller_id)
        assert isinstance(exc.value.__cause__, ConnectionError)
        assert current_domain.repository_for(Seller).get(seller_id).total_sales == 0.0
