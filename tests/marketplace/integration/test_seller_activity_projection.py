"""Integration tests for the SellerActivity projection."""

from protean import current_domain

from marketplace.projections.seller_activity import SellerActivity, get_seller_activity_log
from marketplace.seller.lifecycle import (
    ActivateSeller,
    ChangeCommissionRate,
    DeleteSeller,
    RejectSeller,
    SuspendSeller,
)


def _process(command):
    current_domain.process(command, asynchronous=False)


class TestSellerActivity:
    def test_registration_is_recorded(self, register_seller):
        seller_id = register_seller(company_name="Blue Widgets", approve=False)
        [entry] = get_seller_activity_log(seller_id)
        assert entry.activity == "registered"
        assert "bluewidgets" in entry.description
        assert "Pending" in entry.description

    def test_lifecycle_is_recorded_newest_first(self, seller_id):
        _process(SuspendSeller(seller_id=seller_id, reason="Late shipments"))
        _process(ActivateSeller(seller_id=seller_id))
        _process(ChangeCommissionRate(seller_id=seller_id, commission_rate=12.0))

        log = get_seller_activity_log(seller_id)
        assert [entry.activity for entry in log] == [
            "commission_changed",
            "activated",
            "suspended",
            "approved",
            "registered",
        ]
        assert log[0].description == "Commission rate changed from 10.0 to 12.0"
        assert log[2].description == "Seller suspended: Late shipments"
        assert log[1].description == "Seller activated (was Suspended)"

    def test_rejection_reason(self, register_seller):
        seller_id = register_seller(approve=False)
        _process(RejectSeller(seller_id=seller_id, reason="Invalid tax id"))
        assert get_seller_activity_log(seller_id)[0].description == "Seller rejected: Invalid tax id"

    def test_limit(self, seller_id):
        _process(SuspendSeller(seller_id=seller_id))
        assert len(get_seller_activity_log(seller_id, limit=2)) == 2

    def test_deletion_keeps_the_trail(self, seller_id):
        _process(DeleteSeller(seller_id=seller_id))
        log = get_seller_activity_log(seller_id)
        assert log[0].activity == "deleted"

    def test_entries_are_per_seller(self, register_seller):
        first = register_seller()
        register_seller()
        repo = current_domain.repository_for(SellerActivity)
        assert {str(entry.seller_id) for entry in get_seller_activity_log(first)} == {first}
        assert repo._dao.query.all().total == 4
