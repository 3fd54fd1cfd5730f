"""Tests for the SellerReview aggregate."""

import pytest
from protean.exceptions import ValidationError

from marketplace.review.events import (
    SellerReviewApproved,
    SellerReviewDeleted,
    SellerReviewRejected,
    SellerReviewSubmitted,
    SellerReviewUpdated,
)
from marketplace.review.review import SellerReview


def _review(**overrides):
    defaults = {
        "seller_id": "seller-001",
        "customer_id": "cust-001",
        "rating": 4,
        "title": "Fast shipping",
        "comment": "Arrived two days early.",
    }
    defaults.update(overrides)
    return SellerReview.submit(**defaults)


class TestRatingRange:
    @pytest.mark.parametrize("rating", [1, 5])
    def test_boundaries_accepted(self, rating):
        assert _review(rating=rating).rating == rating

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_out_of_range_rejected(self, rating):
        with pytest.raises(ValidationError) as exc:
            _review(rating=rating)
        assert "rating" in exc.value.messages

    def test_update_cannot_leave_range(self):
        review = _review()
        with pytest.raises(ValidationError):
            review.update(rating=6)


class TestFieldLimits:
    def test_title_limit(self):
        assert _review(title="t" * 255).title == "t" * 255
        with pytest.raises(ValidationError):
            _review(title="t" * 256)

    def test_comment_limit(self):
        assert len(_review(comment="c" * 1000).comment) == 1000
        with pytest.raises(ValidationError):
            _review(comment="c" * 1001)


class TestReviewLifecycle:
    def test_submitted_event(self):
        review = _review(approved=True)
        event = review._events[0]
        assert isinstance(event, SellerReviewSubmitted)
        assert event.is_approved is True
        assert event.seller_id == "seller-001"

    def test_approve_clears_rejection_reason(self):
        review = _review()
        review.reject("Off topic")
        assert review.rejection_reason == "Off topic"
        review.approve()
        assert review.is_approved is True
        assert review.rejection_reason is None
        assert isinstance(review._events[-1], SellerReviewApproved)

    def test_reject(self):
        review = _review(approved=True)
        review.reject("Abusive language")
        assert review.is_approved is False
        assert isinstance(review._events[-1], SellerReviewRejected)

    def test_partial_update_keeps_other_fields_and_approval(self):
        review = _review(approved=True)
        review.update(rating=2)
        assert review.rating == 2
        assert review.title == "Fast shipping"
        assert review.is_approved is True
        event = review._events[-1]
        assert isinstance(event, SellerReviewUpdated)
        assert event.rating == 2

    def test_update_can_clear_comment(self):
        review = _review()
        review.update(comment=None)
        assert review.comment is None

    def test_mark_deleted(self):
        review = _review()
        review.mark_deleted()
        assert isinstance(review._events[-1], SellerReviewDeleted)
