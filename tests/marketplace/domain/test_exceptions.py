"""Tests for the marketplace error taxonomy and the guarded() boundary."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError

from marketplace.exceptions import (
    ConflictError,
    MarketplaceError,
    OperationFailure,
    PolicyViolationError,
    QuotaExceededError,
    describe_error,
    guarded,
)


class TestMarketplaceError:
    def test_string_message_is_wrapped(self):
        error = ConflictError("Duplicate listing")
        assert error.messages == {"_entity": ["Duplicate listing"]}
        assert error.reason == "Duplicate listing"

    def test_reason_is_first_message(self):
        error = PolicyViolationError({"rating": ["Ratings are disabled", "second"]})
        assert error.reason == "Ratings are disabled"

    def test_quota_is_a_policy_violation(self):
        assert issubclass(QuotaExceededError, PolicyViolationError)
        assert issubclass(PolicyViolationError, MarketplaceError)


class TestGuarded:
    @pytest.mark.parametrize(
        "error",
        [
            ValidationError({"field": ["bad"]}),
            ObjectNotFoundError({"_entity": ["missing"]}),
            ConflictError({"subdomain": ["taken"]}),
        ],
    )
    def test_taxonomy_errors_pass_through(self, error):
        with pytest.raises(type(error)) as exc:
            with guarded("approve_seller"):
                raise error
        assert exc.value is error

    def test_unexpected_errors_become_operation_failure(self):
        cause = RuntimeError("connection reset by peer")
        with pytest.raises(OperationFailure) as exc:
            with guarded("approve_seller", seller_id="s-1"):
                raise cause
        assert exc.value.__cause__ is cause
        assert exc.value.messages == {"_entity": ["Unable to approve seller."]}
        assert "connection reset" not in exc.value.reason

    def test_no_error_is_a_no_op(self):
        with guarded("approve_seller"):
            value = 1
        assert value == 1


class TestDescribeError:
    def test_flattens_messages(self):
        error = ValidationError({"rating": ["too low"], "title": ["too long", "empty"]})
        assert describe_error(error) == "rating: too low; title: too long, empty"

    def test_plain_exception(self):
        assert describe_error(RuntimeError("boom")) == "boom"
