"""Unit tests for ledger pre-mutation validation

Tests cover:
- Amount checks (positive, signed, type)
- Debit check order: inactive, insufficient balance, minimum redemption
"""

import pytest

from src.app.use_cases.ledger.errors import (
    AccountInactiveError,
    InsufficientBalanceError,
    InvalidAmountError,
    PolicyViolationError,
)
from src.app.use_cases.ledger.validation import (
    MAX_AMOUNT,
    validate_active,
    validate_amount,
    validate_debit,
    validate_signed_amount,
)
from tests.fixtures.ledger_factory import make_account


class TestValidateAmount:
    @pytest.mark.parametrize("amount", [0, -1, True, 1.5, "10", None])
    def test_rejects_non_positive_or_non_integer(self, amount):
        with pytest.raises(InvalidAmountError) as exc_info:
            validate_amount(amount)

        assert exc_info.value.code == "INVALID_AMOUNT"

    def test_accepts_positive_integer(self):
        assert validate_amount(1) == 1

    def test_largest_bigint_accepted(self):
        assert validate_amount(MAX_AMOUNT) == MAX_AMOUNT

    def test_rejects_amount_past_bigint(self):
        with pytest.raises(InvalidAmountError) as exc_info:
            validate_amount(MAX_AMOUNT + 1)

        assert exc_info.value.reason == "amount_too_large"


class TestValidateSignedAmount:
    @pytest.mark.parametrize("amount", [MAX_AMOUNT + 1, -(MAX_AMOUNT + 1)])
    def test_rejects_magnitude_past_bigint(self, amount):
        with pytest.raises(InvalidAmountError):
            validate_signed_amount(amount)

    def test_rejects_zero(self):
        with pytest.raises(InvalidAmountError):
            validate_signed_amount(0)

    def test_accepts_negative(self):
        assert validate_signed_amount(-25) == -25


class TestValidateDebit:
    def test_inactive_checked_before_balance(self):
        """
        Given: Inactive account with zero balance
        When: Debiting more than the balance
        Then: AccountInactive wins over InsufficientBalance
        """
        account = make_account(balance=0, is_active=False)

        with pytest.raises(AccountInactiveError):
            validate_debit(account, 500, minimum_redemption=100)

    def test_insufficient_balance_checked_before_minimum(self):
        account = make_account(balance=40)

        with pytest.raises(InsufficientBalanceError) as exc_info:
            validate_debit(account, 50, minimum_redemption=100)

        assert exc_info.value.details["current_balance"] == 40
        assert exc_info.value.details["requested_amount"] == 50

    def test_below_minimum_with_sufficient_balance(self):
        account = make_account(balance=150)

        with pytest.raises(PolicyViolationError) as exc_info:
            validate_debit(account, 50, minimum_redemption=100)

        assert exc_info.value.details["minimum_redemption"] == 100
        assert exc_info.value.details["requested_amount"] == 50

    def test_exactly_minimum_and_exactly_balance_passes(self):
        validate_debit(make_account(balance=100), 100, minimum_redemption=100)

    def test_no_minimum_configured(self):
        validate_debit(make_account(balance=5), 1, minimum_redemption=0)
        validate_debit(make_account(balance=5), 1)


class TestValidateActive:
    def test_inactive_rejected(self):
        with pytest.raises(AccountInactiveError):
            validate_active(make_account(is_active=False), 10)

    def test_active_passes(self):
        validate_active(make_account())
