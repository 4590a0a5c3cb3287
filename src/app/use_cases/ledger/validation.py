"""Pre-mutation checks

Run against state read in the same unit of work as the locked account.
"""

from typing import Any, Optional
from src.domain.ledger_account import LedgerAccount
from .errors import AccountInactiveError, InsufficientBalanceError, InvalidAmountError, PolicyViolationError


# Largest value a BIGINT column holds
MAX_AMOUNT = 2**63 - 1


def _is_integer(amount: Any) -> bool:
    return isinstance(amount, int) and not isinstance(amount, bool)


def validate_amount(amount: Any) -> int:
    """Amounts for accrue, redeem, charge and payment must be positive integers."""
    if not _is_integer(amount) or amount <= 0:
        raise InvalidAmountError(
            "Amount must be a positive integer",
            requested_amount=amount,
        )
    if amount > MAX_AMOUNT:
        raise InvalidAmountError(
            f"Amount must not exceed {MAX_AMOUNT}",
            reason="amount_too_large",
            requested_amount=amount,
        )
    return amount


def validate_signed_amount(amount: Any) -> int:
    """Adjustments may be negative but never zero."""
    if not _is_integer(amount) or amount == 0:
        raise InvalidAmountError(
            "Adjustment must be a non-zero integer",
            requested_amount=amount,
        )
    if abs(amount) > MAX_AMOUNT:
        raise InvalidAmountError(
            f"Adjustment must not exceed {MAX_AMOUNT} in magnitude",
            reason="amount_too_large",
            requested_amount=amount,
        )
    return amount


def validate_active(account: LedgerAccount, amount: Optional[int] = None) -> None:
    """Deactivated accounts reject redemption, charges, fees and payments."""
    if not account.is_active:
        raise AccountInactiveError(
            "Ledger account is inactive",
            account_id=account.id,
            requested_amount=amount,
            current_balance=account.current_balance,
        )


def validate_debit(
    account: LedgerAccount, amount: int, minimum_redemption: Optional[int] = None
) -> None:
    """
    Checks for redeem / charge / fee, in order: active account, sufficient
    balance, then the program's minimum redemption.
    """
    validate_active(account, amount)

    if account.current_balance < amount:
        raise InsufficientBalanceError(
            f"Insufficient balance. Available: {account.current_balance}, Requested: {amount}",
            reason=f"balance={account.current_balance}, required={amount}",
            account_id=account.id,
            current_balance=account.current_balance,
            requested_amount=amount,
        )

    if minimum_redemption and amount < minimum_redemption:
        raise PolicyViolationError(
            f"Minimum redemption is {minimum_redemption}",
            reason=f"requested={amount}, minimum={minimum_redemption}",
            account_id=account.id,
            minimum_redemption=minimum_redemption,
            requested_amount=amount,
            current_balance=account.current_balance,
        )
