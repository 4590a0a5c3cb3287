"""Data Transfer Objects for Ledger Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class LedgerCommandDTO(BaseModel):
    """Fields shared by every balance mutation"""

    tenant_id: str = Field(..., min_length=1, description="Tenant identifier")

    actor_id: str = Field(..., min_length=1, description="Authenticated actor, recorded as created_by")

    idempotency_key: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Caller-supplied key; replays return the original transaction"
    )

    order_id: Optional[str] = Field(default=None, description="Correlated order")

    description: Optional[str] = Field(default=None, description="Human-readable description")

    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Opaque metadata stored on the event"
    )


class AccrueCommandDTO(LedgerCommandDTO):
    """
    Command DTO for accruing loyalty points

    Used as input to AccruePoints use case.
    """

    customer_id: str = Field(..., min_length=1, description="Customer earning the points")

    program_id: str = Field(..., min_length=1, description="Loyalty program")

    points: int = Field(..., description="Points to accrue (must be > 0)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "tenant_id": "tenant_xyz789",
                "actor_id": "user_42",
                "customer_id": "cust_001",
                "program_id": "prog_gold",
                "points": 150,
                "order_id": "ORD-1",
                "idempotency_key": "order:ORD-1:accrue",
                "metadata": {"channel": "pos"}
            }
        }
    )


class RedeemCommandDTO(LedgerCommandDTO):
    """
    Command DTO for redeeming loyalty points

    Used as input to RedeemPoints use case.
    """

    customer_id: str = Field(..., min_length=1, description="Customer spending the points")

    program_id: str = Field(..., min_length=1, description="Loyalty program")

    points: int = Field(..., description="Points to redeem (must be > 0)")


class ChargeCommandDTO(LedgerCommandDTO):
    """
    Command DTO for charging a customer credit account

    fee=True records the debit as a fee instead of a charge.
    """

    customer_id: str = Field(..., min_length=1, description="Credit account holder")

    amount: int = Field(..., description="Amount in cents (must be > 0)")

    fee: bool = Field(default=False, description="Record as a fee")


class PaymentCommandDTO(LedgerCommandDTO):
    """Command DTO for recording a payment on a customer credit account"""

    customer_id: str = Field(..., min_length=1, description="Credit account holder")

    amount: int = Field(..., description="Amount in cents (must be > 0)")


class AdjustCommandDTO(LedgerCommandDTO):
    """
    Command DTO for a manual balance adjustment

    amount is signed; negative adjustments cannot overdraw the account.
    """

    account_id: int = Field(..., description="Account to adjust")

    amount: int = Field(..., description="Signed adjustment (must be non-zero)")


class SetAccountStatusCommandDTO(BaseModel):
    """Command DTO for deactivating or reactivating an account"""

    tenant_id: str = Field(..., min_length=1, description="Tenant identifier")

    account_id: int = Field(..., description="Account to update")

    is_active: bool = Field(..., description="New status")

    actor_id: str = Field(..., min_length=1, description="Authenticated actor")


class LedgerMutationResponseDTO(BaseModel):
    """
    Response DTO for balance mutations

    Returned by AccruePoints, RedeemPoints, ChargeCredit, RecordPayment and
    AdjustBalance. new_balance is the single source of truth after the call.
    """

    transaction_id: int = Field(..., description="Ledger transaction ID")

    event_id: int = Field(..., description="Ledger event ID")

    account_id: int = Field(..., description="Ledger account ID")

    tenant_id: str = Field(..., description="Tenant identifier")

    customer_id: str = Field(..., description="Account holder")

    program_id: Optional[str] = Field(default=None, description="Loyalty program (None for credit)")

    event_type: str = Field(..., description="earned, redeemed, charge, payment, fee or adjustment")

    amount: int = Field(..., description="Magnitude of the action")

    amount_change: int = Field(..., description="Signed balance change")

    balance_before: int = Field(..., description="Balance before the transaction")

    new_balance: int = Field(..., description="Balance after the transaction")

    expires_at: Optional[datetime] = Field(default=None, description="Expiry of earned points")

    order_id: Optional[str] = Field(default=None, description="Correlated order")

    idempotency_key: str = Field(..., description="Idempotency key")

    replayed: bool = Field(default=False, description="True when served from an earlier identical request")

    created_at: datetime = Field(..., description="Transaction timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "transaction_id": 17,
                "event_id": 17,
                "account_id": 3,
                "tenant_id": "tenant_xyz789",
                "customer_id": "cust_001",
                "program_id": "prog_gold",
                "event_type": "earned",
                "amount": 150,
                "amount_change": 150,
                "balance_before": 0,
                "new_balance": 150,
                "expires_at": "2025-01-01T00:00:00Z",
                "order_id": "ORD-1",
                "idempotency_key": "order:ORD-1:accrue",
                "replayed": False,
                "created_at": "2024-01-01T00:00:00Z"
            }
        }
    )


class AccountDTO(BaseModel):
    """Ledger account snapshot"""

    account_id: int
    tenant_id: str
    customer_id: str
    program_id: Optional[str] = None
    current_balance: int
    lifetime_earned: int
    lifetime_spent: int
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_account(cls, account) -> "AccountDTO":
        return cls(
            account_id=account.id,
            tenant_id=account.tenant_id,
            customer_id=account.customer_id,
            program_id=account.program_id,
            current_balance=account.current_balance,
            lifetime_earned=account.lifetime_earned,
            lifetime_spent=account.lifetime_spent,
            is_active=account.is_active,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class ListAccountsResponseDTO(BaseModel):
    """Paginated account listing"""

    accounts: List[AccountDTO]
    total: int
    limit: int
    offset: int


class LedgerTransactionDTO(BaseModel):
    """One transaction joined with its event"""

    transaction_id: int
    event_id: int
    event_type: str
    amount: int
    amount_change: int
    balance_before: int
    balance_after: int
    expires_at: Optional[datetime] = None
    description: Optional[str] = None
    order_id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_by: str
    created_at: datetime


class ListLedgerTransactionsResponseDTO(BaseModel):
    """Paginated transaction history of one account"""

    account_id: int
    transactions: List[LedgerTransactionDTO]
    total: int
    limit: int
    offset: int


class LedgerDiscrepancyDTO(BaseModel):
    """
    A ledger account whose cached balance disagrees with its transaction log

    kind is one of:
    - balance_mismatch: current_balance != sum(amount_change)
    - chain_break: a transaction's balance_before differs from the previous balance_after
    - row_inconsistent: balance_after != balance_before + amount_change
    - last_balance_mismatch: latest balance_after != current_balance
    """

    tenant_id: str
    account_id: int
    kind: str
    transaction_id: Optional[int] = None
    expected: int
    actual: int


class ReconciliationResultDTO(BaseModel):
    """Outcome of one reconciliation run"""

    total_accounts_checked: int
    discrepancies_found: int
    discrepancies: List[LedgerDiscrepancyDTO]
    reconciliation_time: datetime
    execution_time_ms: int
