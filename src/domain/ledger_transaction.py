"""Ledger Transaction Domain Entity

Balance-affecting record paired 1:1 with a LedgerEvent. Per account the
transactions form a chain ordered by id: each balance_before equals the
previous balance_after.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, String
from src.domain.base import BaseModel, IdType


class LedgerTransaction(BaseModel, table=True):
    """
    Ledger Transaction - signed balance change with before/after snapshots

    Domain Rules:
    - Immutable (append-only)
    - balance_after = balance_before + amount_change
    - expires_at only set on earned points under a program expiration policy
    """

    __tablename__ = "ledger_transactions"
    __table_args__ = (
        Index("ix_ledger_transactions_account_id", "account_id", "id"),
        Index("ix_ledger_transactions_expires_at", "expires_at"),
        CheckConstraint(
            "balance_after = balance_before + amount_change",
            name="balance_chain_consistent",
        ),
        CheckConstraint("amount_change <> 0", name="amount_change_non_zero"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique transaction identifier (defines commit order)"
    )

    tenant_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Owning tenant"
    )

    account_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("ledger_accounts.id"), nullable=False),
        description="Foreign key to LedgerAccount"
    )

    event_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("ledger_events.id"), nullable=False, unique=True),
        description="Foreign key to the paired LedgerEvent"
    )

    amount_change: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Signed balance change"
    )

    balance_before: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Balance before this transaction"
    )

    balance_after: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Balance after this transaction"
    )

    expires_at: Optional[datetime] = Field(
        default=None,
        description="Expiry of earned points (None = never)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Transaction timestamp (immutable)"
    )
