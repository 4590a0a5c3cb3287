"""Ledger Account Domain Entity

One balance per (tenant, customer, program). Loyalty accounts carry a
program; customer credit accounts do not.
Balance is always >= 0 and updated only alongside a LedgerTransaction.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, String, UniqueConstraint
from src.domain.base import BaseModel, IdType


class LedgerAccount(BaseModel, table=True):
    """
    Ledger Account - cached balance for one subject

    Domain Rules:
    - One account per (tenant_id, customer_id, program_id)
    - current_balance equals the sum of the account's transaction amount_change
    - current_balance must be non-negative
    - Never deleted; deactivated with is_active = False
    """

    __tablename__ = "ledger_accounts"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id", "customer_id", "program_id",
            name="uq_ledger_accounts_subject",
            postgresql_nulls_not_distinct=True,
        ),
        Index("ix_ledger_accounts_tenant_updated", "tenant_id", "updated_at"),
        CheckConstraint("current_balance >= 0", name="current_balance_non_negative"),
        CheckConstraint("lifetime_earned >= 0", name="lifetime_earned_non_negative"),
        CheckConstraint("lifetime_spent >= 0", name="lifetime_spent_non_negative"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique account identifier (auto-increment)"
    )

    tenant_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Owning tenant"
    )

    customer_id: str = Field(
        sa_column=Column(String(64), ForeignKey("customers.id"), nullable=False),
        description="Account holder"
    )

    program_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), ForeignKey("loyalty_programs.id"), nullable=True),
        description="Loyalty program (None for credit accounts)"
    )

    current_balance: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Cached balance in the smallest unit"
    )

    lifetime_earned: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Total accrued or paid in"
    )

    lifetime_spent: int = Field(
        default=0,
        sa_column=Column(BigInteger, nullable=False, default=0),
        description="Total redeemed, charged or billed as fees"
    )

    is_active: bool = Field(default=True, description="Debits are rejected when False")

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Account creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last balance or status change"
    )

    @property
    def is_credit_account(self) -> bool:
        return self.program_id is None
