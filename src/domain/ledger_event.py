"""Ledger Event Domain Entity

Immutable fact describing one business action against an account.
Each event is paired 1:1 with a LedgerTransaction.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, CheckConstraint, ForeignKey, JSON, String, Text, UniqueConstraint
from src.domain.base import BaseModel, IdType


class LedgerEventType(str, Enum):
    """Ledger event types"""
    EARNED = "earned"            # Points accrued (order, bonus)
    REDEEMED = "redeemed"        # Points spent
    CHARGE = "charge"            # Credit account charged
    PAYMENT = "payment"          # Payment received on credit account
    FEE = "fee"                  # Fee billed to credit account
    ADJUSTMENT = "adjustment"    # Manual admin adjustment (either sign)


CREDITING_TYPES = frozenset({LedgerEventType.EARNED, LedgerEventType.PAYMENT})
DEBITING_TYPES = frozenset({LedgerEventType.REDEEMED, LedgerEventType.CHARGE, LedgerEventType.FEE})


class LedgerEvent(BaseModel, table=True):
    """
    Ledger Event - audit fact for a balance mutation

    Domain Rules:
    - Immutable (append-only)
    - amount is the non-negative magnitude; the sign lives on the transaction
    - idempotency_key is unique per tenant (prevents double application)
    - metadata is an opaque JSON object passed through untouched
    """

    __tablename__ = "ledger_events"
    __table_args__ = (
        UniqueConstraint("tenant_id", "idempotency_key", name="uq_ledger_events_idempotency"),
        Index("ix_ledger_events_account_id", "account_id"),
        Index("ix_ledger_events_order_id", "order_id"),
        CheckConstraint("amount >= 0", name="event_amount_non_negative"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique event identifier (auto-increment)"
    )

    tenant_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Owning tenant"
    )

    account_id: int = Field(
        sa_column=Column(BigInteger, ForeignKey("ledger_accounts.id"), nullable=False),
        description="Foreign key to LedgerAccount"
    )

    event_type: LedgerEventType = Field(description="Business action type")

    amount: int = Field(
        sa_column=Column(BigInteger, nullable=False),
        description="Magnitude of the action (always >= 0)"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Human-readable description"
    )

    event_metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        sa_column=Column("metadata", JSON, nullable=True),
        description="Opaque caller metadata"
    )

    order_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), nullable=True),
        description="Correlated order, if any"
    )

    idempotency_key: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Caller-supplied key, unique per tenant"
    )

    created_by: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Actor that performed the action"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Event timestamp (immutable)"
    )
