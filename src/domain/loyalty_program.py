"""Loyalty Program Domain Entity

Program-level policy consumed by the ledger: point expiration and the
minimum number of points a single redemption must use.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Integer, String, Text
from src.domain.base import BaseModel


class LoyaltyProgram(BaseModel, table=True):
    """
    Loyalty Program - points policy for a tenant

    Domain Rules:
    - expiration_months is None when points never expire
    - minimum_redemption applies to every redemption against the program
    """

    __tablename__ = "loyalty_programs"
    __table_args__ = (
        Index("ix_loyalty_programs_tenant_id", "tenant_id"),
        CheckConstraint("minimum_redemption >= 0", name="minimum_redemption_non_negative"),
        CheckConstraint(
            "expiration_months IS NULL OR expiration_months > 0",
            name="expiration_months_positive",
        ),
    )

    id: str = Field(
        sa_column=Column(String(64), primary_key=True),
        description="Program identifier"
    )

    tenant_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Owning tenant"
    )

    name: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Display name"
    )

    expiration_months: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, nullable=True),
        description="Months until earned points expire (None = never)"
    )

    minimum_redemption: int = Field(
        default=100,
        sa_column=Column(Integer, nullable=False, default=100),
        description="Minimum points per redemption"
    )

    is_active: bool = Field(default=True, description="Program enabled flag")

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Creation timestamp"
    )
