"""Customer Domain Entity

Owned by the CRM side of the application. The ledger only needs a
tenant-scoped existence check before opening an account for a customer.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import String, Text
from src.domain.base import BaseModel


class Customer(BaseModel, table=True):
    """
    Customer - subject of loyalty and credit accounts

    Domain Rules:
    - Belongs to exactly one tenant
    - Referenced by ledger accounts as an opaque foreign key
    """

    __tablename__ = "customers"
    __table_args__ = (
        Index("ix_customers_tenant_id", "tenant_id"),
    )

    id: str = Field(
        sa_column=Column(String(64), primary_key=True),
        description="Customer identifier"
    )

    tenant_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Owning tenant"
    )

    first_name: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Given name"
    )

    last_name: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Family name"
    )

    email: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Contact email"
    )

    is_active: bool = Field(default=True, description="Soft-delete flag")

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Creation timestamp"
    )
