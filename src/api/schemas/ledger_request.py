"""Request schemas for Ledger API

Pydantic models for validating incoming HTTP requests. Amount sign and
size checks are left to the use cases so they surface as INVALID_AMOUNT.
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class MutationRequestSchema(BaseModel):
    idempotency_key: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Unique key for idempotent operations (required, non-empty)"
    )

    order_id: Optional[str] = Field(default=None, description="Correlated order")

    description: Optional[str] = Field(default=None, description="Human-readable description")

    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Opaque metadata stored with the event"
    )


class PointsRequestSchema(MutationRequestSchema):
    """
    Request schema for accruing or redeeming loyalty points

    Used for POST /tenants/{tenant_id}/loyalty/accrue and /redeem.
    """

    customer_id: str = Field(..., min_length=1, description="Customer identifier")

    program_id: str = Field(..., min_length=1, description="Loyalty program identifier")

    points: int = Field(..., description="Points (must be > 0)")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "customer_id": "cust_001",
                "program_id": "prog_gold",
                "points": 150,
                "order_id": "ORD-1",
                "idempotency_key": "order:ORD-1:accrue",
                "metadata": {"channel": "pos"}
            }
        }
    )


class ChargeRequestSchema(MutationRequestSchema):
    """
    Request schema for charging a customer credit account

    Used for POST /tenants/{tenant_id}/credit/charge.
    """

    customer_id: str = Field(..., min_length=1, description="Customer identifier")

    amount: int = Field(..., description="Amount in cents (must be > 0)")

    fee: bool = Field(default=False, description="Record the debit as a fee")


class PaymentRequestSchema(MutationRequestSchema):
    """Request schema for POST /tenants/{tenant_id}/credit/payment"""

    customer_id: str = Field(..., min_length=1, description="Customer identifier")

    amount: int = Field(..., description="Amount in cents (must be > 0)")


class AdjustRequestSchema(BaseModel):
    """Request schema for POST /tenants/{tenant_id}/ledger/accounts/{account_id}/adjust"""

    amount: int = Field(..., description="Signed adjustment (must be non-zero)")

    description: str = Field(..., min_length=1, description="Reason for the adjustment")

    idempotency_key: str = Field(..., min_length=1, max_length=255)

    metadata: Optional[Dict[str, Any]] = Field(default=None)


class AccountStatusRequestSchema(BaseModel):
    """Request schema for PUT /tenants/{tenant_id}/ledger/accounts/{account_id}/status"""

    is_active: bool = Field(..., description="True to reactivate, False to deactivate")
