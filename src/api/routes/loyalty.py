"""Loyalty API Routes

FastAPI routes for accruing, redeeming and reading loyalty points.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.error import ClientError
from src.api.identity import get_actor_id
from src.api.schemas.ledger_request import PointsRequestSchema
from src.adapter.repositories.ledger_account_repository import SqlAlchemyLedgerAccountRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.ledger.accrue_points import AccruePoints
from src.app.use_cases.ledger.account_resolver import AccountResolver
from src.app.use_cases.ledger.dtos import (
    AccountDTO,
    AccrueCommandDTO,
    LedgerMutationResponseDTO,
    RedeemCommandDTO,
)
from src.app.use_cases.ledger.get_balance import GetBalance
from src.app.use_cases.ledger.redeem_points import RedeemPoints
from src.app.use_cases.ledger.transaction_processor import TransactionProcessor
from src.depends import get_account_resolver, get_session, get_transaction_processor

router = APIRouter(prefix="/tenants/{tenant_id}/loyalty", tags=["Loyalty"])


@router.post(
    "/accrue",
    response_model=LedgerMutationResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Points must be a positive integer"},
        404: {"description": "Customer or program not found"},
        409: {"description": "Idempotency key reused or concurrent write conflict"},
    }
)
async def accrue_points(
    tenant_id: str,
    request: PointsRequestSchema,
    session: AsyncSession = Depends(get_session),
    resolver: AccountResolver = Depends(get_account_resolver),
    processor: TransactionProcessor = Depends(get_transaction_processor),
    actor_id: str = Depends(get_actor_id),
):
    """
    Accrue loyalty points for a customer.

    The program account is created on first accrual. Repeating a request
    with the same idempotency_key returns the original transaction with
    `replayed: true`.

    **Returns:**
    - 201: Points accrued
    - 400: Invalid amount
    - 404: Customer or program not found
    """
    command = AccrueCommandDTO(
        tenant_id=tenant_id,
        actor_id=actor_id,
        customer_id=request.customer_id,
        program_id=request.program_id,
        points=request.points,
        idempotency_key=request.idempotency_key,
        order_id=request.order_id,
        description=request.description,
        metadata=request.metadata,
    )

    use_case = AccruePoints(SqlAlchemyUnitOfWork(session), resolver, processor)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/redeem",
    response_model=LedgerMutationResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        402: {
            "description": "Insufficient points",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INSUFFICIENT_BALANCE",
                            "message": "Insufficient balance. Available: 50, Requested: 100",
                            "reason": "balance=50, required=100",
                            "details": {"current_balance": 50, "requested_amount": 100}
                        }
                    }
                }
            }
        },
        404: {"description": "Ledger account not found"},
        409: {"description": "Account inactive, idempotency key reused or write conflict"},
        422: {"description": "Below the program's minimum redemption"},
    }
)
async def redeem_points(
    tenant_id: str,
    request: PointsRequestSchema,
    session: AsyncSession = Depends(get_session),
    resolver: AccountResolver = Depends(get_account_resolver),
    processor: TransactionProcessor = Depends(get_transaction_processor),
    actor_id: str = Depends(get_actor_id),
):
    """
    Redeem loyalty points.

    Checked in order: account exists, account active, sufficient balance,
    program minimum redemption.
    """
    command = RedeemCommandDTO(
        tenant_id=tenant_id,
        actor_id=actor_id,
        customer_id=request.customer_id,
        program_id=request.program_id,
        points=request.points,
        idempotency_key=request.idempotency_key,
        order_id=request.order_id,
        description=request.description,
        metadata=request.metadata,
    )

    use_case = RedeemPoints(SqlAlchemyUnitOfWork(session), resolver, processor)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/balance",
    response_model=AccountDTO,
    status_code=status.HTTP_200_OK,
    responses={404: {"description": "Ledger account not found"}}
)
async def get_points_balance(
    tenant_id: str,
    customer_id: str = Query(..., min_length=1),
    program_id: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_session),
):
    """Get a customer's points balance in one program (never creates the account)."""
    use_case = GetBalance(SqlAlchemyLedgerAccountRepository(session))
    result = await use_case.execute(tenant_id, customer_id, program_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
