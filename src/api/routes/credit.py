"""Credit API Routes

FastAPI routes for customer credit accounts (charges, fees, payments).
"""

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.error import ClientError
from src.api.identity import get_actor_id
from src.api.schemas.ledger_request import ChargeRequestSchema, PaymentRequestSchema
from src.adapter.repositories.ledger_account_repository import SqlAlchemyLedgerAccountRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.ledger.account_resolver import AccountResolver
from src.app.use_cases.ledger.charge_credit import ChargeCredit
from src.app.use_cases.ledger.dtos import (
    AccountDTO,
    ChargeCommandDTO,
    LedgerMutationResponseDTO,
    PaymentCommandDTO,
)
from src.app.use_cases.ledger.get_balance import GetBalance
from src.app.use_cases.ledger.record_payment import RecordPayment
from src.app.use_cases.ledger.transaction_processor import TransactionProcessor
from src.depends import get_account_resolver, get_session, get_transaction_processor

router = APIRouter(prefix="/tenants/{tenant_id}/credit", tags=["Credit"])


@router.post(
    "/charge",
    response_model=LedgerMutationResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        402: {"description": "Insufficient credit balance"},
        404: {"description": "Customer not found"},
        409: {"description": "Account inactive, idempotency key reused or write conflict"},
    }
)
async def charge_credit(
    tenant_id: str,
    request: ChargeRequestSchema,
    session: AsyncSession = Depends(get_session),
    resolver: AccountResolver = Depends(get_account_resolver),
    processor: TransactionProcessor = Depends(get_transaction_processor),
    actor_id: str = Depends(get_actor_id),
):
    """
    Charge a customer's credit account.

    `fee: true` records the debit as a fee. The balance can never go negative.
    """
    command = ChargeCommandDTO(
        tenant_id=tenant_id,
        actor_id=actor_id,
        customer_id=request.customer_id,
        amount=request.amount,
        fee=request.fee,
        idempotency_key=request.idempotency_key,
        order_id=request.order_id,
        description=request.description,
        metadata=request.metadata,
    )

    use_case = ChargeCredit(SqlAlchemyUnitOfWork(session), resolver, processor)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/payment",
    response_model=LedgerMutationResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Customer not found"}}
)
async def record_payment(
    tenant_id: str,
    request: PaymentRequestSchema,
    session: AsyncSession = Depends(get_session),
    resolver: AccountResolver = Depends(get_account_resolver),
    processor: TransactionProcessor = Depends(get_transaction_processor),
    actor_id: str = Depends(get_actor_id),
):
    """Record a payment, creating the credit account if needed."""
    command = PaymentCommandDTO(
        tenant_id=tenant_id,
        actor_id=actor_id,
        customer_id=request.customer_id,
        amount=request.amount,
        idempotency_key=request.idempotency_key,
        order_id=request.order_id,
        description=request.description,
        metadata=request.metadata,
    )

    use_case = RecordPayment(SqlAlchemyUnitOfWork(session), resolver, processor)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/balance",
    response_model=AccountDTO,
    status_code=status.HTTP_200_OK,
    responses={404: {"description": "Credit account not found"}}
)
async def get_credit_balance(
    tenant_id: str,
    customer_id: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_session),
):
    """Get a customer's credit balance (never creates the account)."""
    use_case = GetBalance(SqlAlchemyLedgerAccountRepository(session))
    result = await use_case.execute(tenant_id, customer_id, None)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
