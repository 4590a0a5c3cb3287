"""Ledger Account API Routes

Administrative listing, history, adjustment and status endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.error import ClientError
from src.api.identity import get_actor_id
from src.api.schemas.ledger_request import AccountStatusRequestSchema, AdjustRequestSchema
from src.adapter.repositories.ledger_account_repository import SqlAlchemyLedgerAccountRepository
from src.adapter.repositories.ledger_transaction_repository import SqlAlchemyLedgerTransactionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.ledger.account_resolver import AccountResolver
from src.app.use_cases.ledger.adjust_balance import AdjustBalance
from src.app.use_cases.ledger.dtos import (
    AccountDTO,
    AdjustCommandDTO,
    LedgerMutationResponseDTO,
    ListAccountsResponseDTO,
    ListLedgerTransactionsResponseDTO,
    SetAccountStatusCommandDTO,
)
from src.app.use_cases.ledger.list_accounts import ListAccounts
from src.app.use_cases.ledger.list_transactions import ListLedgerTransactions
from src.app.use_cases.ledger.set_account_status import SetAccountStatus
from src.app.use_cases.ledger.transaction_processor import TransactionProcessor
from src.depends import get_account_resolver, get_session, get_transaction_processor

router = APIRouter(prefix="/tenants/{tenant_id}/ledger/accounts", tags=["Ledger Accounts"])


@router.get(
    "",
    response_model=ListAccountsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_accounts(
    tenant_id: str,
    customer_id: Optional[str] = Query(default=None),
    program_id: Optional[str] = Query(default=None),
    active: Optional[bool] = Query(default=None),
    limit: Optional[int] = Query(default=None),
    offset: int = Query(default=0),
    session: AsyncSession = Depends(get_session),
):
    """
    List a tenant's ledger accounts, most recently updated first.

    **Query parameters:**
    - `customer_id`, `program_id`, `active` (optional filters)
    - `limit`: page size, clamped to [1, 100] (default 50)
    - `offset`: clamped to >= 0
    """
    use_case = ListAccounts(
        SqlAlchemyLedgerAccountRepository(session),
        default_limit=ApplicationConfig.LEDGER_LIST_DEFAULT_LIMIT,
        max_limit=ApplicationConfig.LEDGER_LIST_MAX_LIMIT,
    )
    result = await use_case.execute(
        tenant_id,
        customer_id=customer_id,
        program_id=program_id,
        is_active=active,
        limit=limit,
        offset=offset,
    )
    return result.value


@router.get(
    "/{account_id}/transactions",
    response_model=ListLedgerTransactionsResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: {"description": "Ledger account not found"}}
)
async def list_account_transactions(
    tenant_id: str,
    account_id: int,
    limit: int = Query(default=50),
    offset: int = Query(default=0),
    session: AsyncSession = Depends(get_session),
):
    """Transaction history of one account, newest first."""
    use_case = ListLedgerTransactions(
        SqlAlchemyLedgerAccountRepository(session),
        SqlAlchemyLedgerTransactionRepository(session),
        max_limit=ApplicationConfig.LEDGER_LIST_MAX_LIMIT,
    )
    result = await use_case.execute(tenant_id, account_id, limit=limit, offset=offset)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{account_id}/adjust",
    response_model=LedgerMutationResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Adjustment must be a non-zero integer"},
        402: {"description": "Adjustment would make the balance negative"},
        404: {"description": "Ledger account not found"},
    }
)
async def adjust_balance(
    tenant_id: str,
    account_id: int,
    request: AdjustRequestSchema,
    session: AsyncSession = Depends(get_session),
    resolver: AccountResolver = Depends(get_account_resolver),
    processor: TransactionProcessor = Depends(get_transaction_processor),
    actor_id: str = Depends(get_actor_id),
):
    """Apply a signed manual adjustment to an account."""
    command = AdjustCommandDTO(
        tenant_id=tenant_id,
        actor_id=actor_id,
        account_id=account_id,
        amount=request.amount,
        description=request.description,
        idempotency_key=request.idempotency_key,
        metadata=request.metadata,
    )

    use_case = AdjustBalance(SqlAlchemyUnitOfWork(session), resolver, processor)
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put(
    "/{account_id}/status",
    response_model=AccountDTO,
    status_code=status.HTTP_200_OK,
    responses={404: {"description": "Ledger account not found"}}
)
async def set_account_status(
    tenant_id: str,
    account_id: int,
    request: AccountStatusRequestSchema,
    session: AsyncSession = Depends(get_session),
    actor_id: str = Depends(get_actor_id),
):
    """Deactivate or reactivate an account."""
    command = SetAccountStatusCommandDTO(
        tenant_id=tenant_id,
        account_id=account_id,
        is_active=request.is_active,
        actor_id=actor_id,
    )

    use_case = SetAccountStatus(
        SqlAlchemyUnitOfWork(session), SqlAlchemyLedgerAccountRepository(session)
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
