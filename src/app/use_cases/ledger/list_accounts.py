"""
List Accounts Use Case

Paginated, filterable listing of a tenant's ledger accounts.
"""
from typing import Optional
from libs.result import Result, Return
from src.app.repositories.ledger_account_repository import LedgerAccountRepository
from .dtos import AccountDTO, ListAccountsResponseDTO


class ListAccounts:
    """
    Use case: List ledger accounts

    Accounts are ordered by updated_at DESC. limit is clamped to
    [1, max_limit] and offset to >= 0.
    """

    def __init__(
        self,
        account_repo: LedgerAccountRepository,
        default_limit: int = 50,
        max_limit: int = 100,
    ):
        self.account_repo = account_repo
        self.default_limit = default_limit
        self.max_limit = max_limit

    async def execute(
        self,
        tenant_id: str,
        customer_id: Optional[str] = None,
        program_id: Optional[str] = None,
        is_active: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Result[ListAccountsResponseDTO]:
        limit = self.default_limit if limit is None else min(max(limit, 1), self.max_limit)
        offset = max(offset, 0)

        accounts, total = await self.account_repo.list_by_tenant(
            tenant_id,
            customer_id=customer_id,
            program_id=program_id,
            is_active=is_active,
            limit=limit,
            offset=offset,
        )

        return Return.ok(
            ListAccountsResponseDTO(
                accounts=[AccountDTO.from_account(account) for account in accounts],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
