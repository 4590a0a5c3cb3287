"""Get Balance Use Case

Retrieves one ledger account's balance without creating it.
"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.ledger_account_repository import LedgerAccountRepository
from .dtos import AccountDTO
from .errors import AccountNotFoundError


class GetBalance:
    """
    Get Balance Use Case

    Read-only. program_id=None addresses the customer's credit account.
    """

    def __init__(self, account_repo: LedgerAccountRepository):
        """
        Initialize GetBalance use case

        Args:
            account_repo: Repository for accessing ledger accounts
        """
        self.account_repo = account_repo

    async def execute(
        self, tenant_id: str, customer_id: str, program_id: Optional[str] = None
    ) -> Result[AccountDTO]:
        """
        Execute get balance operation

        Errors:
            ACCOUNT_NOT_FOUND: No account for (tenant, customer, program)
        """
        account = await self.account_repo.get_by_subject(tenant_id, customer_id, program_id)

        if not account:
            return Return.err(
                AccountNotFoundError(
                    "Ledger account not found",
                    tenant_id=tenant_id,
                    customer_id=customer_id,
                    program_id=program_id,
                ).to_error()
            )

        return Return.ok(AccountDTO.from_account(account))
