"""
List Ledger Transactions Use Case

Retrieves one account's transaction history with pagination.
"""
from libs.result import Result, Return
from src.app.repositories.ledger_account_repository import LedgerAccountRepository
from src.app.repositories.ledger_transaction_repository import LedgerTransactionRepository
from .dtos import LedgerTransactionDTO, ListLedgerTransactionsResponseDTO
from .errors import AccountNotFoundError


class ListLedgerTransactions:
    """
    Use case: View account history

    Transactions are ordered newest first, each joined with its event.
    """

    def __init__(
        self,
        account_repo: LedgerAccountRepository,
        transaction_repo: LedgerTransactionRepository,
        max_limit: int = 100,
    ):
        """
        Initialize with repositories.

        Args:
            account_repo: LedgerAccountRepository instance (tenant scoping)
            transaction_repo: LedgerTransactionRepository instance
            max_limit: Upper bound for page size
        """
        self.account_repo = account_repo
        self.transaction_repo = transaction_repo
        self.max_limit = max_limit

    async def execute(
        self, tenant_id: str, account_id: int, limit: int = 50, offset: int = 0
    ) -> Result[ListLedgerTransactionsResponseDTO]:
        """
        List transactions for an account with pagination.

        Args:
            tenant_id: Tenant identifier
            account_id: Ledger account identifier
            limit: Maximum number of transactions to return (default 50)
            offset: Number of transactions to skip (default 0)

        Returns:
            Result[ListLedgerTransactionsResponseDTO]: Paginated history or ACCOUNT_NOT_FOUND
        """
        account = await self.account_repo.get_by_id(tenant_id, account_id)
        if not account:
            return Return.err(
                AccountNotFoundError(
                    f"Ledger account {account_id} not found",
                    tenant_id=tenant_id,
                    account_id=account_id,
                ).to_error()
            )

        limit = min(max(limit, 1), self.max_limit)
        offset = max(offset, 0)

        rows, total = await self.transaction_repo.list_by_account(
            account_id, limit=limit, offset=offset
        )

        transaction_dtos = [
            LedgerTransactionDTO(
                transaction_id=txn.id,
                event_id=event.id,
                event_type=event.event_type.value if hasattr(event.event_type, "value") else event.event_type,
                amount=event.amount,
                amount_change=txn.amount_change,
                balance_before=txn.balance_before,
                balance_after=txn.balance_after,
                expires_at=txn.expires_at,
                description=event.description,
                order_id=event.order_id,
                metadata=event.event_metadata,
                created_by=event.created_by,
                created_at=txn.created_at,
            )
            for txn, event in rows
        ]

        return Return.ok(
            ListLedgerTransactionsResponseDTO(
                account_id=account_id,
                transactions=transaction_dtos,
                total=total,
                limit=limit,
                offset=offset,
            )
        )
