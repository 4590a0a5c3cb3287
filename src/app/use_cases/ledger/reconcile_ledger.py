"""ReconcileLedger Use Case

Verifies every ledger account's cached balance against its transaction log.
"""

import logging
import time
from datetime import datetime
from typing import List
from sqlalchemy.exc import SQLAlchemyError
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.ledger_account_repository import LedgerAccountRepository
from src.app.repositories.ledger_transaction_repository import LedgerTransactionRepository
from src.domain.ledger_account import LedgerAccount
from .dtos import LedgerDiscrepancyDTO, ReconciliationResultDTO
from .errors import failure_result

logger = logging.getLogger(__name__)


class ReconcileLedger:
    """
    Use Case: Reconcile ledger accounts against transactions

    Business Rules:
    1. current_balance must equal the sum of amount_change
    2. Ordered by id, each balance_before equals the previous balance_after (first is 0)
    3. Each row satisfies balance_after = balance_before + amount_change
    4. The latest balance_after equals current_balance
    5. Does NOT modify any data (read-only reconciliation)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: LedgerAccountRepository,
        transaction_repo: LedgerTransactionRepository,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.transaction_repo = transaction_repo

    async def execute(self) -> Result[ReconciliationResultDTO]:
        """
        Execute ledger reconciliation

        Returns:
            Result[ReconciliationResultDTO]: Reconciliation result with any discrepancies
        """
        start_time = time.time()
        reconciliation_time = datetime.utcnow()

        try:
            async with self.uow:
                logger.info("Starting ledger reconciliation")

                accounts = await self.account_repo.get_all()
                total_accounts = len(accounts)
                logger.info(f"Found {total_accounts} ledger accounts to reconcile")

                discrepancies: List[LedgerDiscrepancyDTO] = []
                for account in accounts:
                    discrepancies.extend(await self._check_account(account))

        except (SQLAlchemyError, OSError) as e:
            return failure_result("Ledger reconciliation", e, logger)

        execution_time_ms = int((time.time() - start_time) * 1000)

        if discrepancies:
            logger.warning(
                f"Reconciliation complete. Found {len(discrepancies)} discrepancies "
                f"across {total_accounts} accounts in {execution_time_ms}ms"
            )
        else:
            logger.info(
                f"Reconciliation complete. All {total_accounts} accounts balanced "
                f"in {execution_time_ms}ms"
            )

        return Return.ok(
            ReconciliationResultDTO(
                total_accounts_checked=total_accounts,
                discrepancies_found=len(discrepancies),
                discrepancies=discrepancies,
                reconciliation_time=reconciliation_time,
                execution_time_ms=execution_time_ms,
            )
        )

    async def _check_account(self, account: LedgerAccount) -> List[LedgerDiscrepancyDTO]:
        found: List[LedgerDiscrepancyDTO] = []

        def record(kind: str, expected: int, actual: int, transaction_id=None):
            found.append(
                LedgerDiscrepancyDTO(
                    tenant_id=account.tenant_id,
                    account_id=account.id,
                    kind=kind,
                    transaction_id=transaction_id,
                    expected=expected,
                    actual=actual,
                )
            )
            logger.warning(
                f"Discrepancy {kind} on account {account.id} (tenant {account.tenant_id}): "
                f"expected={expected}, actual={actual}, transaction_id={transaction_id}"
            )

        transaction_sum = await self.transaction_repo.get_amount_sum_by_account(account.id)
        if transaction_sum != account.current_balance:
            record("balance_mismatch", transaction_sum, account.current_balance)

        chain = await self.transaction_repo.get_chain_by_account(account.id)
        previous_after = 0
        for txn in chain:
            if txn.balance_before != previous_after:
                record("chain_break", previous_after, txn.balance_before, txn.id)
            if txn.balance_after != txn.balance_before + txn.amount_change:
                record(
                    "row_inconsistent",
                    txn.balance_before + txn.amount_change,
                    txn.balance_after,
                    txn.id,
                )
            previous_after = txn.balance_after

        if chain and chain[-1].balance_after != account.current_balance:
            record("last_balance_mismatch", chain[-1].balance_after, account.current_balance, chain[-1].id)

        return found
