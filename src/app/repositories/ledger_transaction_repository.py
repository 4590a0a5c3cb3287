"""Ledger Transaction Repository Interface

Defines the contract for ledger transaction persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain.ledger_event import LedgerEvent
from src.domain.ledger_transaction import LedgerTransaction


class LedgerTransactionRepository(ABC):
    """
    Repository interface for LedgerTransaction persistence

    Transactions are immutable and append-only. Their id order is the
    commit order of the account's balance chain.
    """

    @abstractmethod
    async def create(self, transaction: LedgerTransaction) -> LedgerTransaction:
        """
        Create a new ledger transaction

        Args:
            transaction: LedgerTransaction entity to persist

        Returns:
            Created LedgerTransaction with generated ID
        """
        pass

    @abstractmethod
    async def get_by_event_id(self, event_id: int) -> Optional[LedgerTransaction]:
        """
        Retrieve the transaction paired with an event

        Args:
            event_id: LedgerEvent ID

        Returns:
            LedgerTransaction if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_account(
        self, account_id: int, limit: int = 50, offset: int = 0
    ) -> Tuple[List[Tuple[LedgerTransaction, LedgerEvent]], int]:
        """
        List an account's transactions with their events, newest first

        Args:
            account_id: LedgerAccount ID
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of (list of (transaction, event) pairs, total count)
        """
        pass

    @abstractmethod
    async def get_amount_sum_by_account(self, account_id: int) -> int:
        """
        Sum of amount_change over all transactions of an account

        Returns:
            Sum (0 when the account has no transactions)
        """
        pass

    @abstractmethod
    async def get_chain_by_account(self, account_id: int) -> List[LedgerTransaction]:
        """
        All transactions of an account in commit (id) order

        Returns:
            Ordered list of transactions
        """
        pass
