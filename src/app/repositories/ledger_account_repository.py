"""Ledger Account Repository Interface

Defines the contract for ledger account persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain.ledger_account import LedgerAccount


class LedgerAccountRepository(ABC):
    """
    Repository interface for LedgerAccount persistence

    Reads used before a mutation take a row lock (SELECT FOR UPDATE) so that
    writers against the same account are serialized.
    """

    @abstractmethod
    async def get_by_subject(
        self,
        tenant_id: str,
        customer_id: str,
        program_id: Optional[str],
        for_update: bool = False,
    ) -> Optional[LedgerAccount]:
        """
        Retrieve the account for a (tenant, customer, program) triple

        Args:
            tenant_id: Tenant identifier
            customer_id: Account holder
            program_id: Loyalty program, or None for the credit account
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            LedgerAccount if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_id(
        self, tenant_id: str, account_id: int, for_update: bool = False
    ) -> Optional[LedgerAccount]:
        """
        Retrieve an account by ID, scoped to the tenant

        Args:
            tenant_id: Tenant identifier
            account_id: Account ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            LedgerAccount if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, account: LedgerAccount) -> LedgerAccount:
        """
        Create a new ledger account

        Args:
            account: LedgerAccount entity to persist

        Returns:
            Created LedgerAccount with generated ID

        Raises:
            IntegrityError: If an account already exists for the triple
        """
        pass

    @abstractmethod
    async def update(self, account: LedgerAccount) -> LedgerAccount:
        """
        Persist balance, lifetime counters and status of a locked account

        Args:
            account: LedgerAccount with updated values

        Returns:
            Updated LedgerAccount
        """
        pass

    @abstractmethod
    async def list_by_tenant(
        self,
        tenant_id: str,
        customer_id: Optional[str] = None,
        program_id: Optional[str] = None,
        is_active: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[LedgerAccount], int]:
        """
        List accounts for a tenant, most recently updated first

        Returns:
            Tuple of (accounts page, total matching count)
        """
        pass

    @abstractmethod
    async def get_all(self) -> List[LedgerAccount]:
        """Retrieve every account across tenants (reconciliation)"""
        pass
