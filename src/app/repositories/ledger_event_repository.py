"""Ledger Event Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.ledger_event import LedgerEvent


class LedgerEventRepository(ABC):
    """
    Repository interface for LedgerEvent persistence

    Events are immutable and append-only. Idempotency is enforced via the
    unique (tenant_id, idempotency_key) constraint.
    """

    @abstractmethod
    async def create(self, event: LedgerEvent) -> LedgerEvent:
        """
        Create a new ledger event

        Raises:
            IntegrityError: If the idempotency key was already used by the tenant
        """
        pass

    @abstractmethod
    async def get_by_idempotency_key(
        self, tenant_id: str, idempotency_key: str
    ) -> Optional[LedgerEvent]:
        """
        Retrieve an event by idempotency key

        Used to detect replayed requests before touching any balance.

        Args:
            tenant_id: Tenant identifier
            idempotency_key: Caller-supplied key

        Returns:
            LedgerEvent if found, None otherwise
        """
        pass
