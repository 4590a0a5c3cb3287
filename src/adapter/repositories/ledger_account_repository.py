"""SQLAlchemy implementation of LedgerAccountRepository

Provides persistence for LedgerAccount entities with pessimistic locking support
to serialize concurrent balance mutations against the same account.
"""

from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.ledger_account_repository import LedgerAccountRepository
from src.domain.ledger_account import LedgerAccount


class SqlAlchemyLedgerAccountRepository(LedgerAccountRepository):
    """
    SQLAlchemy implementation of LedgerAccountRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE
    - Locked reads refresh the identity map (populate_existing) so the
      balance used for before/after snapshots is the committed one
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _lock(stmt, for_update: bool):
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return stmt

    async def get_by_subject(
        self,
        tenant_id: str,
        customer_id: str,
        program_id: Optional[str],
        for_update: bool = False,
    ) -> Optional[LedgerAccount]:
        stmt = select(LedgerAccount).where(
            LedgerAccount.tenant_id == tenant_id,
            LedgerAccount.customer_id == customer_id,
        )
        if program_id is None:
            stmt = stmt.where(LedgerAccount.program_id.is_(None))
        else:
            stmt = stmt.where(LedgerAccount.program_id == program_id)

        result = await self.session.execute(self._lock(stmt, for_update))
        return result.scalar_one_or_none()

    async def get_by_id(
        self, tenant_id: str, account_id: int, for_update: bool = False
    ) -> Optional[LedgerAccount]:
        stmt = select(LedgerAccount).where(
            LedgerAccount.id == account_id,
            LedgerAccount.tenant_id == tenant_id,
        )
        result = await self.session.execute(self._lock(stmt, for_update))
        return result.scalar_one_or_none()

    async def create(self, account: LedgerAccount) -> LedgerAccount:
        """
        Create a new ledger account

        Args:
            account: LedgerAccount entity to persist

        Returns:
            Created LedgerAccount with generated ID
        """
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def update(self, account: LedgerAccount) -> LedgerAccount:
        """
        Flush balance/status changes of an account

        Note:
            Should be called within a transaction with the account already locked
        """
        account.updated_at = datetime.utcnow()
        self.session.add(account)
        await self.session.flush()
        return account

    async def list_by_tenant(
        self,
        tenant_id: str,
        customer_id: Optional[str] = None,
        program_id: Optional[str] = None,
        is_active: Optional[bool] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> Tuple[List[LedgerAccount], int]:
        conditions = [LedgerAccount.tenant_id == tenant_id]
        if customer_id:
            conditions.append(LedgerAccount.customer_id == customer_id)
        if program_id:
            conditions.append(LedgerAccount.program_id == program_id)
        if is_active is not None:
            conditions.append(LedgerAccount.is_active == is_active)

        count_stmt = select(func.count()).select_from(LedgerAccount).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(LedgerAccount)
            .where(*conditions)
            .order_by(LedgerAccount.updated_at.desc(), LedgerAccount.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def get_all(self) -> List[LedgerAccount]:
        result = await self.session.execute(select(LedgerAccount).order_by(LedgerAccount.id))
        return list(result.scalars().all())
