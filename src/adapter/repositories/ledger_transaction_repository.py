"""SQLAlchemy implementation of LedgerTransactionRepository

Provides persistence for LedgerTransaction entities plus the aggregate
queries used by reconciliation.
"""

from typing import List, Optional, Tuple
from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.ledger_transaction_repository import LedgerTransactionRepository
from src.domain.ledger_event import LedgerEvent
from src.domain.ledger_transaction import LedgerTransaction


class SqlAlchemyLedgerTransactionRepository(LedgerTransactionRepository):
    """
    SQLAlchemy implementation of LedgerTransactionRepository

    Features:
    - Immutable append-only transactions
    - Transaction/event join for history views
    - SQL-side balance aggregation for reconciliation
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, transaction: LedgerTransaction) -> LedgerTransaction:
        """
        Create a new ledger transaction

        Args:
            transaction: LedgerTransaction entity to persist

        Returns:
            Created LedgerTransaction with generated ID
        """
        self.session.add(transaction)
        await self.session.flush()
        await self.session.refresh(transaction)
        return transaction

    async def get_by_event_id(self, event_id: int) -> Optional[LedgerTransaction]:
        stmt = select(LedgerTransaction).where(LedgerTransaction.event_id == event_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_account(
        self, account_id: int, limit: int = 50, offset: int = 0
    ) -> Tuple[List[Tuple[LedgerTransaction, LedgerEvent]], int]:
        count_stmt = (
            select(func.count())
            .select_from(LedgerTransaction)
            .where(LedgerTransaction.account_id == account_id)
        )
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(LedgerTransaction, LedgerEvent)
            .join(LedgerEvent, LedgerEvent.id == LedgerTransaction.event_id)
            .where(LedgerTransaction.account_id == account_id)
            .order_by(LedgerTransaction.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()], total

    async def get_amount_sum_by_account(self, account_id: int) -> int:
        stmt = select(func.coalesce(func.sum(LedgerTransaction.amount_change), 0)).where(
            LedgerTransaction.account_id == account_id
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def get_chain_by_account(self, account_id: int) -> List[LedgerTransaction]:
        stmt = (
            select(LedgerTransaction)
            .where(LedgerTransaction.account_id == account_id)
            .order_by(LedgerTransaction.id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
