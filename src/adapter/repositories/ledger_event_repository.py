"""SQLAlchemy implementation of LedgerEventRepository"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.ledger_event_repository import LedgerEventRepository
from src.domain.ledger_event import LedgerEvent


class SqlAlchemyLedgerEventRepository(LedgerEventRepository):
    """
    SQLAlchemy implementation of LedgerEventRepository

    Duplicate idempotency keys surface as IntegrityError on flush.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, event: LedgerEvent) -> LedgerEvent:
        self.session.add(event)
        await self.session.flush()
        await self.session.refresh(event)
        return event

    async def get_by_idempotency_key(
        self, tenant_id: str, idempotency_key: str
    ) -> Optional[LedgerEvent]:
        stmt = select(LedgerEvent).where(
            LedgerEvent.tenant_id == tenant_id,
            LedgerEvent.idempotency_key == idempotency_key,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
