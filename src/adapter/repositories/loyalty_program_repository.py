"""SQLAlchemy implementation of LoyaltyProgramRepository"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.loyalty_program_repository import LoyaltyProgramRepository
from src.domain.loyalty_program import LoyaltyProgram


class SqlAlchemyLoyaltyProgramRepository(LoyaltyProgramRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: str, program_id: str) -> Optional[LoyaltyProgram]:
        stmt = select(LoyaltyProgram).where(
            LoyaltyProgram.id == program_id,
            LoyaltyProgram.tenant_id == tenant_id,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
