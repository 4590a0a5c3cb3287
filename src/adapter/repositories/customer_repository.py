"""SQLAlchemy implementation of CustomerRepository"""

from sqlalchemy import func
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.customer import Customer


class SqlAlchemyCustomerRepository(CustomerRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, tenant_id: str, customer_id: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(Customer)
            .where(Customer.id == customer_id)
            .where(Customer.tenant_id == tenant_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one() > 0
