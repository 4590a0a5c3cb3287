"""Loyalty Program Repository Interface"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.loyalty_program import LoyaltyProgram


class LoyaltyProgramRepository(ABC):
    """Tenant-scoped lookup of loyalty program policy"""

    @abstractmethod
    async def get_by_id(self, tenant_id: str, program_id: str) -> Optional[LoyaltyProgram]:
        """
        Retrieve a program belonging to the tenant

        Returns:
            LoyaltyProgram if found for the tenant, None otherwise
        """
        pass
