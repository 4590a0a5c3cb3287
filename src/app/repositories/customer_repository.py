"""Customer Repository Interface"""

from abc import ABC, abstractmethod


class CustomerRepository(ABC):
    """Tenant-scoped customer existence check"""

    @abstractmethod
    async def exists(self, tenant_id: str, customer_id: str) -> bool:
        """
        Check that the customer exists and belongs to the tenant

        Returns:
            True if found, False otherwise
        """
        pass
