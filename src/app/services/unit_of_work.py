"""Unit of Work Interface

One unit of work wraps one database transaction. Leaving the context
always rolls back, which is a no-op after a successful commit.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
