"""Alerting port used by ledger reconciliation"""

from abc import ABC, abstractmethod
from src.app.use_cases.ledger.dtos import LedgerDiscrepancyDTO


class NotificationService(ABC):
    @abstractmethod
    async def send_discrepancy_alert(self, discrepancy: LedgerDiscrepancyDTO) -> bool:
        """
        Deliver one discrepancy alert.

        Returns:
            True when the alert was delivered. Channels report delivery
            failures by returning False rather than raising.
        """
        pass
