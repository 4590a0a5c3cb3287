"""Discrepancy alert channels"""

import logging
from datetime import datetime
from typing import Dict, List, Optional

import httpx

from src.app.services.notification_service import NotificationService
from src.app.use_cases.ledger.dtos import LedgerDiscrepancyDTO

logger = logging.getLogger(__name__)


def discrepancy_payload(discrepancy: LedgerDiscrepancyDTO) -> Dict:
    return {
        "type": "ledger_discrepancy",
        "tenant_id": discrepancy.tenant_id,
        "account_id": discrepancy.account_id,
        "kind": discrepancy.kind,
        "transaction_id": discrepancy.transaction_id,
        "expected": discrepancy.expected,
        "actual": discrepancy.actual,
        "detected_at": datetime.utcnow().isoformat(),
    }


class LoggingNotificationService(NotificationService):
    """Writes alerts to the application log. Always available."""

    async def send_discrepancy_alert(self, discrepancy: LedgerDiscrepancyDTO) -> bool:
        where = f" at transaction {discrepancy.transaction_id}" if discrepancy.transaction_id else ""
        logger.warning(
            f"[LEDGER DISCREPANCY] tenant={discrepancy.tenant_id} account={discrepancy.account_id} "
            f"{discrepancy.kind}{where}: expected={discrepancy.expected}, actual={discrepancy.actual}"
        )
        return True


class WebhookNotificationService(NotificationService):
    """
    POSTs each alert as JSON to a webhook.

    Delivery failures (connection errors, timeouts, non-2xx responses) are
    logged and reported as False; they never interrupt reconciliation.
    """

    def __init__(
        self,
        webhook_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            webhook_url: Alert endpoint
            timeout: Per-request timeout in seconds
            transport: httpx transport override, e.g. httpx.MockTransport
        """
        self.webhook_url = webhook_url
        self.timeout = timeout
        self.transport = transport

    async def send_discrepancy_alert(self, discrepancy: LedgerDiscrepancyDTO) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.webhook_url, json=discrepancy_payload(discrepancy))
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Webhook alert for account {discrepancy.account_id} failed: {e}")
            return False

        logger.info(f"Webhook alert for account {discrepancy.account_id} delivered")
        return True


class CompositeNotificationService(NotificationService):
    """Fans an alert out to every channel; delivered if any channel delivered it."""

    def __init__(self, services: List[NotificationService]):
        self.services = services

    async def send_discrepancy_alert(self, discrepancy: LedgerDiscrepancyDTO) -> bool:
        delivered = False
        for service in self.services:
            try:
                delivered = await service.send_discrepancy_alert(discrepancy) or delivered
            except Exception as e:
                logger.error(f"{type(service).__name__} raised while alerting: {e}")
        return delivered


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """Logging channel, plus a webhook channel when ``webhook_url`` is set."""
    if not webhook_url:
        return LoggingNotificationService()
    return CompositeNotificationService(
        [LoggingNotificationService(), WebhookNotificationService(webhook_url)]
    )
