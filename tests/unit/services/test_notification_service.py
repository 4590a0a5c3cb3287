"""Unit tests for discrepancy notification channels"""

import json

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from src.adapter.services.notification_service import (
    CompositeNotificationService,
    LoggingNotificationService,
    WebhookNotificationService,
    create_notification_service,
)
from src.app.use_cases.ledger.dtos import LedgerDiscrepancyDTO


@pytest.fixture
def discrepancy():
    return LedgerDiscrepancyDTO(
        tenant_id="tenant_123", account_id=3, kind="balance_mismatch", expected=100, actual=90
    )


@pytest.mark.asyncio
class TestWebhookNotificationService:
    async def test_posts_json_payload(self, discrepancy):
        received = []

        def handler(request: httpx.Request) -> httpx.Response:
            received.append(json.loads(request.content))
            return httpx.Response(204)

        service = WebhookNotificationService(
            "https://hooks.example.com/ledger", transport=httpx.MockTransport(handler)
        )

        assert await service.send_discrepancy_alert(discrepancy) is True
        assert received[0]["type"] == "ledger_discrepancy"
        assert received[0]["account_id"] == 3
        assert received[0]["expected"] == 100

    async def test_http_error_returns_false(self, discrepancy):
        service = WebhookNotificationService(
            "https://hooks.example.com/ledger",
            transport=httpx.MockTransport(lambda request: httpx.Response(500)),
        )

        assert await service.send_discrepancy_alert(discrepancy) is False


@pytest.mark.asyncio
class TestCompositeNotificationService:
    async def test_succeeds_if_any_channel_succeeds(self, discrepancy):
        failing = MagicMock()
        failing.send_discrepancy_alert = AsyncMock(side_effect=RuntimeError("boom"))

        service = CompositeNotificationService([failing, LoggingNotificationService()])

        assert await service.send_discrepancy_alert(discrepancy) is True


class TestCreateNotificationService:
    def test_logging_only_without_webhook(self):
        assert isinstance(create_notification_service(None), LoggingNotificationService)

    def test_composite_with_webhook(self):
        service = create_notification_service("https://hooks.example.com/ledger")

        assert isinstance(service, CompositeNotificationService)
        assert isinstance(service.services[1], WebhookNotificationService)
