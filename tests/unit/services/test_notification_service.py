"""Unit tests for discrepancy notification services"""

import httpx
import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

from src.adapter.services.notification_service import (
    CompositeNotificationService,
    LoggingNotificationService,
    MAX_REPORTED_DISCREPANCIES,
    WebhookNotificationService,
    create_notification_service,
)
from src.app.use_cases.cashbook.dtos import CalculationDiscrepancyDTO, VerificationResultDTO

WEBHOOK_URL = "https://hooks.example.com/cashbook"


def make_result(count: int = 1) -> VerificationResultDTO:
    return VerificationResultDTO(
        total_entries_checked=100,
        discrepancies_found=count,
        discrepancies=[
            CalculationDiscrepancyDTO(
                entry_id=f"e{i}",
                sequence_position=i,
                field="cash_balance",
                stored_value=Decimal("110"),
                calculated_value=Decimal("100"),
                difference=Decimal("10"),
            )
            for i in range(1, count + 1)
        ],
        sequence_collisions=[4],
        verification_time=datetime(2024, 3, 1, 12, 0, 0),
        execution_time_ms=20,
    )


def mock_http_client(response=None, error=None):
    client = MagicMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    client.post = AsyncMock(return_value=response, side_effect=error)
    return client


@pytest.mark.asyncio
class TestLoggingNotificationService:
    async def test_logs_alert(self, caplog):
        service = LoggingNotificationService()

        sent = await service.send_discrepancy_alert(make_result())

        assert sent is True
        assert "CASHBOOK ALERT" in caplog.text


@pytest.mark.asyncio
class TestWebhookNotificationService:
    async def test_posts_payload(self):
        """
        Given: A result with more discrepancies than the payload limit
        When: The alert is sent
        Then: The payload is truncated and values are sent as strings
        """
        # Arrange
        response = MagicMock()
        client = mock_http_client(response=response)
        service = WebhookNotificationService(WEBHOOK_URL)

        # Act
        with patch("src.adapter.services.notification_service.httpx.AsyncClient", return_value=client):
            sent = await service.send_discrepancy_alert(make_result(MAX_REPORTED_DISCREPANCIES + 5))

        # Assert
        assert sent is True
        response.raise_for_status.assert_called_once()
        url = client.post.call_args.args[0]
        payload = client.post.call_args.kwargs["json"]
        assert url == WEBHOOK_URL
        assert payload["type"] == "cashbook_discrepancy_alert"
        assert payload["discrepancies_found"] == MAX_REPORTED_DISCREPANCIES + 5
        assert payload["sequence_collisions"] == [4]
        assert len(payload["discrepancies"]) == MAX_REPORTED_DISCREPANCIES
        assert payload["discrepancies"][0]["difference"] == "10"

    async def test_returns_false_on_http_error(self):
        client = mock_http_client(error=httpx.ConnectError("connection refused"))
        service = WebhookNotificationService(WEBHOOK_URL)

        with patch("src.adapter.services.notification_service.httpx.AsyncClient", return_value=client):
            sent = await service.send_discrepancy_alert(make_result())

        assert sent is False


@pytest.mark.asyncio
class TestCompositeNotificationService:
    async def test_succeeds_when_any_service_succeeds(self):
        failing = MagicMock()
        failing.send_discrepancy_alert = AsyncMock(side_effect=RuntimeError("down"))
        working = MagicMock()
        working.send_discrepancy_alert = AsyncMock(return_value=True)

        sent = await CompositeNotificationService([failing, working]).send_discrepancy_alert(
            make_result()
        )

        assert sent is True
        working.send_discrepancy_alert.assert_called_once()

    async def test_fails_when_all_services_fail(self):
        service = MagicMock()
        service.send_discrepancy_alert = AsyncMock(return_value=False)

        sent = await CompositeNotificationService([service]).send_discrepancy_alert(make_result())

        assert sent is False


class TestCreateNotificationService:
    def test_logging_only_without_webhook(self):
        assert isinstance(create_notification_service(), LoggingNotificationService)

    def test_composite_with_webhook(self):
        service = create_notification_service(WEBHOOK_URL)

        assert isinstance(service, CompositeNotificationService)
        assert isinstance(service.services[0], LoggingNotificationService)
        assert isinstance(service.services[1], WebhookNotificationService)
        assert service.services[1].webhook_url == WEBHOOK_URL
