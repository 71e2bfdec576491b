"""Cashbook drift alerts

Delivery channels for verification results that found discrepancies:
a log line, an HTTP webhook, or both.
"""

import logging
from typing import Any, Dict, Optional
import httpx
from src.app.services.notification_service import NotificationService
from src.app.use_cases.cashbook.dtos import VerificationResultDTO

logger = logging.getLogger(__name__)

# Webhook payloads list at most this many discrepancies
MAX_REPORTED_DISCREPANCIES = 50


def discrepancy_payload(result: VerificationResultDTO) -> Dict[str, Any]:
    """JSON body posted to the alert webhook; amounts are sent as strings"""
    return {
        "type": "cashbook_discrepancy_alert",
        "total_entries_checked": result.total_entries_checked,
        "discrepancies_found": result.discrepancies_found,
        "sequence_collisions": result.sequence_collisions,
        "verification_time": result.verification_time.isoformat(),
        "discrepancies": [
            {
                "entry_id": d.entry_id,
                "sequence_position": d.sequence_position,
                "field": d.field,
                "stored_value": str(d.stored_value),
                "calculated_value": str(d.calculated_value),
                "difference": str(d.difference),
            }
            for d in result.discrepancies[:MAX_REPORTED_DISCREPANCIES]
        ],
    }


class LoggingNotificationService(NotificationService):
    """Writes the alert to the application log. Always available."""

    async def send_discrepancy_alert(self, result: VerificationResultDTO) -> bool:
        logger.warning(
            f"[CASHBOOK ALERT] {result.discrepancies_found} discrepancies across "
            f"{result.total_entries_checked} entries, "
            f"collisions at {result.sequence_collisions or 'none'}, "
            f"verified at {result.verification_time.isoformat()}"
        )
        return True


class WebhookNotificationService(NotificationService):
    """
    Posts the alert to a webhook as JSON

    Delivery errors are logged and reported as False; they never propagate
    into the verification run.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def send_discrepancy_alert(self, result: VerificationResultDTO) -> bool:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.webhook_url, json=discrepancy_payload(result))
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Cashbook alert to {self.webhook_url} not delivered: {e}")
            return False

        logger.info(f"Cashbook alert delivered to {self.webhook_url}")
        return True


class CompositeNotificationService(NotificationService):
    """
    Sends the alert through every channel in turn

    Returns True when at least one channel delivered it.
    """

    def __init__(self, services: list[NotificationService]):
        self.services = services

    async def send_discrepancy_alert(self, result: VerificationResultDTO) -> bool:
        delivered = False
        for channel in self.services:
            try:
                delivered = await channel.send_discrepancy_alert(result) or delivered
            except Exception as e:
                logger.error(f"Alert channel {type(channel).__name__} raised: {e}")
        return delivered


def create_notification_service(webhook_url: Optional[str] = None) -> NotificationService:
    """Log-only alerts, or log plus webhook when a URL is configured"""
    if not webhook_url:
        return LoggingNotificationService()

    return CompositeNotificationService(
        [LoggingNotificationService(), WebhookNotificationService(webhook_url)]
    )
