"""Notification Service Interface

Defines the contract for alerting on cashbook verification discrepancies.
"""

from abc import ABC, abstractmethod
from src.app.use_cases.cashbook.dtos import VerificationResultDTO


class NotificationService(ABC):
    """
    Abstract notification service for sending alerts

    Implementations can send notifications via:
    - Log output
    - Webhook (HTTP POST)
    """

    @abstractmethod
    async def send_discrepancy_alert(self, result: VerificationResultDTO) -> bool:
        """
        Send alert for a verification run that found discrepancies

        Args:
            result: Verification result to alert about

        Returns:
            True if notification sent successfully, False otherwise
        """
        pass
