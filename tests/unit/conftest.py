from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domain.accumulator import EntryCategory
from src.domain.cashbook_entry import CashbookEntry

BASE_TIME = datetime(2024, 1, 15, 8, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def mock_entry_repo():
    """Mock cashbook entry repository"""
    repo = MagicMock()
    repo.save_all = AsyncMock()
    return repo


@pytest.fixture
def make_entry():
    """Factory for active cashbook entries, recorded one minute apart by position"""

    def _make(
        entry_id,
        position,
        category=EntryCategory.REVENUE,
        debit="0",
        credit="0",
        purpose="",
        **kwargs,
    ):
        kwargs.setdefault("recorded_at", BASE_TIME + timedelta(minutes=position))
        occurred_on = kwargs.pop("occurred_on", date(2024, 1, 15))
        return CashbookEntry(
            id=entry_id,
            occurred_on=occurred_on,
            sequence_position=position,
            category=category,
            debit_amount=Decimal(debit),
            credit_amount=Decimal(credit),
            purpose=purpose,
            **kwargs,
        )

    return _make
