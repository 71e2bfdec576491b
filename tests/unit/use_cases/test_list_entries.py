"""Unit tests for ListEntries and GetCashbookSummary use cases"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.use_cases.cashbook.get_summary import GetCashbookSummary
from src.app.use_cases.cashbook.list_entries import ListEntries
from src.domain.accumulator import AccumulatorKind


@pytest.fixture
def stored_entries(make_entry):
    entries = [make_entry("e1", 1, debit="100000"), make_entry("e2", 2, debit="100000")]
    entries[0].cash_balance = Decimal("100000")
    entries[1].cash_balance = Decimal("200000")
    entries[1].set_override(AccumulatorKind.CASH_BALANCE, True)
    return entries


@pytest.mark.asyncio
class TestListEntries:
    """Test viewing the active cashbook"""

    async def test_lists_in_calculation_order(self, mock_entry_repo, stored_entries):
        # Arrange
        mock_entry_repo.get_active_entries = AsyncMock(return_value=stored_entries)

        # Act
        result = await ListEntries(mock_entry_repo).execute()

        # Assert
        assert result.is_ok()
        response = result.value
        assert response.total == 2
        assert [e.id for e in response.entries] == ["e1", "e2"]
        assert response.entries[1].values["cash_balance"] == Decimal("200000")
        assert response.entries[1].overridden == ["cash_balance"]
        assert len(response.entries[0].values) == len(AccumulatorKind)

    async def test_newest_first(self, mock_entry_repo, stored_entries):
        mock_entry_repo.get_active_entries = AsyncMock(return_value=stored_entries)

        result = await ListEntries(mock_entry_repo).execute(newest_first=True)

        assert [e.id for e in result.value.entries] == ["e2", "e1"]


@pytest.mark.asyncio
class TestGetCashbookSummary:
    """Test current running totals"""

    async def test_summary_is_last_entry_totals(self, mock_entry_repo, stored_entries):
        # Arrange
        mock_entry_repo.get_active_entries = AsyncMock(return_value=stored_entries)

        # Act
        result = await GetCashbookSummary(mock_entry_repo).execute()

        # Assert
        assert result.is_ok()
        summary = result.value
        assert summary.entry_count == 2
        assert summary.last_entry_id == "e2"
        assert summary.values["cash_balance"] == Decimal("200000")

    async def test_empty_cashbook_summary(self, mock_entry_repo):
        mock_entry_repo.get_active_entries = AsyncMock(return_value=[])

        result = await GetCashbookSummary(mock_entry_repo).execute()

        assert result.is_ok()
        assert result.value.entry_count == 0
        assert result.value.last_entry_id is None
        assert all(value == 0 for value in result.value.values.values())
