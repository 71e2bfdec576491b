"""Unit tests for VerifyCashbook use case

Tests cover:
- Consistent cashbook yields no discrepancies
- Drifted totals are reported per entry and field
- Pinned totals are never reported
- Verification never writes
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.use_cases.cashbook.verify_cashbook import VerifyCashbook
from src.domain.accumulator import AccumulatorKind
from src.domain.cashbook_calculation import recalculate


@pytest.fixture
def consistent_entries(make_entry):
    entries = [
        make_entry("e1", 1, debit="100000"),
        make_entry("e2", 2, debit="100000"),
        make_entry("e3", 3, debit="100000"),
    ]
    recalculate(entries).apply(entries)
    return entries


@pytest.mark.asyncio
class TestVerifyCashbook:
    async def test_consistent_cashbook(self, mock_entry_repo, consistent_entries):
        # Arrange
        mock_entry_repo.get_active_entries = AsyncMock(return_value=consistent_entries)

        # Act
        result = await VerifyCashbook(mock_entry_repo).execute()

        # Assert
        assert result.is_ok()
        assert result.value.total_entries_checked == 3
        assert result.value.discrepancies_found == 0
        assert result.value.discrepancies == []
        mock_entry_repo.save_all.assert_not_called()

    async def test_reports_drifted_totals(self, mock_entry_repo, consistent_entries):
        """
        Given: Entry 3's stored cash balance drifted to 310000
        When: The cashbook is verified
        Then: One discrepancy is reported with stored, expected and difference
        """
        # Arrange
        consistent_entries[2].cash_balance = Decimal("310000")
        mock_entry_repo.get_active_entries = AsyncMock(return_value=consistent_entries)

        # Act
        result = await VerifyCashbook(mock_entry_repo).execute()

        # Assert
        assert result.is_ok()
        assert result.value.discrepancies_found == 1
        discrepancy = result.value.discrepancies[0]
        assert discrepancy.entry_id == "e3"
        assert discrepancy.field == "cash_balance"
        assert discrepancy.stored_value == Decimal("310000")
        assert discrepancy.calculated_value == Decimal("300000")
        assert discrepancy.difference == Decimal("10000")
        assert consistent_entries[2].cash_balance == Decimal("310000")

    async def test_pinned_totals_are_not_discrepancies(self, mock_entry_repo, consistent_entries):
        # Arrange
        consistent_entries[1].set_value(AccumulatorKind.CASH_BALANCE, Decimal("5000000"))
        consistent_entries[1].set_override(AccumulatorKind.CASH_BALANCE, True)
        consistent_entries[2].cash_balance = Decimal("5100000")
        mock_entry_repo.get_active_entries = AsyncMock(return_value=consistent_entries)

        # Act
        result = await VerifyCashbook(mock_entry_repo).execute()

        # Assert
        assert result.value.discrepancies_found == 0

    async def test_repository_error(self, mock_entry_repo):
        mock_entry_repo.get_active_entries = AsyncMock(side_effect=Exception("Database error"))

        result = await VerifyCashbook(mock_entry_repo).execute()

        assert result.is_err()
        assert result.error.code == "VERIFICATION_FAILED"
