"""Unit tests for ArchiveEntries and RestoreArchive use cases

Tests cover:
- Archiving flips a date range in one call, without recalculation
- Restoring a batch recalculates the active cashbook
- Unknown batches are reported as ARCHIVE_NOT_FOUND
"""

import asyncio
import pytest
from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.use_cases.cashbook.archive_entries import ArchiveEntries
from src.app.use_cases.cashbook.dtos import ArchiveCommandDTO, RestoreArchiveCommandDTO
from src.app.use_cases.cashbook.restore_archive import RestoreArchive


@pytest.mark.asyncio
class TestArchiveEntries:
    """Test closing a period"""

    async def test_archives_range_without_recalculation(self, mock_uow, mock_entry_repo):
        """
        Given: Active entries in January
        When: January is archived as "January 2024"
        Then: One bulk archive call is made and nothing is recalculated
        """
        # Arrange
        mock_entry_repo.archive_date_range = AsyncMock(return_value=12)
        mock_entry_repo.get_active_entries = AsyncMock()
        use_case = ArchiveEntries(uow=mock_uow, entry_repo=mock_entry_repo, write_lock=asyncio.Lock())
        command = ArchiveCommandDTO(
            start_date=date(2024, 1, 1), end_date=date(2024, 1, 31), label="January 2024"
        )

        # Act
        result = await use_case.execute(command)

        # Assert
        assert result.is_ok()
        assert result.value.archived == 12
        assert result.value.label == "January 2024"

        kwargs = mock_entry_repo.archive_date_range.call_args.kwargs
        assert kwargs["start_date"] == date(2024, 1, 1)
        assert kwargs["end_date"] == date(2024, 1, 31)
        assert kwargs["label"] == "January 2024"
        assert kwargs["archived_at"] == result.value.archived_at
        assert kwargs["archived_at"].tzinfo is not None

        mock_entry_repo.get_active_entries.assert_not_called()
        mock_entry_repo.save_all.assert_not_called()
        mock_uow.commit.assert_called_once()

    async def test_empty_range_archives_nothing(self, mock_uow, mock_entry_repo):
        mock_entry_repo.archive_date_range = AsyncMock(return_value=0)
        use_case = ArchiveEntries(uow=mock_uow, entry_repo=mock_entry_repo, write_lock=asyncio.Lock())
        command = ArchiveCommandDTO(
            start_date=date(2030, 1, 1), end_date=date(2030, 1, 31), label="Future"
        )

        result = await use_case.execute(command)

        assert result.is_ok()
        assert result.value.archived == 0

    async def test_failure_rolls_back(self, mock_uow, mock_entry_repo):
        # Arrange
        mock_entry_repo.archive_date_range = AsyncMock(side_effect=Exception("Database error"))
        use_case = ArchiveEntries(uow=mock_uow, entry_repo=mock_entry_repo, write_lock=asyncio.Lock())
        command = ArchiveCommandDTO(
            start_date=date(2024, 1, 1), end_date=date(2024, 1, 31), label="January 2024"
        )

        # Act
        result = await use_case.execute(command)

        # Assert
        assert result.is_err()
        assert result.error.code == "ARCHIVE_FAILED"
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestRestoreArchive:
    """Test reopening a period"""

    async def test_restore_recalculates_active_cashbook(
        self, mock_uow, mock_entry_repo, make_entry
    ):
        # Arrange
        restored = [make_entry("e1", 1, debit="100000"), make_entry("e2", 2, debit="100000")]
        mock_entry_repo.restore_archive = AsyncMock(return_value=2)
        mock_entry_repo.get_active_entries = AsyncMock(return_value=restored)
        use_case = RestoreArchive(uow=mock_uow, entry_repo=mock_entry_repo, write_lock=asyncio.Lock())
        archived_at = datetime(2024, 2, 1, 10, 0, 0, tzinfo=timezone.utc)
        command = RestoreArchiveCommandDTO(label="January 2024", archived_at=archived_at)

        # Act
        result = await use_case.execute(command)

        # Assert
        assert result.is_ok()
        assert result.value.restored == 2
        assert result.value.recalculated_entries == 2
        assert restored[1].cash_balance == Decimal("200000")
        mock_entry_repo.restore_archive.assert_called_once_with(
            label="January 2024", archived_at=archived_at
        )
        mock_uow.commit.assert_called_once()

    async def test_naive_timestamp_is_matched_as_utc(self, mock_uow, mock_entry_repo):
        # Arrange
        mock_entry_repo.restore_archive = AsyncMock(return_value=1)
        mock_entry_repo.get_active_entries = AsyncMock(return_value=[])
        use_case = RestoreArchive(uow=mock_uow, entry_repo=mock_entry_repo, write_lock=asyncio.Lock())
        command = RestoreArchiveCommandDTO(
            label="January 2024",
            archived_at=datetime(2024, 2, 1, 10, 0, 0),
        )

        # Act
        await use_case.execute(command)

        # Assert
        mock_entry_repo.restore_archive.assert_called_once_with(
            label="January 2024", archived_at=datetime(2024, 2, 1, 10, 0, 0, tzinfo=timezone.utc)
        )

    async def test_unknown_batch(self, mock_uow, mock_entry_repo):
        # Arrange
        mock_entry_repo.restore_archive = AsyncMock(return_value=0)
        mock_entry_repo.get_active_entries = AsyncMock()
        use_case = RestoreArchive(uow=mock_uow, entry_repo=mock_entry_repo, write_lock=asyncio.Lock())
        command = RestoreArchiveCommandDTO(
            label="Nope", archived_at=datetime(2024, 2, 1, 10, 0, 0)
        )

        # Act
        result = await use_case.execute(command)

        # Assert
        assert result.is_err()
        assert result.error.code == "ARCHIVE_NOT_FOUND"
        mock_entry_repo.get_active_entries.assert_not_called()
        mock_uow.rollback.assert_called_once()
