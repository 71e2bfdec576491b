"""Unit tests for ReorderEntries use case

Tests cover:
- Active position slots handed out in request order
- No recalculation on reorder
- Rejection of incomplete, unknown or duplicated id lists
"""

import asyncio
import pytest
from unittest.mock import AsyncMock

from src.app.use_cases.cashbook.dtos import ReorderCommandDTO
from src.app.use_cases.cashbook.reorder_entries import ReorderEntries


@pytest.fixture
def reorder_use_case(mock_uow, mock_entry_repo, make_entry):
    mock_entry_repo.get_active_entries = AsyncMock(
        return_value=[
            make_entry("e1", 1, debit="100000"),
            make_entry("e2", 2, debit="100000"),
            make_entry("e3", 3, debit="100000"),
        ]
    )
    mock_entry_repo.update_sequence_positions = AsyncMock(return_value=3)
    return ReorderEntries(uow=mock_uow, entry_repo=mock_entry_repo, write_lock=asyncio.Lock())


@pytest.mark.asyncio
class TestReorderEntries:
    """Test reordering the active cashbook"""

    async def test_assigns_positions_in_request_order(
        self, reorder_use_case, mock_entry_repo, mock_uow
    ):
        """
        Given: Active entries e1, e2, e3
        When: Reordered as e3, e1, e2
        Then: Slots 1, 2, 3 are assigned in that order and committed
        """
        # Act
        result = await reorder_use_case.execute(ReorderCommandDTO(entry_ids=["e3", "e1", "e2"]))

        # Assert
        assert result.is_ok()
        assert result.value.reordered == 3
        mock_entry_repo.update_sequence_positions.assert_called_once_with(
            {"e3": 1, "e1": 2, "e2": 3}
        )
        mock_uow.commit.assert_called_once()

    async def test_keeps_slots_left_by_archived_entries(self, mock_uow, mock_entry_repo, make_entry):
        """
        Given: Positions 1 and 2 belong to archived entries, active entries sit at 3 and 4
        When: The active entries are swapped
        Then: They swap slots 3 and 4, leaving 1 and 2 free for a restore
        """
        # Arrange
        mock_entry_repo.get_active_entries = AsyncMock(
            return_value=[make_entry("b1", 3), make_entry("b2", 4)]
        )
        mock_entry_repo.update_sequence_positions = AsyncMock(return_value=2)
        mock_entry_repo.get_max_sequence_position = AsyncMock(return_value=4)
        use_case = ReorderEntries(uow=mock_uow, entry_repo=mock_entry_repo, write_lock=asyncio.Lock())

        # Act
        result = await use_case.execute(ReorderCommandDTO(entry_ids=["b2", "b1"]))

        # Assert
        assert result.is_ok()
        mock_entry_repo.update_sequence_positions.assert_called_once_with({"b2": 3, "b1": 4})
        mock_entry_repo.get_max_sequence_position.assert_not_called()

    async def test_colliding_slots_move_past_every_position(
        self, mock_uow, mock_entry_repo, make_entry
    ):
        # Arrange
        mock_entry_repo.get_active_entries = AsyncMock(
            return_value=[make_entry("a", 2), make_entry("b", 2), make_entry("c", 5)]
        )
        mock_entry_repo.update_sequence_positions = AsyncMock(return_value=3)
        mock_entry_repo.get_max_sequence_position = AsyncMock(return_value=7)
        use_case = ReorderEntries(uow=mock_uow, entry_repo=mock_entry_repo, write_lock=asyncio.Lock())

        # Act
        result = await use_case.execute(ReorderCommandDTO(entry_ids=["c", "a", "b"]))

        # Assert
        assert result.is_ok()
        mock_entry_repo.update_sequence_positions.assert_called_once_with({"c": 8, "a": 9, "b": 10})

    async def test_reorder_does_not_recalculate(self, reorder_use_case, mock_entry_repo):
        """Test stored running totals are left exactly as they were"""
        # Act
        await reorder_use_case.execute(ReorderCommandDTO(entry_ids=["e3", "e1", "e2"]))

        # Assert
        mock_entry_repo.save_all.assert_not_called()
        mock_entry_repo.get_active_entries.assert_called_once()

    @pytest.mark.parametrize(
        "entry_ids",
        [
            ["e1", "e2"],
            ["e1", "e2", "e3", "e4"],
            ["e1", "e2", "e2", "e3"],
        ],
        ids=["missing", "unknown", "duplicate"],
    )
    async def test_rejects_invalid_id_list(
        self, reorder_use_case, mock_entry_repo, mock_uow, entry_ids
    ):
        # Act
        result = await reorder_use_case.execute(ReorderCommandDTO(entry_ids=entry_ids))

        # Assert
        assert result.is_err()
        assert result.error.code == "INVALID_REORDER"
        mock_entry_repo.update_sequence_positions.assert_not_called()
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
