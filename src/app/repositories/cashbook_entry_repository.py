"""Cashbook Entry Repository Interface

Defines the contract for cashbook entry persistence operations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence
from src.domain.cashbook_entry import CashbookEntry


@dataclass
class ArchiveBatch:
    """Aggregate view of one archive batch"""
    label: str
    archived_at: datetime
    count: int
    start_date: date
    end_date: date


class CashbookEntryRepository(ABC):
    """
    Repository interface for CashbookEntry persistence

    Active entries are returned in calculation order
    (sequence_position ASC, recorded_at ASC).
    """

    @abstractmethod
    async def get_by_id(self, entry_id: str, for_update: bool = False) -> Optional[CashbookEntry]:
        """
        Retrieve entry by ID

        Args:
            entry_id: Entry ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            CashbookEntry if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_ids(self, entry_ids: Sequence[str]) -> List[CashbookEntry]:
        """Retrieve all entries whose id is in entry_ids"""
        pass

    @abstractmethod
    async def get_active_entries(self, for_update: bool = False) -> List[CashbookEntry]:
        """
        Retrieve all active (non-archived) entries in calculation order

        Args:
            for_update: If True, lock the rows with SELECT FOR UPDATE
        """
        pass

    @abstractmethod
    async def get_max_sequence_position(self) -> int:
        """Highest sequence_position over all entries (archived included), 0 when empty"""
        pass

    @abstractmethod
    async def create(self, entry: CashbookEntry) -> CashbookEntry:
        pass

    @abstractmethod
    async def save_all(self, entries: Sequence[CashbookEntry]) -> None:
        """Flush changes made to the given entries"""
        pass

    @abstractmethod
    async def update_sequence_positions(self, positions: Dict[str, int]) -> int:
        """
        Assign sequence positions

        Args:
            positions: Mapping of entry id to new sequence_position

        Returns:
            Number of rows updated
        """
        pass

    @abstractmethod
    async def archive_date_range(
        self, start_date: date, end_date: date, label: str, archived_at: datetime
    ) -> int:
        """
        Archive every active entry with start_date <= occurred_on <= end_date

        All matched rows share label and archived_at.

        Returns:
            Number of rows archived
        """
        pass

    @abstractmethod
    async def restore_archive(self, label: str, archived_at: datetime) -> int:
        """Clear archive fields for every row of the batch, returns rows restored"""
        pass

    @abstractmethod
    async def delete_by_ids(self, entry_ids: Sequence[str]) -> int:
        pass

    @abstractmethod
    async def delete_active(self) -> int:
        """Delete every active entry, archived entries are kept"""
        pass

    @abstractmethod
    async def list_archives(self) -> List[ArchiveBatch]:
        """Archive batches grouped by (label, archived_at), newest first"""
        pass

    @abstractmethod
    async def get_archived_entries(self, label: str, archived_at: datetime) -> List[CashbookEntry]:
        """Entries of one archive batch in calculation order"""
        pass
