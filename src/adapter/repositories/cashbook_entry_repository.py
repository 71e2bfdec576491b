"""SQLAlchemy implementation of CashbookEntryRepository

Provides persistence for CashbookEntry entities. Bulk archive/restore/delete
are single UPDATE/DELETE statements so a batch changes all-or-nothing within
the enclosing transaction.
"""

from datetime import date, datetime
from typing import Dict, List, Optional, Sequence
from sqlalchemy import update, delete
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.cashbook_entry_repository import ArchiveBatch, CashbookEntryRepository
from src.domain.cashbook_entry import CashbookEntry

CALCULATION_ORDER = (
    CashbookEntry.sequence_position.asc(),
    CashbookEntry.recorded_at.asc(),
    CashbookEntry.id.asc(),
)


class SqlAlchemyCashbookEntryRepository(CashbookEntryRepository):
    """
    SQLAlchemy implementation of CashbookEntryRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE (ignored by SQLite)
    - Canonical calculation order on every active/archived read
    - Set-based archive, restore and delete
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, entry_id: str, for_update: bool = False) -> Optional[CashbookEntry]:
        """
        Retrieve entry by ID with optional row-level locking

        Args:
            entry_id: Entry ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            CashbookEntry if found, None otherwise
        """
        stmt = select(CashbookEntry).where(CashbookEntry.id == entry_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, entry_ids: Sequence[str]) -> List[CashbookEntry]:
        if not entry_ids:
            return []
        stmt = select(CashbookEntry).where(CashbookEntry.id.in_(list(entry_ids)))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_active_entries(self, for_update: bool = False) -> List[CashbookEntry]:
        stmt = (
            select(CashbookEntry)
            .where(CashbookEntry.archived_at.is_(None))
            .order_by(*CALCULATION_ORDER)
        )

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_max_sequence_position(self) -> int:
        stmt = select(func.max(CashbookEntry.sequence_position))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def create(self, entry: CashbookEntry) -> CashbookEntry:
        """
        Create a new cashbook entry

        Args:
            entry: CashbookEntry entity to persist

        Returns:
            Created CashbookEntry
        """
        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    async def save_all(self, entries: Sequence[CashbookEntry]) -> None:
        self.session.add_all(list(entries))
        await self.session.flush()

    async def update_sequence_positions(self, positions: Dict[str, int]) -> int:
        updated = 0
        for entry_id, position in positions.items():
            stmt = (
                update(CashbookEntry)
                .where(CashbookEntry.id == entry_id)
                .values(sequence_position=position)
            )
            result = await self.session.execute(stmt)
            updated += result.rowcount
        await self.session.flush()
        return updated

    async def archive_date_range(
        self, start_date: date, end_date: date, label: str, archived_at: datetime
    ) -> int:
        stmt = (
            update(CashbookEntry)
            .where(
                CashbookEntry.archived_at.is_(None),
                CashbookEntry.occurred_on >= start_date,
                CashbookEntry.occurred_on <= end_date,
            )
            .values(archived_at=archived_at, archived_label=label)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def restore_archive(self, label: str, archived_at: datetime) -> int:
        stmt = (
            update(CashbookEntry)
            .where(
                CashbookEntry.archived_label == label,
                CashbookEntry.archived_at == archived_at,
            )
            .values(archived_at=None, archived_label=None)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_by_ids(self, entry_ids: Sequence[str]) -> int:
        if not entry_ids:
            return 0
        stmt = delete(CashbookEntry).where(CashbookEntry.id.in_(list(entry_ids)))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_active(self) -> int:
        stmt = delete(CashbookEntry).where(CashbookEntry.archived_at.is_(None))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def list_archives(self) -> List[ArchiveBatch]:
        stmt = (
            select(
                CashbookEntry.archived_label,
                CashbookEntry.archived_at,
                func.count(CashbookEntry.id),
                func.min(CashbookEntry.occurred_on),
                func.max(CashbookEntry.occurred_on),
            )
            .where(CashbookEntry.archived_at.is_not(None))
            .group_by(CashbookEntry.archived_label, CashbookEntry.archived_at)
            .order_by(CashbookEntry.archived_at.desc())
        )
        result = await self.session.execute(stmt)
        return [
            ArchiveBatch(
                label=label,
                archived_at=archived_at,
                count=count,
                start_date=start_date,
                end_date=end_date,
            )
            for label, archived_at, count, start_date, end_date in result.all()
        ]

    async def get_archived_entries(self, label: str, archived_at: datetime) -> List[CashbookEntry]:
        stmt = (
            select(CashbookEntry)
            .where(
                CashbookEntry.archived_label == label,
                CashbookEntry.archived_at == archived_at,
            )
            .order_by(*CALCULATION_ORDER)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
