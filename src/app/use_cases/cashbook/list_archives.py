"""Archive Browsing Use Cases

ListArchives: archive batches, newest first.
GetArchivedEntries: entries of one batch, frozen totals included.
"""

from datetime import datetime
from libs.result import Result, Return, Error
from src.domain.base import as_utc
from src.app.repositories.cashbook_entry_repository import CashbookEntryRepository
from .dtos import ArchiveDTO, CashbookEntryDTO, ListArchivesResponseDTO, ListEntriesResponseDTO


class ListArchives:
    def __init__(self, entry_repo: CashbookEntryRepository):
        self.entry_repo = entry_repo

    async def execute(self) -> Result[ListArchivesResponseDTO]:
        batches = await self.entry_repo.list_archives()
        return Return.ok(
            ListArchivesResponseDTO(
                archives=[
                    ArchiveDTO(
                        label=batch.label,
                        archived_at=batch.archived_at,
                        count=batch.count,
                        start_date=batch.start_date,
                        end_date=batch.end_date,
                    )
                    for batch in batches
                ]
            )
        )


class GetArchivedEntries:
    def __init__(self, entry_repo: CashbookEntryRepository):
        self.entry_repo = entry_repo

    async def execute(self, label: str, archived_at: datetime) -> Result[ListEntriesResponseDTO]:
        """
        Args:
            label: Archive batch name
            archived_at: Archive batch timestamp

        Errors:
            ARCHIVE_NOT_FOUND: No entries in this batch
        """
        archived_at = as_utc(archived_at)
        entries = await self.entry_repo.get_archived_entries(label, archived_at)
        if not entries:
            return Return.err(
                Error(
                    code="ARCHIVE_NOT_FOUND",
                    message=f"No archive '{label}' at {archived_at.isoformat()}",
                )
            )

        return Return.ok(
            ListEntriesResponseDTO(
                entries=[CashbookEntryDTO.from_entry(entry) for entry in entries],
                total=len(entries),
            )
        )
