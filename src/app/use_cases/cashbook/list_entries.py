"""
List Entries Use Case

Retrieves the active cashbook in calculation order.
"""
from libs.result import Result, Return
from src.app.repositories.cashbook_entry_repository import CashbookEntryRepository
from .dtos import CashbookEntryDTO, ListEntriesResponseDTO


class ListEntries:
    """
    Use case: View active cashbook

    Entries are ordered by sequence_position ASC (oldest first), or the
    reverse when newest_first is set.
    """

    def __init__(self, entry_repo: CashbookEntryRepository):
        self.entry_repo = entry_repo

    async def execute(self, newest_first: bool = False) -> Result[ListEntriesResponseDTO]:
        entries = await self.entry_repo.get_active_entries()
        if newest_first:
            entries = list(reversed(entries))

        return Return.ok(
            ListEntriesResponseDTO(
                entries=[CashbookEntryDTO.from_entry(entry) for entry in entries],
                total=len(entries),
            )
        )
