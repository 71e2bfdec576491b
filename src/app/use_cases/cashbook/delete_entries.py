"""DeleteEntries / DeleteAllActiveEntries Use Cases

Permanently removes entries and recalculates the remaining active cashbook.
"""

import logging
from libs.result import Error
from .base import CashbookMutation, MutationRejected
from .dtos import DeleteEntriesCommandDTO, DeleteEntriesResponseDTO

logger = logging.getLogger(__name__)


class DeleteEntries(CashbookMutation):
    """
    Use Case: Delete entries

    Business Rules:
    1. Every requested id must exist, otherwise nothing is deleted
    2. Remaining active entries keep their relative order and are recalculated
    """

    failure_code = "DELETE_ENTRIES_FAILED"
    failure_message = "Failed to delete cashbook entries"

    async def _mutate(self, command: DeleteEntriesCommandDTO) -> DeleteEntriesResponseDTO:
        requested = set(command.entry_ids)
        existing = await self.entry_repo.get_by_ids(sorted(requested))
        missing = sorted(requested - {entry.id for entry in existing})
        if missing:
            raise MutationRejected(
                Error(
                    code="ENTRY_NOT_FOUND",
                    message=f"Cashbook entries not found: {', '.join(missing)}",
                )
            )

        deleted = await self.entry_repo.delete_by_ids(sorted(requested))
        recalculation = await self.recalculator.run()

        logger.info(f"Deleted {deleted} cashbook entries")
        return DeleteEntriesResponseDTO(
            deleted=deleted,
            recalculated_entries=recalculation.entry_count,
        )


class DeleteAllActiveEntries(CashbookMutation):
    """
    Use Case: Clear the active cashbook

    Archived batches are preserved.
    """

    failure_code = "DELETE_ENTRIES_FAILED"
    failure_message = "Failed to delete active cashbook entries"

    async def _mutate(self, command=None) -> DeleteEntriesResponseDTO:
        deleted = await self.entry_repo.delete_active()
        recalculation = await self.recalculator.run()

        logger.warning(f"Deleted all {deleted} active cashbook entries")
        return DeleteEntriesResponseDTO(
            deleted=deleted,
            recalculated_entries=recalculation.entry_count,
        )
