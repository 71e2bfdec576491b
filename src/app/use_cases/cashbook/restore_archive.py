"""RestoreArchive Use Case

Moves an archive batch back into the active cashbook and recalculates.
"""

import logging
from libs.result import Error
from .base import CashbookMutation, MutationRejected
from .dtos import RestoreArchiveCommandDTO, RestoreArchiveResponseDTO

logger = logging.getLogger(__name__)


class RestoreArchive(CashbookMutation):
    """
    Use Case: Restore an archive batch

    Business Rules:
    1. Rows are matched on (label, archived_at) together
    2. The whole batch is restored by a single statement
    3. The now larger active cashbook is recalculated
    """

    failure_code = "RESTORE_ARCHIVE_FAILED"
    failure_message = "Failed to restore archive"

    async def _mutate(self, command: RestoreArchiveCommandDTO) -> RestoreArchiveResponseDTO:
        restored = await self.entry_repo.restore_archive(
            label=command.label,
            archived_at=command.archived_at,
        )
        if restored == 0:
            raise MutationRejected(
                Error(
                    code="ARCHIVE_NOT_FOUND",
                    message=f"No archive '{command.label}' at {command.archived_at.isoformat()}",
                )
            )

        recalculation = await self.recalculator.run()

        logger.info(f"Restored {restored} entries from archive '{command.label}'")
        return RestoreArchiveResponseDTO(
            restored=restored,
            recalculated_entries=recalculation.entry_count,
        )
