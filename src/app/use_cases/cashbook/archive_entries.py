"""ArchiveEntries Use Case

Closes the books for a date range: matching active entries move into a named
archive batch, frozen with the totals they have now.
"""

import logging
from src.domain.base import utc_now
from .base import CashbookMutation
from .dtos import ArchiveCommandDTO, ArchiveResponseDTO

logger = logging.getLogger(__name__)


class ArchiveEntries(CashbookMutation):
    """
    Use Case: Archive a date range

    Business Rules:
    1. Active entries with start_date <= occurred_on <= end_date are archived
    2. All of them share one archived_at timestamp and the label
    3. Running totals are left untouched and NOT recalculated
    4. The batch is flipped by a single statement: all rows or none
    """

    failure_code = "ARCHIVE_FAILED"
    failure_message = "Failed to archive cashbook entries"

    async def _mutate(self, command: ArchiveCommandDTO) -> ArchiveResponseDTO:
        archived_at = utc_now()
        archived = await self.entry_repo.archive_date_range(
            start_date=command.start_date,
            end_date=command.end_date,
            label=command.label,
            archived_at=archived_at,
        )

        logger.info(
            f"Archived {archived} entries from {command.start_date} to "
            f"{command.end_date} as '{command.label}'"
        )
        return ArchiveResponseDTO(
            archived=archived,
            label=command.label,
            archived_at=archived_at,
        )
