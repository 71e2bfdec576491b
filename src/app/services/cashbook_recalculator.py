"""Cashbook Recalculator Service

Runs the recalculation engine over the persisted active cashbook and flushes
the computed values. Committing is left to the calling use case so that the
triggering mutation and the recalculation land in the same transaction.
"""

import logging
from src.app.repositories.cashbook_entry_repository import CashbookEntryRepository
from src.domain.cashbook_calculation import RecalculationResult, recalculate

logger = logging.getLogger(__name__)


class CashbookRecalculator:
    def __init__(self, entry_repo: CashbookEntryRepository):
        self.entry_repo = entry_repo

    async def run(self) -> RecalculationResult:
        entries = await self.entry_repo.get_active_entries(for_update=True)
        result = recalculate(entries)

        if result.sequence_collisions:
            # Two writers assigned the same position without serialization
            logger.warning(
                f"Sequence position collision in active cashbook at positions "
                f"{result.sequence_collisions}; ordering by recorded_at"
            )

        touched = result.apply(entries)
        await self.entry_repo.save_all(touched)

        logger.info(f"Recalculated {result.entry_count} active cashbook entries")
        return result
