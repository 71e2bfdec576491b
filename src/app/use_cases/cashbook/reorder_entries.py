"""ReorderEntries Use Case

Assigns new sequence positions to the active cashbook.
"""

import logging
from collections import Counter
from libs.result import Error
from .base import CashbookMutation, MutationRejected
from .dtos import ReorderCommandDTO, ReorderResponseDTO

logger = logging.getLogger(__name__)


class ReorderEntries(CashbookMutation):
    """
    Use Case: Reorder active entries

    Business Rules:
    1. entry_ids must be exactly the active entries, each listed once
    2. The active entries keep their own position slots, handed out in list
       order, so archived batches never collide with them on restore
    3. Running totals are NOT recalculated: reordering the display must not
       silently change historical figures. Callers run RecalculateCashbook
       when they want the new order reflected.
    """

    failure_code = "REORDER_FAILED"
    failure_message = "Failed to reorder cashbook entries"

    async def _mutate(self, command: ReorderCommandDTO) -> ReorderResponseDTO:
        active = await self.entry_repo.get_active_entries(for_update=True)
        active_ids = {entry.id for entry in active}

        duplicates = sorted(
            entry_id for entry_id, count in Counter(command.entry_ids).items() if count > 1
        )
        if duplicates:
            raise MutationRejected(
                Error(
                    code="INVALID_REORDER",
                    message="Entry ids must be listed once",
                    reason=f"duplicates={duplicates}",
                )
            )

        requested = set(command.entry_ids)
        if requested != active_ids:
            unknown = sorted(requested - active_ids)
            missing = sorted(active_ids - requested)
            raise MutationRejected(
                Error(
                    code="INVALID_REORDER",
                    message="Reorder must list every active entry",
                    reason=f"unknown={unknown}, missing={missing}",
                )
            )

        slots = sorted(entry.sequence_position for entry in active)
        if len(set(slots)) < len(slots):
            # Colliding slots cannot be reused; move the whole set past every row
            first = await self.entry_repo.get_max_sequence_position() + 1
            slots = list(range(first, first + len(active)))

        positions = dict(zip(command.entry_ids, slots))
        reordered = await self.entry_repo.update_sequence_positions(positions)

        logger.info(f"Reordered {reordered} cashbook entries (no recalculation)")
        return ReorderResponseDTO(reordered=reordered)
