"""RecalculateCashbook Use Case

Explicit recalculation trigger, e.g. after a reorder.
"""

from .base import CashbookMutation
from .dtos import RecalculationResponseDTO


class RecalculateCashbook(CashbookMutation):
    failure_code = "RECALCULATION_FAILED"
    failure_message = "Failed to recalculate cashbook"

    async def _mutate(self, command=None) -> RecalculationResponseDTO:
        recalculation = await self.recalculator.run()
        return RecalculationResponseDTO(
            recalculated_entries=recalculation.entry_count,
            sequence_collisions=recalculation.sequence_collisions,
        )
