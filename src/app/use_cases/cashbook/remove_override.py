"""RemoveOverride Use Case

Unpins one running total so the engine owns it again.
"""

from src.domain.base import utc_now
from .base import CashbookMutation, entry_archived, entry_not_found
from .dtos import RemoveOverrideCommandDTO, EntryMutationResponseDTO, CashbookEntryDTO


class RemoveOverride(CashbookMutation):
    failure_code = "REMOVE_OVERRIDE_FAILED"
    failure_message = "Failed to remove override"

    async def _mutate(self, command: RemoveOverrideCommandDTO) -> EntryMutationResponseDTO:
        entry = await self.entry_repo.get_by_id(command.entry_id, for_update=True)
        if not entry:
            raise entry_not_found(command.entry_id)
        if not entry.is_active:
            raise entry_archived(command.entry_id)

        entry.set_override(command.field, False)
        entry.updated_at = utc_now()
        await self.entry_repo.save_all([entry])

        # Recomputes this row's total and everything after it
        recalculation = await self.recalculator.run()

        return EntryMutationResponseDTO(
            entry=CashbookEntryDTO.from_entry(entry),
            recalculated_entries=recalculation.entry_count,
        )
