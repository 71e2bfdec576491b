"""OverrideEntryValues Use Case

Manually sets running totals on an entry. Every edited total is pinned.
"""

import logging
from src.domain.base import utc_now
from .base import CashbookMutation, entry_archived, entry_not_found
from .dtos import OverrideValuesCommandDTO, EntryMutationResponseDTO, CashbookEntryDTO

logger = logging.getLogger(__name__)


class OverrideEntryValues(CashbookMutation):
    """
    Use Case: Override running totals

    Business Rules:
    1. Each provided total is stored and its override flag set
       (there is no edit without pinning)
    2. The active cashbook is recalculated: pinned totals re-anchor the chain
       and later rows continue from them
    """

    failure_code = "OVERRIDE_ENTRY_FAILED"
    failure_message = "Failed to override cashbook entry"

    async def _mutate(self, command: OverrideValuesCommandDTO) -> EntryMutationResponseDTO:
        entry = await self.entry_repo.get_by_id(command.entry_id, for_update=True)
        if not entry:
            raise entry_not_found(command.entry_id)
        if not entry.is_active:
            raise entry_archived(command.entry_id)

        for kind, value in command.values.items():
            entry.set_value(kind, value)
            entry.set_override(kind, True)
        entry.updated_at = utc_now()
        await self.entry_repo.save_all([entry])

        logger.info(
            f"Pinned {sorted(kind.value for kind in command.values)} on entry {entry.id}"
        )

        recalculation = await self.recalculator.run()

        return EntryMutationResponseDTO(
            entry=CashbookEntryDTO.from_entry(entry),
            recalculated_entries=recalculation.entry_count,
        )
