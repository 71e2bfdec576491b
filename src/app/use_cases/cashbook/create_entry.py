"""CreateEntry Use Case

Appends an entry to the end of the cashbook and recalculates.
"""

from src.domain.base import utc_now
from src.domain.cashbook_entry import CashbookEntry
from .base import CashbookMutation
from .dtos import CreateEntryCommandDTO, EntryMutationResponseDTO, CashbookEntryDTO


class CreateEntry(CashbookMutation):
    """
    Use Case: Create a cashbook entry

    Business Rules:
    1. New entry goes last: sequence_position = max position + 1
       (archived entries included, so a later restore cannot collide)
    2. Running totals of the whole active cashbook are recalculated
    3. Insert and recalculation commit together
    """

    failure_code = "CREATE_ENTRY_FAILED"
    failure_message = "Failed to create cashbook entry"

    async def _mutate(self, command: CreateEntryCommandDTO) -> EntryMutationResponseDTO:
        next_position = await self.entry_repo.get_max_sequence_position() + 1
        now = utc_now()

        entry = CashbookEntry(
            occurred_on=command.occurred_on,
            recorded_at=now,
            sequence_position=next_position,
            category=command.category,
            debit_amount=command.debit_amount,
            credit_amount=command.credit_amount,
            purpose=command.purpose,
            notes=command.notes,
            created_by=command.created_by,
            updated_at=now,
        )
        created = await self.entry_repo.create(entry)

        recalculation = await self.recalculator.run()

        return EntryMutationResponseDTO(
            entry=CashbookEntryDTO.from_entry(created),
            recalculated_entries=recalculation.entry_count,
        )
