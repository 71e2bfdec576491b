"""UpdateEntry Use Case

Edits the inputs of an entry (date, category, amounts, purpose, notes).
"""

from decimal import Decimal
from libs.result import Error
from src.domain.base import utc_now
from .base import CashbookMutation, MutationRejected, entry_archived, entry_not_found
from .dtos import UpdateEntryCommandDTO, EntryMutationResponseDTO, CashbookEntryDTO


class UpdateEntry(CashbookMutation):
    """
    Use Case: Update entry inputs

    Business Rules:
    1. Archived entries cannot be edited
    2. The edited entry must still have money on one side only
    3. Pins are untouched; only inputs change
    4. The active cashbook is recalculated so later rows follow the new inputs
    """

    failure_code = "UPDATE_ENTRY_FAILED"
    failure_message = "Failed to update cashbook entry"

    async def _mutate(self, command: UpdateEntryCommandDTO) -> EntryMutationResponseDTO:
        entry = await self.entry_repo.get_by_id(command.entry_id, for_update=True)
        if not entry:
            raise entry_not_found(command.entry_id)
        if not entry.is_active:
            raise entry_archived(command.entry_id)

        changes = command.changes()
        debit = changes.get("debit_amount", entry.debit_amount) or Decimal("0")
        credit = changes.get("credit_amount", entry.credit_amount) or Decimal("0")
        if debit > 0 and credit > 0:
            raise MutationRejected(
                Error(
                    code="INVALID_AMOUNTS",
                    message="An entry cannot have both a debit and a credit amount",
                    reason=f"debit={debit}, credit={credit}",
                )
            )

        for name, value in changes.items():
            setattr(entry, name, value)
        entry.updated_at = utc_now()
        await self.entry_repo.save_all([entry])

        recalculation = await self.recalculator.run()

        return EntryMutationResponseDTO(
            entry=CashbookEntryDTO.from_entry(entry),
            recalculated_entries=recalculation.entry_count,
        )
