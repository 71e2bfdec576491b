"""Get Cashbook Summary Use Case

The running totals of the last active entry are the cashbook's current
figures (summary cards).
"""

from libs.result import Result, Return
from src.app.repositories.cashbook_entry_repository import CashbookEntryRepository
from src.domain.accumulator import AccumulatorKind
from .dtos import CashbookSummaryDTO


class GetCashbookSummary:
    def __init__(self, entry_repo: CashbookEntryRepository):
        self.entry_repo = entry_repo

    async def execute(self) -> Result[CashbookSummaryDTO]:
        entries = await self.entry_repo.get_active_entries()

        if not entries:
            return Return.ok(
                CashbookSummaryDTO(
                    values={kind.value: 0 for kind in AccumulatorKind},
                    entry_count=0,
                )
            )

        last = entries[-1]
        return Return.ok(
            CashbookSummaryDTO(
                values={kind.value: value for kind, value in last.accumulator_values().items()},
                entry_count=len(entries),
                last_entry_id=last.id,
            )
        )
