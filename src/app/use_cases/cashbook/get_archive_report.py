"""Get Archive Report Use Case

Income / expense report for one closed period (archive batch).
"""

from collections import OrderedDict
from datetime import datetime
from src.domain.base import as_utc, utc_now
from decimal import Decimal, ROUND_HALF_UP
from libs.result import Result, Return, Error
from src.app.repositories.cashbook_entry_repository import CashbookEntryRepository
from .dtos import ArchiveReportDTO, CategoryBreakdownDTO

PERCENT_QUANTUM = Decimal("0.01")
HUNDRED = Decimal("100")


def _percentage(part: Decimal, whole: Decimal) -> Decimal:
    if whole <= 0:
        return Decimal("0.00")
    return (part / whole * HUNDRED).quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)


class GetArchiveReport:
    """
    Use Case: Financial report for an archive batch

    - total_income: sum of debits
    - total_expenses: sum of credits
    - net_profit: income - expenses
    - profit_margin: net profit as % of income (0 when there is no income)
    - category_breakdown: per category amount and share of income + expenses
    """

    def __init__(self, entry_repo: CashbookEntryRepository):
        self.entry_repo = entry_repo

    async def execute(self, label: str, archived_at: datetime) -> Result[ArchiveReportDTO]:
        archived_at = as_utc(archived_at)
        entries = await self.entry_repo.get_archived_entries(label, archived_at)
        if not entries:
            return Return.err(
                Error(
                    code="ARCHIVE_NOT_FOUND",
                    message=f"No archive '{label}' at {archived_at.isoformat()}",
                )
            )

        total_income = Decimal("0")
        total_expenses = Decimal("0")
        category_totals: "OrderedDict[str, Decimal]" = OrderedDict()

        for entry in entries:
            debit = entry.debit_amount or Decimal("0")
            credit = entry.credit_amount or Decimal("0")
            total_income += debit
            total_expenses += credit

            category = entry.category.value if hasattr(entry.category, "value") else entry.category
            amount = debit if debit > 0 else credit
            category_totals[category] = category_totals.get(category, Decimal("0")) + amount

        net_profit = total_income - total_expenses
        turnover = total_income + total_expenses

        return Return.ok(
            ArchiveReportDTO(
                label=label,
                archived_at=archived_at,
                start_date=min(entry.occurred_on for entry in entries),
                end_date=max(entry.occurred_on for entry in entries),
                total_income=total_income,
                total_expenses=total_expenses,
                net_profit=net_profit,
                profit_margin=_percentage(net_profit, total_income),
                category_breakdown=[
                    CategoryBreakdownDTO(
                        category=category,
                        amount=amount,
                        percentage=_percentage(amount, turnover),
                    )
                    for category, amount in category_totals.items()
                ],
                entry_count=len(entries),
                generated_at=utc_now(),
            )
        )
