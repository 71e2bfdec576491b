"""Cashbook Recalculation Engine

Derives every running total of every active entry in one ordered pass.

Rules:
- Only active entries (archived_at is None) take part
- Order is sequence_position ASC, then recorded_at ASC, then id
- Every total starts at zero
- A pinned (overridden) total is not recomputed: its stored value becomes the
  new running value, and later rows continue from it
- An unpinned total is recomputed from the previous running value and this
  entry's contribution

The engine is pure. It never mutates the entries it is given; the caller
applies the result and persists it.
"""

from collections import Counter
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Iterable, List, Sequence
from src.domain.accumulator import (
    AccumulatorKind,
    EntryCategory,
    REVENUE_CATEGORIES,
    OPERATING_COST_CATEGORIES,
    MATERIAL_COST_CATEGORIES,
    KEYWORD_LOAN_CATEGORIES,
)
from src.domain.cashbook_entry import CashbookEntry

ZERO = Decimal("0")
MONEY_QUANTUM = Decimal("0.000001")  # Matches Numeric(18, 6) storage
PROFIT_SPLIT = Decimal("3")


@dataclass
class RunningTotals:
    """Chain state carried from one entry to the next"""
    values: Dict[AccumulatorKind, Decimal] = field(
        default_factory=lambda: {kind: ZERO for kind in AccumulatorKind}
    )
    previous_net_profit: Decimal = ZERO

    def __getitem__(self, kind: AccumulatorKind) -> Decimal:
        return self.values[kind]

    def __setitem__(self, kind: AccumulatorKind, value: Decimal) -> None:
        self.values[kind] = value


ContributionRule = Callable[[CashbookEntry, RunningTotals], Decimal]


def _debit(entry: CashbookEntry) -> Decimal:
    return entry.debit_amount or ZERO


def _credit(entry: CashbookEntry) -> Decimal:
    return entry.credit_amount or ZERO


def _split(amount: Decimal) -> Decimal:
    return (amount / PROFIT_SPLIT).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def _cash_balance(entry, running):
    return running[AccumulatorKind.CASH_BALANCE] + _debit(entry) - _credit(entry)


def _revenue(entry, running):
    total = running[AccumulatorKind.REVENUE]
    if entry.category in REVENUE_CATEGORIES:
        total += _debit(entry)
    return total


def _operating_cost(entry, running):
    total = running[AccumulatorKind.OPERATING_COST]
    if entry.category in OPERATING_COST_CATEGORIES:
        total += _credit(entry)
    return total


def _material_cost(entry, running):
    total = running[AccumulatorKind.MATERIAL_COST]
    if entry.category in MATERIAL_COST_CATEGORIES:
        total += _credit(entry)
    return total


def _net_profit(entry, running):
    return (
        running[AccumulatorKind.REVENUE]
        - running[AccumulatorKind.OPERATING_COST]
        - running[AccumulatorKind.MATERIAL_COST]
    )


def _category_loan(kind: AccumulatorKind, category: EntryCategory) -> ContributionRule:
    # Credit is money handed to the party, debit is a repayment
    def rule(entry, running):
        total = running[kind]
        if entry.category == category:
            total += _credit(entry) - _debit(entry)
        return total
    return rule


def _keyword_loan(kind: AccumulatorKind, keyword: str) -> ContributionRule:
    def rule(entry, running):
        total = running[kind]
        purpose = (entry.purpose or "").lower()
        if keyword in purpose and entry.category in KEYWORD_LOAN_CATEGORIES:
            total += _credit(entry) - _debit(entry)
        return total
    return rule


def _partner_share(loan_kind: AccumulatorKind) -> ContributionRule:
    def rule(entry, running):
        return _split(running[AccumulatorKind.NET_PROFIT]) - running[loan_kind]
    return rule


def _investor_share(entry, running):
    increment = running[AccumulatorKind.NET_PROFIT] - running.previous_net_profit
    total = running[AccumulatorKind.PROFIT_SHARE_GEMI] + _split(increment)
    if entry.category == EntryCategory.INVESTOR:
        total += _debit(entry) - _credit(entry)
    return total


# Evaluation order matters: net profit reads this row's revenue and costs,
# profit shares read this row's net profit and loans.
CONTRIBUTION_RULES: Dict[AccumulatorKind, ContributionRule] = {
    AccumulatorKind.REVENUE: _revenue,
    AccumulatorKind.OPERATING_COST: _operating_cost,
    AccumulatorKind.MATERIAL_COST: _material_cost,
    AccumulatorKind.CASH_BALANCE: _cash_balance,
    AccumulatorKind.NET_PROFIT: _net_profit,
    AccumulatorKind.LOAN_ANWAR: _category_loan(AccumulatorKind.LOAN_ANWAR, EntryCategory.PERSONAL_ANWAR),
    AccumulatorKind.LOAN_SURI: _category_loan(AccumulatorKind.LOAN_SURI, EntryCategory.PERSONAL_SURI),
    AccumulatorKind.LOAN_CAHAYA: _keyword_loan(AccumulatorKind.LOAN_CAHAYA, "cahaya"),
    AccumulatorKind.LOAN_DINIL: _keyword_loan(AccumulatorKind.LOAN_DINIL, "dinil"),
    AccumulatorKind.PROFIT_SHARE_ANWAR: _partner_share(AccumulatorKind.LOAN_ANWAR),
    AccumulatorKind.PROFIT_SHARE_SURI: _partner_share(AccumulatorKind.LOAN_SURI),
    AccumulatorKind.PROFIT_SHARE_GEMI: _investor_share,
}

if set(CONTRIBUTION_RULES) != set(AccumulatorKind):
    missing = set(AccumulatorKind) - set(CONTRIBUTION_RULES)
    raise RuntimeError(f"No contribution rule for accumulators: {sorted(k.value for k in missing)}")


@dataclass
class RecalculatedEntry:
    """Values to persist for one entry (pinned totals are absent)"""
    entry_id: str
    values: Dict[AccumulatorKind, Decimal]


@dataclass
class RecalculationResult:
    entries: List[RecalculatedEntry]
    sequence_collisions: List[int]

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    def values_for(self, entry_id: str) -> Dict[AccumulatorKind, Decimal]:
        for recalculated in self.entries:
            if recalculated.entry_id == entry_id:
                return recalculated.values
        raise KeyError(entry_id)

    def apply(self, entries: Iterable[CashbookEntry]) -> List[CashbookEntry]:
        """Write computed values onto the matching entities

        Returns:
            The entities that were touched, in calculation order
        """
        by_id = {entry.id: entry for entry in entries}
        touched = []
        for recalculated in self.entries:
            entry = by_id.get(recalculated.entry_id)
            if entry is None:
                continue
            for kind, value in recalculated.values.items():
                entry.set_value(kind, value)
            touched.append(entry)
        return touched


def calculation_order(entries: Iterable[CashbookEntry]) -> List[CashbookEntry]:
    """Active entries sorted into canonical calculation order"""
    active = [entry for entry in entries if entry.archived_at is None]
    return sorted(
        active,
        key=lambda entry: (entry.sequence_position, entry.recorded_at, entry.id),
    )


def find_sequence_collisions(entries: Sequence[CashbookEntry]) -> List[int]:
    counts = Counter(entry.sequence_position for entry in entries)
    return sorted(position for position, count in counts.items() if count > 1)


def recalculate(entries: Iterable[CashbookEntry]) -> RecalculationResult:
    """
    Recalculate running totals for the active cashbook

    Args:
        entries: Cashbook entries; archived entries are ignored

    Returns:
        RecalculationResult with, per active entry in calculation order, the
        values of every non-pinned accumulator, plus any sequence positions
        shared by more than one active entry
    """
    ordered = calculation_order(entries)
    running = RunningTotals()
    results: List[RecalculatedEntry] = []

    for entry in ordered:
        computed: Dict[AccumulatorKind, Decimal] = {}
        for kind, rule in CONTRIBUTION_RULES.items():
            if entry.is_overridden(kind):
                running[kind] = entry.get_value(kind)
            else:
                running[kind] = rule(entry, running)
                computed[kind] = running[kind]
        running.previous_net_profit = running[AccumulatorKind.NET_PROFIT]
        results.append(RecalculatedEntry(entry_id=entry.id, values=computed))

    return RecalculationResult(
        entries=results,
        sequence_collisions=find_sequence_collisions(ordered),
    )
