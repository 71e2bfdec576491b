"""Accumulator and Category Enumerations

AccumulatorKind is the fixed set of running totals carried along the cashbook
chain. Each kind maps to a value column and an ``override_<kind>`` pin column
on CashbookEntry.

EntryCategory classifies an entry and decides which accumulators it feeds.
"""

from enum import Enum


class AccumulatorKind(str, Enum):
    """Running totals maintained by the recalculation engine"""
    CASH_BALANCE = "cash_balance"
    REVENUE = "revenue"
    OPERATING_COST = "operating_cost"
    MATERIAL_COST = "material_cost"
    NET_PROFIT = "net_profit"
    LOAN_ANWAR = "loan_anwar"
    LOAN_SURI = "loan_suri"
    LOAN_CAHAYA = "loan_cahaya"
    LOAN_DINIL = "loan_dinil"
    PROFIT_SHARE_ANWAR = "profit_share_anwar"
    PROFIT_SHARE_SURI = "profit_share_suri"
    PROFIT_SHARE_GEMI = "profit_share_gemi"

    @property
    def override_field(self) -> str:
        return f"override_{self.value}"


class EntryCategory(str, Enum):
    """Cashbook entry categories"""
    REVENUE = "revenue"                              # Sales income
    RECEIVABLE_SETTLEMENT = "receivable_settlement"  # Customer pays an open receivable
    OPERATING_EXPENSE = "operating_expense"          # Day-to-day running costs
    SAVINGS = "savings"                              # Money set aside, booked as operating cost
    COMMISSION = "commission"                        # Sales commission paid out
    MATERIAL_SUPPLY = "material_supply"              # Material purchases
    PAYABLE_SETTLEMENT = "payable_settlement"        # Paying off a supplier debt
    PERSONAL_ANWAR = "personal_anwar"                # Personal draw/repayment, Anwar
    PERSONAL_SURI = "personal_suri"                  # Personal draw/repayment, Suri
    INVESTOR = "investor"                            # Investor capital movements
    MANUAL = "manual"                                # Unclassified manual entry


REVENUE_CATEGORIES = frozenset({
    EntryCategory.REVENUE,
    EntryCategory.RECEIVABLE_SETTLEMENT,
})

OPERATING_COST_CATEGORIES = frozenset({
    EntryCategory.OPERATING_EXPENSE,
    EntryCategory.SAVINGS,
    EntryCategory.COMMISSION,
})

MATERIAL_COST_CATEGORIES = frozenset({
    EntryCategory.MATERIAL_SUPPLY,
    EntryCategory.PAYABLE_SETTLEMENT,
})

# Loans to these parties are recognised from the entry purpose text
KEYWORD_LOAN_CATEGORIES = frozenset({
    EntryCategory.INVESTOR,
    EntryCategory.OPERATING_EXPENSE,
})
