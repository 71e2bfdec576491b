"""Cashbook Entry Domain Entity

One financial event in the cashbook. Besides its inputs (date, category,
debit/credit, purpose) an entry stores the running totals computed for it by
the recalculation engine, and one pin flag per total.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, Date, Numeric, String
from src.domain.base import BaseModel, UTCDateTime, generate_uuid, utc_now
from src.domain.accumulator import AccumulatorKind, EntryCategory


def money_field(description: str, default: Decimal = Decimal("0")):
    return Field(
        default=default,
        sa_column=Column(Numeric(18, 6), nullable=False, default=0),
        description=description,
    )


def override_field(description: str):
    return Field(default=False, nullable=False, description=description)


class CashbookEntry(BaseModel, table=True):
    """
    Cashbook Entry - one row of the running-balance ledger

    Domain Rules:
    - id is immutable once created
    - Calculation order is sequence_position ASC, recorded_at ASC
    - occurred_on is the business date and never drives calculation order
    - override_<kind> = True pins <kind>: the stored value is authoritative
    - archived_at/archived_label set together: row is frozen in an archive batch
    """

    __tablename__ = "cashbook_entries"
    __table_args__ = (
        CheckConstraint('debit_amount >= 0', name='debit_non_negative'),
        CheckConstraint('credit_amount >= 0', name='credit_non_negative'),
        Index('ix_cashbook_entries_order', 'sequence_position', 'recorded_at'),
        Index('ix_cashbook_entries_archive', 'archived_label', 'archived_at'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique entry identifier (opaque, immutable)"
    )

    occurred_on: date = Field(
        sa_column=Column(Date, nullable=False, index=True),
        description="Business date of the transaction"
    )

    recorded_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(UTCDateTime, nullable=False),
        description="Insertion timestamp (tie-break for equal sequence positions)"
    )

    sequence_position: int = Field(
        default=0,
        description="Calculation and default display order"
    )

    category: EntryCategory = Field(
        default=EntryCategory.MANUAL,
        description="Entry category (drives which accumulators are affected)"
    )

    debit_amount: Decimal = money_field("Money in (precision: 18,6)")
    credit_amount: Decimal = money_field("Money out (precision: 18,6)")

    purpose: str = Field(
        default="",
        sa_column=Column(String(500), nullable=False, default=""),
        description="Free-text purpose, also used to correlate upstream records"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(String(1000), nullable=True),
        description="Optional free-text notes"
    )

    created_by: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Name of the user or process that created the entry"
    )

    # Running totals
    cash_balance: Decimal = money_field("Running cash balance")
    revenue: Decimal = money_field("Running revenue")
    operating_cost: Decimal = money_field("Running operating cost")
    material_cost: Decimal = money_field("Running material cost")
    net_profit: Decimal = money_field("Revenue - operating cost - material cost")
    loan_anwar: Decimal = money_field("Outstanding loan balance, Anwar")
    loan_suri: Decimal = money_field("Outstanding loan balance, Suri")
    loan_cahaya: Decimal = money_field("Outstanding loan balance, Cahaya")
    loan_dinil: Decimal = money_field("Outstanding loan balance, Dinil")
    profit_share_anwar: Decimal = money_field("Profit share, Anwar")
    profit_share_suri: Decimal = money_field("Profit share, Suri")
    profit_share_gemi: Decimal = money_field("Profit share, Gemi")

    # Pins
    override_cash_balance: bool = override_field("Pin cash_balance")
    override_revenue: bool = override_field("Pin revenue")
    override_operating_cost: bool = override_field("Pin operating_cost")
    override_material_cost: bool = override_field("Pin material_cost")
    override_net_profit: bool = override_field("Pin net_profit")
    override_loan_anwar: bool = override_field("Pin loan_anwar")
    override_loan_suri: bool = override_field("Pin loan_suri")
    override_loan_cahaya: bool = override_field("Pin loan_cahaya")
    override_loan_dinil: bool = override_field("Pin loan_dinil")
    override_profit_share_anwar: bool = override_field("Pin profit_share_anwar")
    override_profit_share_suri: bool = override_field("Pin profit_share_suri")
    override_profit_share_gemi: bool = override_field("Pin profit_share_gemi")

    archived_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(UTCDateTime, nullable=True),
        description="Archive batch timestamp (None = active)"
    )

    archived_label: Optional[str] = Field(
        default=None,
        sa_column=Column(String(200), nullable=True),
        description="Archive batch name (None = active)"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(UTCDateTime, nullable=False),
        description="Last mutation timestamp"
    )

    @property
    def is_active(self) -> bool:
        return self.archived_at is None

    def get_value(self, kind: AccumulatorKind) -> Decimal:
        value = getattr(self, kind.value)
        return value if value is not None else Decimal("0")

    def set_value(self, kind: AccumulatorKind, value: Decimal) -> None:
        setattr(self, kind.value, value)

    def is_overridden(self, kind: AccumulatorKind) -> bool:
        return bool(getattr(self, kind.override_field))

    def set_override(self, kind: AccumulatorKind, pinned: bool) -> None:
        setattr(self, kind.override_field, pinned)

    def accumulator_values(self) -> Dict[AccumulatorKind, Decimal]:
        return {kind: self.get_value(kind) for kind in AccumulatorKind}

    def overridden_kinds(self) -> list[AccumulatorKind]:
        return [kind for kind in AccumulatorKind if self.is_overridden(kind)]

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "3f1c9e0a6b2d4c8e9a7f5d3b1c0e2a4f",
                "occurred_on": "2024-01-15",
                "recorded_at": "2024-01-15T08:30:00Z",
                "sequence_position": 42,
                "category": "revenue",
                "debit_amount": "100000.000000",
                "credit_amount": "0.000000",
                "purpose": "Sale #INV-0042 banner printing",
                "cash_balance": "2500000.000000",
                "override_cash_balance": False,
                "archived_at": None,
                "archived_label": None,
            }
        }
