"""Data Transfer Objects for Cashbook Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from src.domain.accumulator import AccumulatorKind, EntryCategory
from src.domain.base import as_utc
from src.domain.cashbook_entry import CashbookEntry


class CreateEntryCommandDTO(BaseModel):
    """
    Command DTO for creating a cashbook entry

    Exactly one of debit_amount / credit_amount must be positive.
    """

    occurred_on: date = Field(
        ...,
        description="Business date of the transaction"
    )

    category: EntryCategory = Field(
        ...,
        description="Entry category"
    )

    debit_amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Money in"
    )

    credit_amount: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Money out"
    )

    purpose: str = Field(
        default="",
        max_length=500,
        description="Free-text purpose"
    )

    notes: Optional[str] = Field(
        default=None,
        max_length=1000,
        description="Optional notes"
    )

    created_by: Optional[str] = Field(
        default=None,
        max_length=100,
        description="Author of the entry"
    )

    @model_validator(mode="after")
    def check_single_side(self):
        if self.debit_amount > 0 and self.credit_amount > 0:
            raise ValueError("debit_amount and credit_amount cannot both be set")
        if self.debit_amount == 0 and self.credit_amount == 0:
            raise ValueError("either debit_amount or credit_amount is required")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "occurred_on": "2024-01-15",
                "category": "revenue",
                "debit_amount": "100000",
                "credit_amount": "0",
                "purpose": "Sale #INV-0042 banner printing",
                "created_by": "cashier_1"
            }
        }


class UpdateEntryCommandDTO(BaseModel):
    """
    Command DTO for editing the inputs of an entry

    Only provided fields are changed. Running totals are not editable here,
    see OverrideValuesCommandDTO.
    """

    entry_id: str = Field(..., description="Entry identifier")
    occurred_on: Optional[date] = Field(default=None)
    category: Optional[EntryCategory] = Field(default=None)
    debit_amount: Optional[Decimal] = Field(default=None, ge=0)
    credit_amount: Optional[Decimal] = Field(default=None, ge=0)
    purpose: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def check_amounts(self):
        if (
            self.debit_amount is not None
            and self.credit_amount is not None
            and self.debit_amount > 0
            and self.credit_amount > 0
        ):
            raise ValueError("debit_amount and credit_amount cannot both be set")
        return self

    def changes(self) -> Dict[str, object]:
        return self.model_dump(exclude={"entry_id"}, exclude_none=True)


class OverrideValuesCommandDTO(BaseModel):
    """
    Command DTO for manually setting running totals

    Every provided total is written and pinned.
    """

    entry_id: str = Field(..., description="Entry identifier")

    values: Dict[AccumulatorKind, Decimal] = Field(
        ...,
        description="Running totals to set and pin"
    )

    @field_validator("values")
    @classmethod
    def check_not_empty(cls, values):
        if not values:
            raise ValueError("at least one value is required")
        return values

    class Config:
        json_schema_extra = {
            "example": {
                "entry_id": "3f1c9e0a6b2d4c8e9a7f5d3b1c0e2a4f",
                "values": {"cash_balance": "5000000"}
            }
        }


class RemoveOverrideCommandDTO(BaseModel):
    entry_id: str = Field(..., description="Entry identifier")
    field: AccumulatorKind = Field(..., description="Running total to unpin")


class ReorderCommandDTO(BaseModel):
    """
    Command DTO for reordering the active cashbook

    entry_ids must list every active entry exactly once, in the new order.
    """

    entry_ids: List[str] = Field(
        ...,
        min_length=1,
        description="Active entry ids in their new order"
    )


class ArchiveCommandDTO(BaseModel):
    """Command DTO for archiving a date range under a label"""

    start_date: date = Field(..., description="First business date (inclusive)")
    end_date: date = Field(..., description="Last business date (inclusive)")
    label: str = Field(..., min_length=1, max_length=200, description="Archive batch name")

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "start_date": "2024-01-01",
                "end_date": "2024-01-31",
                "label": "January 2024"
            }
        }


class RestoreArchiveCommandDTO(BaseModel):
    label: str = Field(..., min_length=1, description="Archive batch name")
    archived_at: datetime = Field(..., description="Archive batch timestamp")

    @field_validator("archived_at")
    @classmethod
    def normalize_timestamp(cls, value):
        return as_utc(value)


class DeleteEntriesCommandDTO(BaseModel):
    entry_ids: List[str] = Field(..., min_length=1, description="Entries to delete")


class CashbookEntryDTO(BaseModel):
    """Response DTO for one cashbook entry"""

    id: str
    occurred_on: date
    recorded_at: datetime
    sequence_position: int
    category: str
    debit_amount: Decimal
    credit_amount: Decimal
    purpose: str
    notes: Optional[str] = None
    created_by: Optional[str] = None
    values: Dict[str, Decimal] = Field(
        ...,
        description="Running totals keyed by accumulator name"
    )
    overridden: List[str] = Field(
        default_factory=list,
        description="Accumulator names pinned on this entry"
    )
    archived_at: Optional[datetime] = None
    archived_label: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: CashbookEntry) -> "CashbookEntryDTO":
        category = entry.category.value if hasattr(entry.category, "value") else entry.category
        return cls(
            id=entry.id,
            occurred_on=entry.occurred_on,
            recorded_at=entry.recorded_at,
            sequence_position=entry.sequence_position,
            category=category,
            debit_amount=entry.debit_amount,
            credit_amount=entry.credit_amount,
            purpose=entry.purpose,
            notes=entry.notes,
            created_by=entry.created_by,
            values={kind.value: value for kind, value in entry.accumulator_values().items()},
            overridden=[kind.value for kind in entry.overridden_kinds()],
            archived_at=entry.archived_at,
            archived_label=entry.archived_label,
        )


class EntryMutationResponseDTO(BaseModel):
    """Returned by create / update / override / remove-override"""

    entry: CashbookEntryDTO
    recalculated_entries: int = Field(..., description="Active entries recalculated")


class ReorderResponseDTO(BaseModel):
    reordered: int


class ArchiveResponseDTO(BaseModel):
    archived: int
    label: str
    archived_at: datetime


class RestoreArchiveResponseDTO(BaseModel):
    restored: int
    recalculated_entries: int


class DeleteEntriesResponseDTO(BaseModel):
    deleted: int
    recalculated_entries: int


class RecalculationResponseDTO(BaseModel):
    recalculated_entries: int
    sequence_collisions: List[int] = Field(default_factory=list)


class ListEntriesResponseDTO(BaseModel):
    entries: List[CashbookEntryDTO]
    total: int


class CashbookSummaryDTO(BaseModel):
    """Running totals as of the last active entry in calculation order"""

    values: Dict[str, Decimal]
    entry_count: int
    last_entry_id: Optional[str] = None


class ArchiveDTO(BaseModel):
    label: str
    archived_at: datetime
    count: int
    start_date: date
    end_date: date


class ListArchivesResponseDTO(BaseModel):
    archives: List[ArchiveDTO]


class CategoryBreakdownDTO(BaseModel):
    category: str
    amount: Decimal
    percentage: Decimal


class ArchiveReportDTO(BaseModel):
    """Financial report for one archive batch"""

    label: str
    archived_at: datetime
    start_date: date
    end_date: date
    total_income: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    profit_margin: Decimal = Field(..., description="Net profit as % of income")
    category_breakdown: List[CategoryBreakdownDTO]
    entry_count: int
    generated_at: datetime


class CalculationDiscrepancyDTO(BaseModel):
    entry_id: str
    sequence_position: int
    field: str
    stored_value: Decimal
    calculated_value: Decimal
    difference: Decimal


class VerificationResultDTO(BaseModel):
    total_entries_checked: int
    discrepancies_found: int
    discrepancies: List[CalculationDiscrepancyDTO]
    sequence_collisions: List[int] = Field(default_factory=list)
    verification_time: datetime
    execution_time_ms: int


class ArchiveReportPdfDTO(BaseModel):
    """Printable archive report"""

    label: str
    archived_at: datetime
    filename: str
    pdf_base64: str = Field(..., description="PDF document, base64 encoded")
