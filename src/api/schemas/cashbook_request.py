"""Cashbook API request schemas

Bodies of endpoints whose entry id comes from the path.
"""

from datetime import date
from decimal import Decimal
from typing import Dict, Optional
from pydantic import BaseModel, Field, field_validator, model_validator
from src.domain.accumulator import AccumulatorKind, EntryCategory


class UpdateEntryRequestSchema(BaseModel):
    occurred_on: Optional[date] = Field(default=None, description="Business date")
    category: Optional[EntryCategory] = Field(default=None, description="Entry category")
    debit_amount: Optional[Decimal] = Field(default=None, ge=0, description="Money in")
    credit_amount: Optional[Decimal] = Field(default=None, ge=0, description="Money out")
    purpose: Optional[str] = Field(default=None, max_length=500)
    notes: Optional[str] = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def check_amounts(self):
        if (self.debit_amount or 0) > 0 and (self.credit_amount or 0) > 0:
            raise ValueError("debit_amount and credit_amount cannot both be set")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "category": "operating_expense",
                "credit_amount": "75000",
                "debit_amount": "0",
                "purpose": "Electricity bill"
            }
        }


class OverrideValuesRequestSchema(BaseModel):
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
                "values": {"cash_balance": "5000000"}
            }
        }
