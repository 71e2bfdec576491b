from .base import BaseModel, UTCDateTime, as_utc, generate_uuid, utc_now
from .accumulator import AccumulatorKind, EntryCategory
from .cashbook_entry import CashbookEntry
from .cashbook_calculation import (
    RecalculatedEntry,
    RecalculationResult,
    calculation_order,
    recalculate,
)

__all__ = [
    "BaseModel",
    "generate_uuid",
    "utc_now",
    "as_utc",
    "UTCDateTime",
    "AccumulatorKind",
    "EntryCategory",
    "CashbookEntry",
    "RecalculatedEntry",
    "RecalculationResult",
    "calculation_order",
    "recalculate",
]
