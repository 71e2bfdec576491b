"""Cashbook use cases"""
from .base import CashbookMutation, MutationRejected
from .create_entry import CreateEntry
from .update_entry import UpdateEntry
from .override_entry_values import OverrideEntryValues
from .remove_override import RemoveOverride
from .reorder_entries import ReorderEntries
from .archive_entries import ArchiveEntries
from .restore_archive import RestoreArchive
from .delete_entries import DeleteEntries, DeleteAllActiveEntries
from .recalculate_cashbook import RecalculateCashbook
from .list_entries import ListEntries
from .get_summary import GetCashbookSummary
from .list_archives import ListArchives, GetArchivedEntries
from .get_archive_report import GetArchiveReport
from .export_archive_report import ExportArchiveReport
from .verify_cashbook import VerifyCashbook
from .dtos import (
    CreateEntryCommandDTO,
    UpdateEntryCommandDTO,
    OverrideValuesCommandDTO,
    RemoveOverrideCommandDTO,
    ReorderCommandDTO,
    ArchiveCommandDTO,
    RestoreArchiveCommandDTO,
    DeleteEntriesCommandDTO,
    CashbookEntryDTO,
    EntryMutationResponseDTO,
    ReorderResponseDTO,
    ArchiveResponseDTO,
    RestoreArchiveResponseDTO,
    DeleteEntriesResponseDTO,
    RecalculationResponseDTO,
    ListEntriesResponseDTO,
    CashbookSummaryDTO,
    ArchiveDTO,
    ListArchivesResponseDTO,
    CategoryBreakdownDTO,
    ArchiveReportDTO,
    ArchiveReportPdfDTO,
    CalculationDiscrepancyDTO,
    VerificationResultDTO,
)

__all__ = [
    "CashbookMutation",
    "MutationRejected",
    "CreateEntry",
    "UpdateEntry",
    "OverrideEntryValues",
    "RemoveOverride",
    "ReorderEntries",
    "ArchiveEntries",
    "RestoreArchive",
    "DeleteEntries",
    "DeleteAllActiveEntries",
    "RecalculateCashbook",
    "ListEntries",
    "GetCashbookSummary",
    "ListArchives",
    "GetArchivedEntries",
    "GetArchiveReport",
    "ExportArchiveReport",
    "VerifyCashbook",
    "CreateEntryCommandDTO",
    "UpdateEntryCommandDTO",
    "OverrideValuesCommandDTO",
    "RemoveOverrideCommandDTO",
    "ReorderCommandDTO",
    "ArchiveCommandDTO",
    "RestoreArchiveCommandDTO",
    "DeleteEntriesCommandDTO",
    "CashbookEntryDTO",
    "EntryMutationResponseDTO",
    "ReorderResponseDTO",
    "ArchiveResponseDTO",
    "RestoreArchiveResponseDTO",
    "DeleteEntriesResponseDTO",
    "RecalculationResponseDTO",
    "ListEntriesResponseDTO",
    "CashbookSummaryDTO",
    "ArchiveDTO",
    "ListArchivesResponseDTO",
    "CategoryBreakdownDTO",
    "ArchiveReportDTO",
    "ArchiveReportPdfDTO",
    "CalculationDiscrepancyDTO",
    "VerificationResultDTO",
]
