from .cashbook_entry_repository import ArchiveBatch, CashbookEntryRepository

__all__ = [
    "ArchiveBatch",
    "CashbookEntryRepository",
]
