from .cashbook_entry_repository import SqlAlchemyCashbookEntryRepository

__all__ = [
    "SqlAlchemyCashbookEntryRepository",
]
