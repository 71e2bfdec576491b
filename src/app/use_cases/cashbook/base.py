"""Base class for cashbook mutations

Every mutation of the active cashbook runs:
1. Under the ledger write lock (mutations are queued, never interleaved)
2. Inside one unit of work, bounded by an optional timeout
3. Commit on success, rollback on any failure (no partial writes)
"""

import asyncio
import logging
from typing import Any, Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.cashbook_recalculator import CashbookRecalculator
from src.app.repositories.cashbook_entry_repository import CashbookEntryRepository

logger = logging.getLogger(__name__)


class MutationRejected(Exception):
    """Raised inside a mutation to abort it with a business error"""

    def __init__(self, error: Error):
        super().__init__(error.message)
        self.error = error


def entry_not_found(entry_id: str) -> MutationRejected:
    return MutationRejected(
        Error(
            code="ENTRY_NOT_FOUND",
            message=f"Cashbook entry {entry_id} not found",
        )
    )


def entry_archived(entry_id: str) -> MutationRejected:
    return MutationRejected(
        Error(
            code="ENTRY_ARCHIVED",
            message=f"Cashbook entry {entry_id} is archived",
            reason="Archived entries are frozen; restore the archive first",
        )
    )


class CashbookMutation:
    """
    Template for use cases that write to the cashbook

    Subclasses implement _mutate(). Business errors are raised as
    MutationRejected; anything else is reported under failure_code.

    write_lock must be the one lock shared by every writer in the process;
    writers in other processes are held off by SELECT ... FOR UPDATE.
    """

    failure_code = "CASHBOOK_MUTATION_FAILED"
    failure_message = "Failed to update cashbook"

    def __init__(
        self,
        uow: UnitOfWork,
        entry_repo: CashbookEntryRepository,
        write_lock: asyncio.Lock,
        timeout_seconds: Optional[float] = None,
    ):
        self.uow = uow
        self.entry_repo = entry_repo
        self.recalculator = CashbookRecalculator(entry_repo)
        self.write_lock = write_lock
        self.timeout_seconds = timeout_seconds

    async def execute(self, command: Any = None) -> Result:
        async with self.write_lock:
            try:
                value = await asyncio.wait_for(
                    self._mutate(command), timeout=self.timeout_seconds
                )
                await self.uow.commit()
                return Return.ok(value)

            except MutationRejected as e:
                await self.uow.rollback()
                return Return.err(e.error)

            except asyncio.TimeoutError:
                await self.uow.rollback()
                logger.error(
                    f"{type(self).__name__} exceeded {self.timeout_seconds}s, rolled back"
                )
                return Return.err(
                    Error(
                        code="MUTATION_TIMEOUT",
                        message=self.failure_message,
                        reason=f"Timed out after {self.timeout_seconds}s",
                    )
                )

            except Exception as e:
                await self.uow.rollback()
                logger.error(f"{self.failure_message}: {e}")
                return Return.err(
                    Error(
                        code=self.failure_code,
                        message=self.failure_message,
                        reason=str(e),
                    )
                )

    async def _mutate(self, command: Any):
        raise NotImplementedError
