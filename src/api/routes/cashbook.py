"""Cashbook API Routes

FastAPI routes for the active cashbook.
"""

import asyncio
from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.schemas.cashbook_request import OverrideValuesRequestSchema, UpdateEntryRequestSchema
from src.app.use_cases.cashbook import (
    CreateEntry,
    UpdateEntry,
    OverrideEntryValues,
    RemoveOverride,
    ReorderEntries,
    DeleteEntries,
    DeleteAllActiveEntries,
    RecalculateCashbook,
    ListEntries,
    GetCashbookSummary,
    VerifyCashbook,
)
from src.app.use_cases.cashbook.dtos import (
    CreateEntryCommandDTO,
    UpdateEntryCommandDTO,
    OverrideValuesCommandDTO,
    RemoveOverrideCommandDTO,
    ReorderCommandDTO,
    DeleteEntriesCommandDTO,
    EntryMutationResponseDTO,
    ReorderResponseDTO,
    DeleteEntriesResponseDTO,
    RecalculationResponseDTO,
    ListEntriesResponseDTO,
    CashbookSummaryDTO,
    VerificationResultDTO,
)
from src.adapter.repositories.cashbook_entry_repository import SqlAlchemyCashbookEntryRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_write_lock
from src.domain.accumulator import AccumulatorKind

router = APIRouter(prefix="/cashbook", tags=["Cashbook"])


def build_mutation(use_case_class, session: AsyncSession, write_lock: asyncio.Lock):
    return use_case_class(
        uow=SqlAlchemyUnitOfWork(session),
        entry_repo=SqlAlchemyCashbookEntryRepository(session),
        write_lock=write_lock,
        timeout_seconds=ApplicationConfig.CASHBOOK_MUTATION_TIMEOUT_SECONDS,
    )


@router.get("/entries", response_model=ListEntriesResponseDTO)
async def list_entries(
    newest_first: bool = Query(default=False, description="Reverse calculation order"),
    session: AsyncSession = Depends(get_session),
):
    """
    List active cashbook entries.

    Entries come in calculation order (sequence position ascending,
    insertion time as tie-break), or newest first on request.
    """
    use_case = ListEntries(SqlAlchemyCashbookEntryRepository(session))
    result = await use_case.execute(newest_first=newest_first)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/entries",
    response_model=EntryMutationResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_entry(
    request: CreateEntryCommandDTO,
    session: AsyncSession = Depends(get_session),
    write_lock: asyncio.Lock = Depends(get_write_lock),
):
    """
    Append an entry to the cashbook and recalculate running totals.

    **Request body:**
    - `occurred_on` (required): Business date
    - `category` (required): Entry category
    - `debit_amount` / `credit_amount`: exactly one must be > 0
    - `purpose`, `notes`, `created_by` (optional)
    """
    result = await build_mutation(CreateEntry, session, write_lock).execute(request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/entries/{entry_id}", response_model=EntryMutationResponseDTO)
async def update_entry(
    entry_id: str,
    request: UpdateEntryRequestSchema,
    session: AsyncSession = Depends(get_session),
    write_lock: asyncio.Lock = Depends(get_write_lock),
):
    """Edit the inputs of an active entry and recalculate."""
    command = UpdateEntryCommandDTO(entry_id=entry_id, **request.model_dump(exclude_none=True))
    result = await build_mutation(UpdateEntry, session, write_lock).execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch("/entries/{entry_id}/override", response_model=EntryMutationResponseDTO)
async def override_entry_values(
    entry_id: str,
    request: OverrideValuesRequestSchema,
    session: AsyncSession = Depends(get_session),
    write_lock: asyncio.Lock = Depends(get_write_lock),
):
    """
    Manually set running totals on an entry.

    Every provided total is pinned: recalculation keeps it and continues the
    chain from it.
    """
    command = OverrideValuesCommandDTO(entry_id=entry_id, values=request.values)
    result = await build_mutation(OverrideEntryValues, session, write_lock).execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/entries/{entry_id}/override", response_model=EntryMutationResponseDTO)
async def remove_override(
    entry_id: str,
    field: AccumulatorKind = Query(..., description="Running total to unpin"),
    session: AsyncSession = Depends(get_session),
    write_lock: asyncio.Lock = Depends(get_write_lock),
):
    """Unpin one running total and recalculate."""
    command = RemoveOverrideCommandDTO(entry_id=entry_id, field=field)
    result = await build_mutation(RemoveOverride, session, write_lock).execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/entries/{entry_id}", response_model=DeleteEntriesResponseDTO)
async def delete_entry(
    entry_id: str,
    session: AsyncSession = Depends(get_session),
    write_lock: asyncio.Lock = Depends(get_write_lock),
):
    command = DeleteEntriesCommandDTO(entry_ids=[entry_id])
    result = await build_mutation(DeleteEntries, session, write_lock).execute(command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/entries/bulk-delete", response_model=DeleteEntriesResponseDTO)
async def delete_entries(
    request: DeleteEntriesCommandDTO,
    session: AsyncSession = Depends(get_session),
    write_lock: asyncio.Lock = Depends(get_write_lock),
):
    result = await build_mutation(DeleteEntries, session, write_lock).execute(request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/entries", response_model=DeleteEntriesResponseDTO)
async def delete_all_active_entries(
    session: AsyncSession = Depends(get_session),
    write_lock: asyncio.Lock = Depends(get_write_lock),
):
    """Delete every active entry. Archived entries are preserved."""
    result = await build_mutation(DeleteAllActiveEntries, session, write_lock).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/reorder", response_model=ReorderResponseDTO)
async def reorder_entries(
    request: ReorderCommandDTO,
    session: AsyncSession = Depends(get_session),
    write_lock: asyncio.Lock = Depends(get_write_lock),
):
    """
    Reorder the active cashbook.

    Running totals are NOT recalculated. Call `POST /cashbook/recalculate`
    to apply the new order to the figures.
    """
    result = await build_mutation(ReorderEntries, session, write_lock).execute(request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/recalculate", response_model=RecalculationResponseDTO)
async def recalculate_cashbook(
    session: AsyncSession = Depends(get_session),
    write_lock: asyncio.Lock = Depends(get_write_lock),
):
    result = await build_mutation(RecalculateCashbook, session, write_lock).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/summary", response_model=CashbookSummaryDTO)
async def get_summary(session: AsyncSession = Depends(get_session)):
    """Current running totals (those of the last active entry)."""
    result = await GetCashbookSummary(SqlAlchemyCashbookEntryRepository(session)).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/verify", response_model=VerificationResultDTO)
async def verify_cashbook(session: AsyncSession = Depends(get_session)):
    """Compare stored running totals with a fresh recalculation (read-only)."""
    result = await VerifyCashbook(SqlAlchemyCashbookEntryRepository(session)).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value
