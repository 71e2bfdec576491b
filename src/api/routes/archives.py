"""Cashbook Archive API Routes

Closing periods ("archives") and browsing them.
"""

import asyncio
import base64
from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.routes.cashbook import build_mutation
from src.app.use_cases.cashbook import (
    ArchiveEntries,
    RestoreArchive,
    ListArchives,
    GetArchivedEntries,
    GetArchiveReport,
    ExportArchiveReport,
)
from src.app.use_cases.cashbook.dtos import (
    ArchiveCommandDTO,
    RestoreArchiveCommandDTO,
    ArchiveResponseDTO,
    RestoreArchiveResponseDTO,
    ListArchivesResponseDTO,
    ListEntriesResponseDTO,
    ArchiveReportDTO,
)
from src.adapter.repositories.cashbook_entry_repository import SqlAlchemyCashbookEntryRepository
from src.adapter.services.pdf_service import ReportLabPdfService
from src.depends import get_session, get_write_lock

router = APIRouter(prefix="/cashbook/archives", tags=["Cashbook Archives"])


@router.get("", response_model=ListArchivesResponseDTO)
async def list_archives(session: AsyncSession = Depends(get_session)):
    """Archive batches with entry count and date span, newest first."""
    result = await ListArchives(SqlAlchemyCashbookEntryRepository(session)).execute()
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("", response_model=ArchiveResponseDTO, status_code=status.HTTP_201_CREATED)
async def archive_entries(
    request: ArchiveCommandDTO,
    session: AsyncSession = Depends(get_session),
    write_lock: asyncio.Lock = Depends(get_write_lock),
):
    """
    Archive active entries whose business date falls in the range.

    The entries keep their running totals as they are now; nothing is
    recalculated.
    """
    result = await build_mutation(ArchiveEntries, session, write_lock).execute(request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/restore", response_model=RestoreArchiveResponseDTO)
async def restore_archive(
    request: RestoreArchiveCommandDTO,
    session: AsyncSession = Depends(get_session),
    write_lock: asyncio.Lock = Depends(get_write_lock),
):
    """Move an archive batch back into the active cashbook and recalculate."""
    result = await build_mutation(RestoreArchive, session, write_lock).execute(request)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/entries", response_model=ListEntriesResponseDTO)
async def get_archived_entries(
    label: str = Query(..., min_length=1),
    archived_at: datetime = Query(...),
    session: AsyncSession = Depends(get_session),
):
    use_case = GetArchivedEntries(SqlAlchemyCashbookEntryRepository(session))
    result = await use_case.execute(label, archived_at)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/report", response_model=ArchiveReportDTO)
async def get_archive_report(
    label: str = Query(..., min_length=1),
    archived_at: datetime = Query(...),
    session: AsyncSession = Depends(get_session),
):
    use_case = GetArchiveReport(SqlAlchemyCashbookEntryRepository(session))
    result = await use_case.execute(label, archived_at)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/report/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: {
            "description": "Archive not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "ARCHIVE_NOT_FOUND",
                            "message": "No archive 'January 2024' at 2024-02-01T10:00:00"
                        }
                    }
                }
            }
        }
    }
)
async def download_archive_report_pdf(
    label: str = Query(..., min_length=1),
    archived_at: datetime = Query(...),
    session: AsyncSession = Depends(get_session),
):
    """
    Download the report of an archive batch as a PDF file.

    **Query parameters:**
    - `label` (required): Archive batch name
    - `archived_at` (required): Archive batch timestamp

    **Returns:**
    - 200: PDF file as binary response
    - 404: Archive not found
    """
    use_case = ExportArchiveReport(
        SqlAlchemyCashbookEntryRepository(session),
        ReportLabPdfService(),
        business_name=ApplicationConfig.BUSINESS_NAME,
    )
    result = await use_case.execute(label, archived_at)
    if result.is_err():
        raise_for_error(result.error)

    pdf_bytes = base64.b64decode(result.value.pdf_base64)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={result.value.filename}"
        }
    )
