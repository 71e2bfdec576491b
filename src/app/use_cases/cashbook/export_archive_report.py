"""ExportArchiveReport Use Case

Renders the report of an archive batch as a printable PDF.
"""

import base64
import logging
import re
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.repositories.cashbook_entry_repository import CashbookEntryRepository
from src.app.services.pdf_service import PdfService
from .dtos import ArchiveReportPdfDTO, CashbookEntryDTO
from .get_archive_report import GetArchiveReport

logger = logging.getLogger(__name__)


def report_filename(label: str, archived_at: datetime) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", label).strip("_").lower() or "archive"
    return f"cashbook_{slug}_{archived_at.strftime('%Y%m%d%H%M%S')}.pdf"


class ExportArchiveReport:
    """
    Use Case: Export archive report as PDF

    Flow:
    1. Build the income/expense report (ARCHIVE_NOT_FOUND if the batch is empty)
    2. Load the frozen entries of the batch
    3. Render them with the PDF service
    4. Return the PDF base64 encoded
    """

    def __init__(
        self,
        entry_repo: CashbookEntryRepository,
        pdf_service: PdfService,
        business_name: str = "Printing House",
    ):
        self.entry_repo = entry_repo
        self.pdf_service = pdf_service
        self.business_name = business_name

    async def execute(self, label: str, archived_at: datetime) -> Result[ArchiveReportPdfDTO]:
        report_result = await GetArchiveReport(self.entry_repo).execute(label, archived_at)
        if report_result.is_err():
            return report_result

        report = report_result.value

        try:
            entries = await self.entry_repo.get_archived_entries(label, report.archived_at)
            pdf_bytes = self.pdf_service.generate_archive_report(
                report,
                [CashbookEntryDTO.from_entry(entry) for entry in entries],
                business_name=self.business_name,
            )
        except Exception as e:
            logger.error(f"Failed to render archive report '{label}': {e}")
            return Return.err(
                Error(
                    code="PDF_GENERATION_FAILED",
                    message="Failed to generate archive report PDF",
                    reason=str(e),
                )
            )

        return Return.ok(
            ArchiveReportPdfDTO(
                label=label,
                archived_at=report.archived_at,
                filename=report_filename(label, report.archived_at),
                pdf_base64=base64.b64encode(pdf_bytes).decode("ascii"),
            )
        )
