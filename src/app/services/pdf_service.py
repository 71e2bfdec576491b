"""Report Rendering Interface

Archive reports are rendered to PDF bytes behind this contract.
"""

from abc import ABC, abstractmethod
from typing import List
from src.app.use_cases.cashbook.dtos import ArchiveReportDTO, CashbookEntryDTO


class PdfService(ABC):
    """
    Service interface for PDF generation

    Provides printable closing reports for archive batches.
    """

    @abstractmethod
    def generate_archive_report(
        self,
        report: ArchiveReportDTO,
        entries: List[CashbookEntryDTO],
        business_name: str = "Printing House",
    ) -> bytes:
        """
        Generate an archive report PDF

        Args:
            report: Income/expense figures of the batch
            entries: Entries of the batch in calculation order
            business_name: Name printed in the report header

        Returns:
            PDF document as bytes
        """
        pass
