"""Unit tests for ReportLabPdfService"""

from datetime import date, datetime
from decimal import Decimal

from src.adapter.services.pdf_service import ReportLabPdfService, money
from src.app.use_cases.cashbook.dtos import (
    ArchiveReportDTO,
    CashbookEntryDTO,
    CategoryBreakdownDTO,
)


def make_report(**overrides) -> ArchiveReportDTO:
    fields = dict(
        label="January 2024",
        archived_at=datetime(2024, 2, 1, 10, 0, 0),
        start_date=date(2024, 1, 3),
        end_date=date(2024, 1, 28),
        total_income=Decimal("1000000"),
        total_expenses=Decimal("200000"),
        net_profit=Decimal("800000"),
        profit_margin=Decimal("80.00"),
        category_breakdown=[
            CategoryBreakdownDTO(category="revenue", amount=Decimal("1000000"), percentage=Decimal("83.33")),
            CategoryBreakdownDTO(
                category="operating_expense", amount=Decimal("200000"), percentage=Decimal("16.67")
            ),
        ],
        entry_count=2,
        generated_at=datetime(2024, 2, 2, 9, 0, 0),
    )
    fields.update(overrides)
    return ArchiveReportDTO(**fields)


def make_entry_dto(entry_id: str, position: int, **kwargs) -> CashbookEntryDTO:
    fields = dict(
        id=entry_id,
        occurred_on=date(2024, 1, 3),
        recorded_at=datetime(2024, 1, 3, 8, 0, 0),
        sequence_position=position,
        category="revenue",
        debit_amount=Decimal("0"),
        credit_amount=Decimal("0"),
        purpose="",
        values={"cash_balance": Decimal("0")},
    )
    fields.update(kwargs)
    return CashbookEntryDTO(**fields)


class TestReportLabPdfService:
    def test_renders_pdf(self):
        entries = [
            make_entry_dto("e1", 1, debit_amount=Decimal("1000000"), purpose="Flyer order",
                           values={"cash_balance": Decimal("1000000")}),
            make_entry_dto("e2", 2, category="operating_expense", credit_amount=Decimal("200000"),
                           purpose="Electricity", values={"cash_balance": Decimal("800000")}),
        ]

        pdf = ReportLabPdfService().generate_archive_report(make_report(), entries)

        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 1000

    def test_renders_without_breakdown(self):
        pdf = ReportLabPdfService().generate_archive_report(
            make_report(category_breakdown=[], entry_count=0), [], business_name="Corner Print"
        )

        assert pdf.startswith(b"%PDF")


def test_money_format():
    assert money(Decimal("1234567.5")) == "1,234,567.50"
