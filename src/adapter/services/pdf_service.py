"""Archive report rendering with ReportLab

Lays out one closed period on A4: header, summary, categories, entries.
"""

from io import BytesIO
from typing import List
from decimal import Decimal

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.app.use_cases.cashbook.dtos import ArchiveReportDTO, CashbookEntryDTO


def money(amount: Decimal) -> str:
    return f"{amount:,.2f}"


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Renders the closing report of an archive batch: summary figures,
    category breakdown and the frozen entry list.
    """

    def generate_archive_report(
        self,
        report: ArchiveReportDTO,
        entries: List[CashbookEntryDTO],
        business_name: str = "Printing House",
    ) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=15 * mm,
            leftMargin=15 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Cashbook report - {report.label}",
        )

        styles = getSampleStyleSheet()
        elements = []

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=6,
            textColor=colors.HexColor("#2C3E50"),
        )
        subtitle_style = ParagraphStyle(
            "SubtitleStyle",
            parent=styles["Heading2"],
            fontSize=13,
            textColor=colors.HexColor("#2980B9"),
            spaceAfter=12,
        )
        section_style = ParagraphStyle(
            "SectionStyle",
            parent=styles["Normal"],
            fontSize=11,
            fontName="Helvetica-Bold",
            spaceAfter=4,
        )
        cell_style = ParagraphStyle(
            "CellStyle",
            parent=styles["Normal"],
            fontSize=8,
            leading=10,
        )

        # Header
        elements.append(Paragraph(business_name, title_style))
        elements.append(Paragraph(f"CASHBOOK REPORT - {report.label}", subtitle_style))

        period_info = [
            ["Period:", f"{report.start_date.isoformat()} to {report.end_date.isoformat()}"],
            ["Archived:", report.archived_at.strftime("%Y-%m-%d %H:%M:%S UTC")],
            ["Entries:", str(report.entry_count)],
            ["Generated:", report.generated_at.strftime("%Y-%m-%d %H:%M:%S UTC")],
        ]
        period_table = Table(period_info, colWidths=[30 * mm, 110 * mm])
        period_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(period_table)
        elements.append(Spacer(1, 8 * mm))

        # Summary
        elements.append(Paragraph("Summary", section_style))
        summary_data = [
            ["Total income", money(report.total_income)],
            ["Total expenses", money(report.total_expenses)],
            ["Net profit", money(report.net_profit)],
            ["Profit margin", f"{report.profit_margin}%"],
        ]
        summary_table = Table(summary_data, colWidths=[60 * mm, 50 * mm])
        summary_table.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                    ("FONTNAME", (0, 2), (-1, 2), "Helvetica-Bold"),
                    ("LINEABOVE", (0, 2), (-1, 2), 1, colors.HexColor("#2C3E50")),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                ]
            )
        )
        elements.append(summary_table)
        elements.append(Spacer(1, 8 * mm))

        # Category breakdown
        if report.category_breakdown:
            elements.append(Paragraph("By category", section_style))
            category_data = [["Category", "Amount", "Share"]]
            for item in report.category_breakdown:
                category_data.append(
                    [item.category.replace("_", " ").title(), money(item.amount), f"{item.percentage}%"]
                )
            category_table = Table(category_data, colWidths=[60 * mm, 50 * mm, 25 * mm])
            category_table.setStyle(self._grid_style())
            elements.append(category_table)
            elements.append(Spacer(1, 8 * mm))

        # Entries
        elements.append(Paragraph("Entries", section_style))
        entry_data = [["#", "Date", "Category", "Purpose", "Debit", "Credit", "Balance"]]
        for entry in entries:
            entry_data.append(
                [
                    str(entry.sequence_position),
                    entry.occurred_on.isoformat(),
                    entry.category.replace("_", " "),
                    Paragraph(entry.purpose or "-", cell_style),
                    money(entry.debit_amount) if entry.debit_amount else "",
                    money(entry.credit_amount) if entry.credit_amount else "",
                    money(entry.values.get("cash_balance", Decimal("0"))),
                ]
            )
        entry_table = Table(
            entry_data,
            colWidths=[10 * mm, 20 * mm, 28 * mm, 52 * mm, 24 * mm, 24 * mm, 26 * mm],
            repeatRows=1,
        )
        entry_table.setStyle(self._grid_style(font_size=8))
        elements.append(entry_table)

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes

    @staticmethod
    def _grid_style(font_size: int = 9) -> TableStyle:
        return TableStyle(
            [
                # Header row
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                # Data rows
                ("FONTSIZE", (0, 0), (-1, -1), font_size),
                ("ALIGN", (-3, 1), (-1, -1), "RIGHT"),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                (
                    "ROWBACKGROUNDS",
                    (0, 1),
                    (-1, -1),
                    [colors.white, colors.HexColor("#F8F9F9")],
                ),
            ]
        )
