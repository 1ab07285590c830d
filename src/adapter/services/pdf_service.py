"""ReportLab PDF Generation Service Implementation

Renders milk bills using the ReportLab library.
"""

from decimal import Decimal
from io import BytesIO
from typing import List, Optional

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
from src.domain.bill import Bill
from src.domain.customer import Customer
from src.domain.delivery_entry import DeliveryEntry
from src.domain.exceptions import PdfRenderError
from src.domain.settings import Settings

HEADER_COLOR = colors.HexColor("#1F5F3F")
MUTED_COLOR = colors.HexColor("#7F8C8D")
GRID_COLOR = colors.HexColor("#BDC3C7")


def _liters(value: Optional[Decimal]) -> str:
    if value is None:
        return "-"
    return f"{value:.1f} L"


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Layout: farm header, invoice details, bill-to block, one row per
    delivery day, then liters x rate = total.
    """

    def __init__(self, currency_symbol: str = "Rs."):
        self.currency_symbol = currency_symbol

    def _money(self, value: Decimal) -> str:
        return f"{self.currency_symbol} {value:,.2f}"

    def generate_invoice(
        self,
        bill: Bill,
        customer: Customer,
        entries: List[DeliveryEntry],
        settings: Settings,
    ) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=bill.invoice_number,
        )

        styles = getSampleStyleSheet()
        elements = []

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=6,
            textColor=HEADER_COLOR,
        )
        label_style = ParagraphStyle(
            "LabelStyle",
            parent=styles["Heading2"],
            fontSize=14,
            spaceAfter=12,
        )
        muted_style = ParagraphStyle(
            "MutedStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=MUTED_COLOR,
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

        # Farm header
        elements.append(Paragraph(settings.farm_name, title_style))
        if settings.farm_address:
            elements.append(Paragraph(settings.farm_address, muted_style))
        if settings.farm_phone:
            elements.append(Paragraph(f"Phone: {settings.farm_phone}", muted_style))
        elements.append(Spacer(1, 8 * mm))
        elements.append(Paragraph("MILK BILL", label_style))

        invoice_info = [
            ["Invoice Number:", bill.invoice_number],
            [
                "Billing Period:",
                f"{bill.period_start.strftime('%d %b %Y')} to "
                f"{bill.period_end.strftime('%d %b %Y')}",
            ],
            ["Status:", bill.status.value.replace("_", " ").title()],
            ["Generated:", bill.created_at.strftime("%d %b %Y")],
        ]
        invoice_table = Table(invoice_info, colWidths=[40 * mm, 100 * mm])
        invoice_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), MUTED_COLOR),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(invoice_table)
        elements.append(Spacer(1, 8 * mm))

        # Customer
        elements.append(Paragraph("Bill To:", bold_style))
        elements.append(Paragraph(customer.name, normal_style))
        elements.append(Paragraph(customer.phone_number, normal_style))
        if customer.address:
            elements.append(Paragraph(customer.address, normal_style))
        elements.append(Spacer(1, 8 * mm))

        # Daily deliveries
        delivery_rows = [["Date", "Morning", "Evening", "Total"]]
        for entry in entries:
            delivery_rows.append(
                [
                    entry.delivery_date.strftime("%d %b %Y"),
                    _liters(entry.morning_liters),
                    _liters(entry.evening_liters),
                    _liters(entry.total_liters),
                ]
            )
        if len(delivery_rows) == 1:
            delivery_rows.append(["No daily entries recorded", "", "", _liters(bill.total_liters)])

        delivery_table = Table(
            delivery_rows, colWidths=[50 * mm, 35 * mm, 35 * mm, 40 * mm], repeatRows=1
        )
        delivery_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F4F9F6")],
                    ),
                ]
            )
        )
        elements.append(delivery_table)
        elements.append(Spacer(1, 6 * mm))

        summary = [
            ["Total Liters:", _liters(bill.total_liters)],
            ["Rate per Liter:", self._money(bill.price_per_liter)],
            ["Amount Due:", self._money(bill.total_amount)],
        ]
        summary_table = Table(summary, colWidths=[125 * mm, 35 * mm])
        summary_table.setStyle(
            TableStyle(
                [
                    ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("FONTNAME", (0, 2), (-1, 2), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 2), (-1, 2), 12),
                    ("LINEABOVE", (0, 2), (-1, 2), 1.2, HEADER_COLOR),
                    ("TOPPADDING", (0, 2), (-1, 2), 6),
                ]
            )
        )
        elements.append(summary_table)
        elements.append(Spacer(1, 12 * mm))
        elements.append(Paragraph("<i>Thank you for your business.</i>", muted_style))

        try:
            doc.build(elements)
        except Exception as e:
            raise PdfRenderError(f"Failed to render {bill.invoice_number}: {e}") from e

        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
