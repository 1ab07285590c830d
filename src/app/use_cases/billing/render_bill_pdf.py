"""RenderBillPdf Use Case

Produces the invoice document for download.
"""

import base64
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.delivery_entry_repository import DeliveryEntryRepository
from src.app.repositories.settings_repository import SettingsRepository
from src.app.services.pdf_service import PdfService
from src.app.use_cases.settings.get_settings import load_settings
from .dtos import BillPdfDTO


class RenderBillPdf:
    """
    Use Case: Render a bill as PDF

    Flow:
    1. Retrieve bill and customer
    2. Retrieve deliveries in the bill's period and farm settings
    3. Render with the PDF service
    4. Return PDF as base64
    """

    def __init__(
        self,
        bill_repo: BillRepository,
        customer_repo: CustomerRepository,
        delivery_repo: DeliveryEntryRepository,
        settings_repo: SettingsRepository,
        pdf_service: PdfService,
    ):
        self.bill_repo = bill_repo
        self.customer_repo = customer_repo
        self.delivery_repo = delivery_repo
        self.settings_repo = settings_repo
        self.pdf_service = pdf_service

    async def execute(self, bill_id: int) -> Result[BillPdfDTO]:
        try:
            bill = await self.bill_repo.get_by_id(bill_id)

            if not bill:
                return Return.err(
                    Error(
                        code="BILL_NOT_FOUND",
                        message=f"Bill with ID {bill_id} not found",
                        reason="Bill does not exist",
                    )
                )

            customer = await self.customer_repo.get_by_id(bill.customer_id)
            if not customer:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer with ID {bill.customer_id} not found",
                        reason="Bill references a missing customer",
                    )
                )

            entries = await self.delivery_repo.get_for_period(
                bill.customer_id, bill.period_start, bill.period_end
            )
            settings = await load_settings(self.settings_repo)

            pdf_bytes = self.pdf_service.generate_invoice(
                bill=bill,
                customer=customer,
                entries=entries,
                settings=settings,
            )

            return Return.ok(
                BillPdfDTO(
                    bill_id=bill.id,
                    invoice_number=bill.invoice_number,
                    file_name=f"{bill.invoice_number}.pdf",
                    pdf_base64=base64.b64encode(pdf_bytes).decode("utf-8"),
                    generated_at=datetime.utcnow(),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="RENDER_PDF_FAILED",
                    message="Failed to render bill PDF",
                    reason=str(e),
                )
            )
