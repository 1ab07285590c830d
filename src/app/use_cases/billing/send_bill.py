"""SendBill Use Case

Renders a bill and delivers it to the customer over WhatsApp.
"""

import logging
from typing import Callable
from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.delivery_entry_repository import DeliveryEntryRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.settings_repository import SettingsRepository
from src.app.services.messaging_service import MessagingService
from src.app.services.pdf_service import PdfService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.settings.get_settings import load_settings
from src.domain.bill import Bill
from src.domain.exceptions import (
    MessageDeliveryError,
    MessagingNotConfiguredError,
    PdfRenderError,
)
from src.domain.settings import Settings
from .dtos import SendBillResponseDTO
from .mark_bill_sent import MarkBillSent

logger = logging.getLogger(__name__)


def build_caption(bill: Bill, settings: Settings, currency_symbol: str = "Rs.") -> str:
    month = bill.period_start.strftime("%B %Y")
    return (
        f"Milk bill for {month}\n"
        f"From: {settings.farm_name}\n"
        f"Total: {currency_symbol}{bill.total_amount:.2f}\n"
        f"Invoice: {bill.invoice_number}"
    )


class SendBill:
    """
    Use Case: Send one bill to its customer

    Business Rules:
    1. Bill and customer must exist
    2. WhatsApp credentials must be configured in settings
    3. The provider is called once; no retries here
    4. On success the bill is marked SENT with the provider message id

    Flow:
    1. Load bill, customer, settings, period deliveries
    2. Render PDF
    3. Send document with caption
    4. Mark bill sent
    """

    def __init__(
        self,
        uow: UnitOfWork,
        bill_repo: BillRepository,
        customer_repo: CustomerRepository,
        delivery_repo: DeliveryEntryRepository,
        payment_repo: PaymentRepository,
        settings_repo: SettingsRepository,
        pdf_service: PdfService,
        messaging_factory: Callable[[Settings], MessagingService],
        currency_symbol: str = "Rs.",
    ):
        self.uow = uow
        self.bill_repo = bill_repo
        self.customer_repo = customer_repo
        self.delivery_repo = delivery_repo
        self.payment_repo = payment_repo
        self.settings_repo = settings_repo
        self.pdf_service = pdf_service
        self.messaging_factory = messaging_factory
        self.currency_symbol = currency_symbol
        self.mark_sent = MarkBillSent(uow, bill_repo, payment_repo)

    async def execute(self, bill_id: int) -> Result[SendBillResponseDTO]:
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

            settings = await load_settings(self.settings_repo)
            messaging = self.messaging_factory(settings)

            entries = await self.delivery_repo.get_for_period(
                bill.customer_id, bill.period_start, bill.period_end
            )
            document = self.pdf_service.generate_invoice(bill, customer, entries, settings)
            invoice_number = bill.invoice_number

            message_id = await messaging.send_document(
                phone_number=customer.phone_number,
                document=document,
                file_name=f"{invoice_number}.pdf",
                caption=build_caption(bill, settings, self.currency_symbol),
            )

        except MessagingNotConfiguredError as e:
            await self.uow.rollback()
            return Return.err(
                Error(code="MESSAGING_NOT_CONFIGURED", message=str(e), reason="Missing credentials")
            )
        except MessageDeliveryError as e:
            await self.uow.rollback()
            logger.error(f"Delivery failed for bill {bill_id}: {e}")
            return Return.err(
                Error(code="DELIVERY_FAILED", message="Failed to deliver bill", reason=str(e))
            )
        except PdfRenderError as e:
            await self.uow.rollback()
            return Return.err(
                Error(code="RENDER_PDF_FAILED", message="Failed to render bill PDF", reason=str(e))
            )
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Unexpected error sending bill {bill_id}: {e}")
            return Return.err(
                Error(code="SEND_BILL_FAILED", message="Failed to send bill", reason=str(e))
            )

        marked = await self.mark_sent.execute(bill_id, message_id)
        if marked.is_err():
            logger.error(
                f"Bill {invoice_number} delivered as {message_id} but could not be marked sent: "
                f"{marked.error.reason}"
            )
            return marked

        logger.info(f"Sent bill {invoice_number} (message {message_id})")
        return Return.ok(
            SendBillResponseDTO(
                bill_id=bill_id,
                invoice_number=invoice_number,
                message_id=message_id,
                status=marked.value.status,
                sent_at=marked.value.sent_at,
            )
        )
