"""Billing API Routes

FastAPI routes for bill generation, payments, PDFs and WhatsApp sending.
"""

import base64
from datetime import date
from typing import Callable, List

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.schemas.billing_request import (
    GenerateBillsRequestSchema,
    ManualBillRequestSchema,
    RecordPaymentRequestSchema,
    SendAllBillsRequestSchema,
)
from src.app.services.invoice_number_allocator import InvoiceNumberAllocator
from src.app.services.messaging_service import MessagingService
from src.app.services.pdf_service import PdfService
from src.app.use_cases.billing.dtos import (
    BillResponseDTO,
    CreateManualBillCommandDTO,
    GenerateBillsCommandDTO,
    GenerateBillsResponseDTO,
    PendingBillDTO,
    PeriodBillsResponseDTO,
    RecordPaymentCommandDTO,
    SendAllBillsResponseDTO,
    SendBillResponseDTO,
)
from src.app.use_cases.billing.create_manual_bill import CreateManualBill
from src.app.use_cases.billing.generate_bills import GenerateBills
from src.app.use_cases.billing.get_bill import GetBill
from src.app.use_cases.billing.list_bills import ListBillsForPeriod, ListPendingBills
from src.app.use_cases.billing.record_payment import RecordPayment
from src.app.use_cases.billing.render_bill_pdf import RenderBillPdf
from src.app.use_cases.billing.send_all_bills import SendAllBills
from src.app.use_cases.billing.send_bill import SendBill
from src.adapter.repositories.bill_repository import SqlAlchemyBillRepository
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.delivery_entry_repository import SqlAlchemyDeliveryEntryRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.settings_repository import SqlAlchemySettingsRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_messaging_factory, get_pdf_service, get_session
from src.api.error import ClientError
from src.domain.settings import Settings

router = APIRouter(prefix="/billing/bills", tags=["Billing"])


def _error_example(code: str, message: str) -> dict:
    return {
        "content": {
            "application/json": {
                "example": {"error": {"code": code, "message": message}}
            }
        }
    }


def _send_bill_use_case(
    session: AsyncSession,
    pdf_service: PdfService,
    messaging_factory: Callable[[Settings], MessagingService],
) -> SendBill:
    return SendBill(
        uow=SqlAlchemyUnitOfWork(session),
        bill_repo=SqlAlchemyBillRepository(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        delivery_repo=SqlAlchemyDeliveryEntryRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        settings_repo=SqlAlchemySettingsRepository(session),
        pdf_service=pdf_service,
        messaging_factory=messaging_factory,
        currency_symbol=ApplicationConfig.CURRENCY_SYMBOL,
    )


@router.post(
    "/generate",
    response_model=GenerateBillsResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Invalid period", **_error_example("VALIDATION_ERROR", "Invalid request parameters")},
        404: {"description": "Customer not found", **_error_example("CUSTOMER_NOT_FOUND", "Active customer with ID 7 not found")},
        503: {"description": "Database unavailable", **_error_example("STORAGE_UNAVAILABLE", "Database unavailable")},
    }
)
async def generate_bills(
    request: GenerateBillsRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Generate bills for a period.

    Sums each active customer's deliveries in the inclusive period and
    writes one bill per customer. Running it again for the same period
    recalculates the bills in place and keeps their invoice numbers.
    Customers with no deliveries are skipped. A failure for one customer
    is reported in `results` and does not affect the others.

    **Example request:**
    ```json
    {"period_start": "2024-01-01", "period_end": "2024-01-31"}
    ```

    **Returns:**
    - 200: Run finished; see `results` for per-customer outcomes
    - 400: Invalid period
    - 404: Requested customer not found or inactive
    """
    bill_repo = SqlAlchemyBillRepository(session)
    use_case = GenerateBills(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        delivery_repo=SqlAlchemyDeliveryEntryRepository(session),
        bill_repo=bill_repo,
        payment_repo=SqlAlchemyPaymentRepository(session),
        settings_repo=SqlAlchemySettingsRepository(session),
        allocator=InvoiceNumberAllocator(
            bill_repo, max_attempts=ApplicationConfig.INVOICE_ALLOCATION_MAX_ATTEMPTS
        ),
        insert_attempts=ApplicationConfig.BILL_INSERT_ATTEMPTS,
    )

    result = await use_case.execute(
        GenerateBillsCommandDTO(
            period_start=request.period_start,
            period_end=request.period_end,
            customer_id=request.customer_id,
        )
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/manual",
    response_model=BillResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"description": "Customer not found", **_error_example("CUSTOMER_NOT_FOUND", "Customer with ID 7 not found")},
        409: {"description": "Bill exists for the period", **_error_example("BILL_ALREADY_EXISTS", "Bill INV-2024-01-001 already exists for this period")},
    }
)
async def create_manual_bill(
    request: ManualBillRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Create a bill from liters and rate entered by hand.

    **Returns:**
    - 201: Bill created with a new invoice number
    - 404: Customer not found
    - 409: A bill already exists for this customer and period
    """
    bill_repo = SqlAlchemyBillRepository(session)
    use_case = CreateManualBill(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        bill_repo=bill_repo,
        allocator=InvoiceNumberAllocator(
            bill_repo, max_attempts=ApplicationConfig.INVOICE_ALLOCATION_MAX_ATTEMPTS
        ),
    )

    result = await use_case.execute(
        CreateManualBillCommandDTO(
            customer_id=request.customer_id,
            period_start=request.period_start,
            period_end=request.period_end,
            total_liters=request.total_liters,
            price_per_liter=request.price_per_liter,
            notes=request.notes,
        )
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/send-all",
    response_model=SendAllBillsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def send_all_bills(
    request: SendAllBillsRequestSchema,
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    messaging_factory: Callable[[Settings], MessagingService] = Depends(get_messaging_factory),
):
    """
    Send every unpaid bill of a period over WhatsApp.

    Bills in GENERATED or PARTIALLY_PAID status are sent one at a time.
    Each bill has its own entry in `results`; one failure does not stop
    the rest.
    """
    use_case = SendAllBills(
        bill_repo=SqlAlchemyBillRepository(session),
        send_bill=_send_bill_use_case(session, pdf_service, messaging_factory),
    )

    result = await use_case.execute(request.period_start, request.period_end)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "",
    response_model=PeriodBillsResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Invalid period", **_error_example("VALIDATION_ERROR", "period_end must not be before period_start")},
    }
)
async def list_bills_for_period(
    period_start: date = Query(..., description="First day of the period"),
    period_end: date = Query(..., description="Last day of the period"),
    session: AsyncSession = Depends(get_session)
):
    """
    Billing overview for a period.

    One row per customer ordered by name. Active customers not yet billed
    appear with `bill` set to null; bills of deactivated customers are
    still listed.
    """
    use_case = ListBillsForPeriod(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyBillRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(period_start, period_end)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/pending", response_model=List[PendingBillDTO], status_code=status.HTTP_200_OK)
async def list_pending_bills(session: AsyncSession = Depends(get_session)):
    """Unsettled bills (GENERATED, SENT, PARTIALLY_PAID), newest first."""
    use_case = ListPendingBills(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyBillRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute()

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{bill_id}",
    response_model=BillResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {"description": "Bill not found", **_error_example("BILL_NOT_FOUND", "Bill with ID 123 not found")},
    }
)
async def get_bill(
    bill_id: int,
    session: AsyncSession = Depends(get_session)
):
    """
    Get a bill with its payments, amount paid and balance due.

    **Returns:**
    - 200: Bill found
    - 404: Bill not found
    """
    use_case = GetBill(SqlAlchemyBillRepository(session), SqlAlchemyPaymentRepository(session))
    result = await use_case.execute(bill_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post(
    "/{bill_id}/payments",
    response_model=BillResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Invalid amount", **_error_example("VALIDATION_ERROR", "Payment amount must be greater than 0 with at most 2 decimal places")},
        404: {"description": "Bill not found", **_error_example("BILL_NOT_FOUND", "Bill with ID 123 not found")},
    }
)
async def record_payment(
    bill_id: int,
    request: RecordPaymentRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Record a payment against a bill.

    The bill becomes PAID once payments reach the billed amount and
    PARTIALLY_PAID before that. Payments above the amount are accepted;
    `balance_due` is then negative.

    **Example request:**
    ```json
    {"amount_paid": "400.00", "paid_on": "2024-02-05", "note": "Cash"}
    ```

    **Returns:**
    - 200: Payment recorded, updated bill returned
    - 400: Amount is not positive or has more than 2 decimal places
    - 404: Bill not found
    """
    use_case = RecordPayment(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyBillRepository(session),
        SqlAlchemyPaymentRepository(session),
    )

    result = await use_case.execute(
        RecordPaymentCommandDTO(
            bill_id=bill_id,
            amount_paid=request.amount_paid,
            paid_on=request.paid_on or date.today(),
            note=request.note,
        )
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get(
    "/{bill_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: {"description": "Bill not found", **_error_example("BILL_NOT_FOUND", "Bill with ID 123 not found")},
    }
)
async def download_bill_pdf(
    bill_id: int,
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
):
    """
    Download a bill as a PDF file.

    **Returns:**
    - 200: PDF file as binary response
    - 404: Bill not found
    """
    use_case = RenderBillPdf(
        SqlAlchemyBillRepository(session),
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyDeliveryEntryRepository(session),
        SqlAlchemySettingsRepository(session),
        pdf_service,
    )
    result = await use_case.execute(bill_id)

    if result.is_err():
        raise ClientError(result.error)

    return Response(
        content=base64.b64decode(result.value.pdf_base64),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={result.value.file_name}"
        }
    )


@router.post(
    "/{bill_id}/send",
    response_model=SendBillResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "WhatsApp not configured", **_error_example("MESSAGING_NOT_CONFIGURED", "WhatsApp is not configured")},
        404: {"description": "Bill not found", **_error_example("BILL_NOT_FOUND", "Bill with ID 123 not found")},
        502: {"description": "WhatsApp delivery failed", **_error_example("DELIVERY_FAILED", "Failed to deliver bill")},
    }
)
async def send_bill(
    bill_id: int,
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service),
    messaging_factory: Callable[[Settings], MessagingService] = Depends(get_messaging_factory),
):
    """
    Send a bill PDF to the customer over WhatsApp.

    On success the bill is marked SENT and the WhatsApp message id is
    stored. Bills that already have payments keep their payment status.

    **Returns:**
    - 200: Sent
    - 400: WhatsApp credentials missing in settings
    - 404: Bill not found
    - 502: The WhatsApp gateway rejected or failed the request
    """
    use_case = _send_bill_use_case(session, pdf_service, messaging_factory)
    result = await use_case.execute(bill_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
