"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Sequence
from pydantic import BaseModel, Field
from src.domain.bill import Bill
from src.domain.payment import Payment


class GenerateBillsCommandDTO(BaseModel):
    """
    Command DTO for generating bills over a period

    Used as input to GenerateBills use case. The period is inclusive.
    """

    period_start: date = Field(
        ...,
        description="First day of the billing period (inclusive)"
    )

    period_end: date = Field(
        ...,
        description="Last day of the billing period (inclusive)"
    )

    customer_id: Optional[int] = Field(
        default=None,
        description="Bill a single customer (defaults to all active customers)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "period_start": "2024-01-01",
                "period_end": "2024-01-31",
                "customer_id": None
            }
        }


class PaymentDTO(BaseModel):
    payment_id: int
    bill_id: int
    amount_paid: Decimal
    paid_on: date
    note: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_payment(cls, payment: Payment) -> "PaymentDTO":
        return cls(
            payment_id=payment.id,
            bill_id=payment.bill_id,
            amount_paid=payment.amount_paid,
            paid_on=payment.paid_on,
            note=payment.note,
            created_at=payment.created_at,
        )


class BillResponseDTO(BaseModel):
    """
    Response DTO for a bill

    Returned by GenerateBills, RecordPayment, MarkBillSent, GetBill.
    balance_due is negative when the bill is overpaid.
    """

    bill_id: int = Field(..., description="Bill ID")
    customer_id: int = Field(..., description="Customer ID")
    invoice_number: str = Field(..., description="Invoice number (INV-YYYY-MM-NNN)")
    period_start: date = Field(..., description="Period start (inclusive)")
    period_end: date = Field(..., description="Period end (inclusive)")
    total_liters: Decimal = Field(..., description="Liters delivered in the period")
    price_per_liter: Decimal = Field(..., description="Rate applied")
    total_amount: Decimal = Field(..., description="Amount billed")
    status: str = Field(..., description="GENERATED, SENT, PARTIALLY_PAID or PAID")
    total_paid: Decimal = Field(default=Decimal("0"), description="Sum of payments")
    balance_due: Decimal = Field(..., description="total_amount - total_paid")
    whatsapp_message_id: Optional[str] = Field(default=None)
    sent_at: Optional[datetime] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    created_at: datetime = Field(..., description="Bill creation timestamp")
    payments: List[PaymentDTO] = Field(default_factory=list)

    @classmethod
    def from_bill(
        cls,
        bill: Bill,
        total_paid: Decimal = Decimal("0"),
        payments: Sequence[Payment] = (),
    ) -> "BillResponseDTO":
        return cls(
            bill_id=bill.id,
            customer_id=bill.customer_id,
            invoice_number=bill.invoice_number,
            period_start=bill.period_start,
            period_end=bill.period_end,
            total_liters=bill.total_liters,
            price_per_liter=bill.price_per_liter,
            total_amount=bill.total_amount,
            status=bill.status.value,
            total_paid=total_paid,
            balance_due=bill.total_amount - total_paid,
            whatsapp_message_id=bill.whatsapp_message_id,
            sent_at=bill.sent_at,
            notes=bill.notes,
            created_at=bill.created_at,
            payments=[PaymentDTO.from_payment(p) for p in payments],
        )

    class Config:
        json_schema_extra = {
            "example": {
                "bill_id": 1,
                "customer_id": 7,
                "invoice_number": "INV-2024-01-001",
                "period_start": "2024-01-01",
                "period_end": "2024-01-31",
                "total_liters": "12.50",
                "price_per_liter": "60.00",
                "total_amount": "750.00",
                "status": "PARTIALLY_PAID",
                "total_paid": "400.00",
                "balance_due": "350.00",
                "created_at": "2024-02-01T00:00:00Z",
                "payments": []
            }
        }


class CustomerBillOutcomeDTO(BaseModel):
    """Per-customer outcome of a generation run"""

    customer_id: int
    success: bool
    skipped: bool = Field(default=False, description="True when no liters were delivered")
    bill_id: Optional[int] = None
    invoice_number: Optional[str] = None
    error_code: Optional[str] = None
    error: Optional[str] = None


class GenerateBillsResponseDTO(BaseModel):
    """
    Response DTO for GenerateBills

    bills lists every bill created or regenerated; results has one entry
    per customer considered, including skipped and failed ones.
    """

    period_start: date
    period_end: date
    bills: List[BillResponseDTO] = Field(default_factory=list)
    results: List[CustomerBillOutcomeDTO] = Field(default_factory=list)
    generated_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0


class RecordPaymentCommandDTO(BaseModel):
    """
    Command DTO for recording a payment

    amount_paid is validated by the use case so a non-positive or sub-cent
    value comes back as a VALIDATION_ERROR result.
    """

    bill_id: int = Field(..., description="Bill being paid")
    amount_paid: Decimal = Field(..., description="Amount received (> 0, at most 2 decimal places)")
    paid_on: date = Field(..., description="Date the payment was received")
    note: Optional[str] = Field(default=None, description="Optional note (e.g., 'UPI')")

    class Config:
        json_schema_extra = {
            "example": {
                "bill_id": 1,
                "amount_paid": "400.00",
                "paid_on": "2024-02-05",
                "note": "Cash"
            }
        }


class CreateManualBillCommandDTO(BaseModel):
    """Command DTO for a bill entered by hand instead of from deliveries"""

    customer_id: int
    period_start: date
    period_end: date
    total_liters: Decimal
    price_per_liter: Decimal
    notes: Optional[str] = None


class SendBillResponseDTO(BaseModel):
    bill_id: int
    invoice_number: str
    message_id: str
    status: str
    sent_at: datetime


class SendResultDTO(BaseModel):
    """Outcome of sending one bill in a bulk send"""

    bill_id: int
    invoice_number: Optional[str] = None
    success: bool
    message_id: Optional[str] = None
    error_code: Optional[str] = None
    error: Optional[str] = None


class SendAllBillsResponseDTO(BaseModel):
    period_start: date
    period_end: date
    results: List[SendResultDTO] = Field(default_factory=list)
    sent_count: int = 0
    failed_count: int = 0


class BillPdfDTO(BaseModel):
    """Rendered invoice document"""

    bill_id: int
    invoice_number: str
    file_name: str
    pdf_base64: str
    generated_at: datetime


class DeliveryReceiptResponseDTO(BaseModel):
    message_id: str
    bill_id: Optional[int] = None
    updated: bool = False


class MonthlyBillingResultDTO(BaseModel):
    """
    Summary of a monthly billing job run

    Send counts stay at zero when the run did not send bills.
    """

    period_start: date
    period_end: date
    generated_count: int = 0
    skipped_count: int = 0
    failed_count: int = 0
    sent_count: int = 0
    send_failed_count: int = 0
    execution_time_ms: int = 0
    error: Optional[str] = None


class PeriodBillRowDTO(BaseModel):
    """One customer's line on the period overview; bill is None when not yet billed"""

    customer_id: int
    customer_name: str
    phone_number: str
    is_active: bool
    bill: Optional[BillResponseDTO] = None


class PeriodBillsResponseDTO(BaseModel):
    period_start: date
    period_end: date
    rows: List[PeriodBillRowDTO] = Field(default_factory=list)
    billed_count: int = 0
    unbilled_count: int = 0
    total_amount: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")
    total_due: Decimal = Decimal("0")


class PendingBillDTO(BillResponseDTO):
    """An unsettled bill with the customer it belongs to"""

    customer_name: Optional[str] = None
    phone_number: Optional[str] = None


class DashboardStatsDTO(BaseModel):
    """
    Figures for the home screen

    Revenue is liters times the farm-wide rate, an estimate that ignores
    per-customer overrides. pending_amount is the outstanding balance of
    every GENERATED, SENT or PARTIALLY_PAID bill.
    """

    today: date
    today_liters: Decimal = Decimal("0")
    today_customers: int = 0
    today_revenue: Decimal = Decimal("0")
    month_start: date
    month_liters: Decimal = Decimal("0")
    month_revenue: Decimal = Decimal("0")
    active_customers: int = 0
    pending_bills: int = 0
    pending_amount: Decimal = Decimal("0")
