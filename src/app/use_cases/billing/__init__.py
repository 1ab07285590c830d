"""Billing domain use cases"""
from .generate_bills import GenerateBills
from .record_payment import RecordPayment
from .mark_bill_sent import MarkBillSent
from .get_bill import GetBill
from .create_manual_bill import CreateManualBill
from .render_bill_pdf import RenderBillPdf
from .send_bill import SendBill
from .send_all_bills import SendAllBills
from .apply_delivery_receipt import ApplyDeliveryReceipt
from .list_bills import ListBillsForPeriod, ListPendingBills
from .get_dashboard_stats import GetDashboardStats
from .dtos import (
    GenerateBillsCommandDTO,
    GenerateBillsResponseDTO,
    CustomerBillOutcomeDTO,
    BillResponseDTO,
    PaymentDTO,
    RecordPaymentCommandDTO,
    CreateManualBillCommandDTO,
    SendBillResponseDTO,
    SendResultDTO,
    SendAllBillsResponseDTO,
    BillPdfDTO,
    DeliveryReceiptResponseDTO,
    MonthlyBillingResultDTO,
    PeriodBillRowDTO,
    PeriodBillsResponseDTO,
    PendingBillDTO,
    DashboardStatsDTO,
)

__all__ = [
    "GenerateBills",
    "RecordPayment",
    "MarkBillSent",
    "GetBill",
    "CreateManualBill",
    "RenderBillPdf",
    "SendBill",
    "SendAllBills",
    "ApplyDeliveryReceipt",
    "ListBillsForPeriod",
    "ListPendingBills",
    "GetDashboardStats",
    "GenerateBillsCommandDTO",
    "GenerateBillsResponseDTO",
    "CustomerBillOutcomeDTO",
    "BillResponseDTO",
    "PaymentDTO",
    "RecordPaymentCommandDTO",
    "CreateManualBillCommandDTO",
    "SendBillResponseDTO",
    "SendResultDTO",
    "SendAllBillsResponseDTO",
    "BillPdfDTO",
    "DeliveryReceiptResponseDTO",
    "MonthlyBillingResultDTO",
    "PeriodBillRowDTO",
    "PeriodBillsResponseDTO",
    "PendingBillDTO",
    "DashboardStatsDTO",
]
