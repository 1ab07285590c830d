from .unit_of_work import UnitOfWork
from .messaging_service import MessagingService
from .pdf_service import PdfService
from .invoice_number_allocator import InvoiceNumberAllocator

__all__ = [
    "UnitOfWork",
    "MessagingService",
    "PdfService",
    "InvoiceNumberAllocator",
]
