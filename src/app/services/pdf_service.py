"""PDF Generation Service Interface

Defines the contract for invoice rendering.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.bill import Bill
from src.domain.customer import Customer
from src.domain.delivery_entry import DeliveryEntry
from src.domain.settings import Settings


class PdfService(ABC):
    """
    Service interface for PDF generation

    The billing use cases treat the output as opaque bytes.
    """

    @abstractmethod
    def generate_invoice(
        self,
        bill: Bill,
        customer: Customer,
        entries: List[DeliveryEntry],
        settings: Settings,
    ) -> bytes:
        """
        Generate an invoice PDF

        Args:
            bill: Bill with amounts and invoice number
            customer: Billed customer
            entries: Daily deliveries in the bill's period
            settings: Farm identity printed on the header

        Returns:
            PDF document as bytes
        """
        pass
