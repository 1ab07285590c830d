"""Bill Repository Interface

Defines the contract for bill persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Sequence
from src.domain.bill import Bill, BillStatus


class BillRepository(ABC):
    """
    Repository interface for Bill persistence

    Provides access to bill data for generation, payment and delivery.
    """

    @abstractmethod
    async def create(self, bill: Bill) -> Bill:
        """
        Create a new bill

        Args:
            bill: Bill entity to persist

        Returns:
            Created Bill with generated ID

        Raises:
            ConflictError: invoice number or (customer, period) already taken
        """
        pass

    @abstractmethod
    async def get_by_id(self, bill_id: int) -> Optional[Bill]:
        """
        Retrieve bill by ID

        Args:
            bill_id: Bill ID

        Returns:
            Bill if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_for_period(
        self, customer_id: int, period_start: date, period_end: date
    ) -> Optional[Bill]:
        """
        Retrieve the bill for (customer, period_start, period_end)

        Returns:
            Bill if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_for_period(
        self,
        period_start: date,
        period_end: date,
        statuses: Optional[Sequence[BillStatus]] = None,
    ) -> List[Bill]:
        """
        Bills whose period matches exactly

        Args:
            period_start: Period start
            period_end: Period end
            statuses: Optional status filter

        Returns:
            Bills ordered by ID
        """
        pass

    @abstractmethod
    async def update(self, bill: Bill) -> Bill:
        """
        Update an existing bill

        Args:
            bill: Bill entity with updated values

        Returns:
            Updated Bill
        """
        pass

    @abstractmethod
    async def list_invoice_numbers(self, year: int) -> List[str]:
        """
        All invoice numbers issued for a year

        Args:
            year: Calendar year taken from the period start

        Returns:
            Invoice numbers starting with INV-{year}-
        """
        pass

    @abstractmethod
    async def invoice_number_exists(self, invoice_number: str) -> bool:
        pass

    @abstractmethod
    async def get_by_whatsapp_message_id(self, message_id: str) -> Optional[Bill]:
        pass

    @abstractmethod
    async def list_by_statuses(self, statuses: Sequence[BillStatus]) -> List[Bill]:
        """
        Bills in any of the given statuses, across all periods

        Returns:
            Bills ordered newest first
        """
        pass

    @abstractmethod
    async def list_for_customer(self, customer_id: int, limit: int = 12) -> List[Bill]:
        """Latest bills of a customer, most recent period first"""
        pass
