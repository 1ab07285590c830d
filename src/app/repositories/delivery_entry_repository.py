"""Delivery Entry Repository Interface

Defines the contract for the delivery ledger.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple
from src.domain.delivery_entry import DeliveryEntry


class DeliveryEntryRepository(ABC):
    """
    Repository interface for DeliveryEntry persistence

    The ledger stores whatever total it is given; consistency between the
    morning/evening split and the total is the caller's concern.
    """

    @abstractmethod
    async def get(self, customer_id: int, delivery_date: date) -> Optional[DeliveryEntry]:
        """Retrieve the entry for one customer on one date"""
        pass

    @abstractmethod
    async def upsert(
        self,
        customer_id: int,
        delivery_date: date,
        total_liters: Decimal,
        morning_liters: Optional[Decimal] = None,
        evening_liters: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> DeliveryEntry:
        """
        Create or replace the entry for (customer_id, delivery_date)

        Returns:
            The stored DeliveryEntry
        """
        pass

    @abstractmethod
    async def delete(self, customer_id: int, delivery_date: date) -> int:
        """
        Delete the entry for (customer_id, delivery_date)

        Returns:
            Number of rows deleted (0 or 1)
        """
        pass

    @abstractmethod
    async def sum_total_liters(
        self, customer_id: int, period_start: date, period_end: date
    ) -> Decimal:
        """
        Sum of total_liters for a customer in [period_start, period_end]

        Returns:
            Decimal sum, Decimal("0") when there are no entries
        """
        pass

    @abstractmethod
    async def get_for_period(
        self, customer_id: int, period_start: date, period_end: date
    ) -> List[DeliveryEntry]:
        """Entries for a customer in the inclusive range, ordered by date"""
        pass

    @abstractmethod
    async def get_by_date(self, delivery_date: date) -> List[DeliveryEntry]:
        pass

    @abstractmethod
    async def daily_summary(self, delivery_date: date) -> Tuple[Decimal, int]:
        """
        Totals for one day

        Returns:
            (total liters, number of customers with an entry)
        """
        pass

    @abstractmethod
    async def sum_for_range(self, start: date, end: date) -> Decimal:
        """Liters delivered to all customers in the inclusive range"""
        pass

    @abstractmethod
    async def recent_for_customer(self, customer_id: int, limit: int = 30) -> List[DeliveryEntry]:
        """Latest entries of a customer, newest first"""
        pass
