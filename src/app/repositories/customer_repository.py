"""Customer Repository Interface

Defines the contract for customer persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
from src.domain.customer import Customer


class CustomerRepository(ABC):
    """
    Repository interface for Customer persistence
    """

    @abstractmethod
    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        """
        Retrieve customer by ID

        Args:
            customer_id: Customer ID

        Returns:
            Customer if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_active(self, customer_id: Optional[int] = None) -> List[Customer]:
        """
        Retrieve active customers, optionally narrowed to a single one

        Args:
            customer_id: If given, only this customer (when active)

        Returns:
            Active customers ordered by name
        """
        pass

    @abstractmethod
    async def list(
        self, active: Optional[bool] = None, search: Optional[str] = None
    ) -> List[Customer]:
        """
        List customers

        Args:
            active: Optional filter on is_active
            search: Optional case-insensitive match on name or phone number

        Returns:
            Customers ordered by name
        """
        pass

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def update(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def delete_cascade(self, customer_id: int) -> Dict[str, int]:
        """
        Delete a customer and everything that references it

        Order: payments -> bills -> deliveries -> customer, so no row is
        left orphaned regardless of the database's own cascade support.

        Args:
            customer_id: Customer ID

        Returns:
            Number of rows removed per table
            (keys: payments, bills, deliveries, customers)
        """
        pass

    @abstractmethod
    async def count_active(self) -> int:
        pass

    @abstractmethod
    async def get_stats(self, customer_ids: Sequence[int]) -> Dict[int, Dict[str, Any]]:
        """
        Lifetime totals per customer

        Returns:
            customer_id -> {total_liters, delivery_days, total_billed, total_paid};
            every requested id is present, zero-filled when it has no rows
        """
        pass
