"""Payment Repository Interface"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, List, Sequence
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """
    Repository interface for Payment persistence

    Payments are append-only: there is no update or delete.
    """

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def get_by_bill_id(self, bill_id: int) -> List[Payment]:
        """Payments for a bill, oldest first"""
        pass

    @abstractmethod
    async def total_paid(self, bill_id: int) -> Decimal:
        """
        Sum of amount_paid for a bill

        Returns:
            Decimal sum, Decimal("0") when the bill has no payments
        """
        pass

    @abstractmethod
    async def totals_by_bill(self, bill_ids: Sequence[int]) -> Dict[int, Decimal]:
        """
        Sum of payments per bill

        Bills without payments are absent from the mapping.
        """
        pass
