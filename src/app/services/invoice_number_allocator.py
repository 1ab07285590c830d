"""Invoice Number Allocator

Produces INV-{year}-{month}-{seq} numbers with a sequence shared by the
whole year.
"""

import logging
from datetime import date
from src.app.repositories.bill_repository import BillRepository
from src.domain.exceptions import InvoiceNumberExhaustedError
from src.domain.invoice_number import format_invoice_number, max_sequence

logger = logging.getLogger(__name__)


class InvoiceNumberAllocator:
    """
    Allocates the next free invoice number for a period

    Algorithm:
    1. Scan every invoice number issued in the period's year
    2. Propose max(sequence) + 1
    3. Re-check the candidate; while it is taken, increment and re-check

    The scan-then-check window is not atomic. The bills.invoice_number
    unique constraint is the final guard: a colliding insert raises
    ConflictError and the caller allocates again.
    """

    def __init__(self, bill_repo: BillRepository, max_attempts: int = 100):
        self.bill_repo = bill_repo
        self.max_attempts = max_attempts

    async def allocate(self, period_start: date) -> str:
        """
        Allocate an invoice number for a new bill

        Args:
            period_start: Period start; supplies year and month

        Returns:
            A number not present in the store at check time

        Raises:
            InvoiceNumberExhaustedError: no free number within max_attempts
            StorageUnavailableError: store could not be queried
        """
        existing = await self.bill_repo.list_invoice_numbers(period_start.year)
        sequence = max_sequence(existing) + 1

        for _ in range(self.max_attempts):
            candidate = format_invoice_number(period_start, sequence)
            if not await self.bill_repo.invoice_number_exists(candidate):
                return candidate
            logger.warning(f"Invoice number {candidate} taken during allocation, trying next")
            sequence += 1

        logger.error(
            f"Invoice number allocation exhausted for {period_start.year} "
            f"after {self.max_attempts} attempts (last tried sequence {sequence - 1})"
        )
        raise InvoiceNumberExhaustedError(
            f"No free invoice number for {period_start.year} after {self.max_attempts} attempts"
        )
