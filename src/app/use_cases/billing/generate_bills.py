"""GenerateBills Use Case

Aggregates daily deliveries over a period into one bill per customer.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.delivery_entry_repository import DeliveryEntryRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.settings_repository import SettingsRepository
from src.app.services.invoice_number_allocator import InvoiceNumberAllocator
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.settings.get_settings import load_settings
from src.domain.bill import Bill, BillStatus, status_after_payments
from src.domain.exceptions import (
    ConflictError,
    InvoiceNumberExhaustedError,
    StorageUnavailableError,
)
from src.domain.pricing import compute_total_amount, resolve_rate
from .dtos import (
    BillResponseDTO,
    CustomerBillOutcomeDTO,
    GenerateBillsCommandDTO,
    GenerateBillsResponseDTO,
)

logger = logging.getLogger(__name__)


class GenerateBills:
    """
    Use Case: Generate bills for a period

    Business Rules:
    1. Period is inclusive and period_end >= period_start
    2. Customers with zero liters in the period get no bill
    3. Rate = customer override, else global rate from settings
    4. total_amount = round(liters * rate, 2) half-up
    5. Regeneration keeps the invoice number, recalculates amounts and
       recomputes status from existing payments
    6. Each customer is committed on its own; one failure does not undo or
       stop the others

    Flow (per customer):
    1. Sum delivered liters in the period (skip if 0)
    2. Compute amount from the resolved rate
    3. Update the existing bill, or allocate a number and insert a new one
    4. Commit; on a uniqueness conflict roll back and retry the customer
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        delivery_repo: DeliveryEntryRepository,
        bill_repo: BillRepository,
        payment_repo: PaymentRepository,
        settings_repo: SettingsRepository,
        allocator: InvoiceNumberAllocator,
        insert_attempts: int = 3,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.delivery_repo = delivery_repo
        self.bill_repo = bill_repo
        self.payment_repo = payment_repo
        self.settings_repo = settings_repo
        self.allocator = allocator
        self.insert_attempts = insert_attempts

    async def execute(self, command: GenerateBillsCommandDTO) -> Result[GenerateBillsResponseDTO]:
        """
        Execute bill generation

        Args:
            command: GenerateBillsCommandDTO with period and optional customer_id

        Returns:
            Result[GenerateBillsResponseDTO]: bills plus a per-customer outcome
            list, or an error when the run could not start
        """
        if command.period_end < command.period_start:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Invalid period: period_end is before period_start",
                    reason=f"period_start={command.period_start}, period_end={command.period_end}",
                )
            )

        try:
            settings = await load_settings(self.settings_repo)
            customers = await self.customer_repo.get_active(command.customer_id)

            if command.customer_id is not None and not customers:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Active customer with ID {command.customer_id} not found",
                        reason="Customer does not exist or is inactive",
                    )
                )

            # Plain values only: a per-customer rollback expires loaded rows
            plan = [(customer.id, resolve_rate(customer, settings)) for customer in customers]

        except StorageUnavailableError as e:
            await self.uow.rollback()
            return Return.err(
                Error(code="STORAGE_UNAVAILABLE", message="Database unavailable", reason=str(e))
            )
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="GENERATE_BILLS_FAILED",
                    message="Failed to start bill generation",
                    reason=str(e),
                )
            )

        response = GenerateBillsResponseDTO(
            period_start=command.period_start,
            period_end=command.period_end,
        )

        for customer_id, rate in plan:
            bill, outcome = await self._generate_for_customer(
                customer_id, rate, command.period_start, command.period_end
            )
            response.results.append(outcome)
            if bill is not None:
                response.bills.append(bill)
                response.generated_count += 1
            elif outcome.skipped:
                response.skipped_count += 1
            else:
                response.failed_count += 1

        logger.info(
            f"Bill generation {command.period_start} to {command.period_end}: "
            f"{response.generated_count} generated, {response.skipped_count} skipped, "
            f"{response.failed_count} failed"
        )

        return Return.ok(response)

    async def _generate_for_customer(
        self, customer_id: int, rate: Decimal, period_start: date, period_end: date
    ) -> tuple[Optional[BillResponseDTO], CustomerBillOutcomeDTO]:
        last_conflict: Optional[ConflictError] = None

        for attempt in range(1, self.insert_attempts + 1):
            try:
                bill = await self._bill_customer(customer_id, rate, period_start, period_end)

                if bill is None:
                    return None, CustomerBillOutcomeDTO(
                        customer_id=customer_id, success=True, skipped=True
                    )

                return bill, CustomerBillOutcomeDTO(
                    customer_id=customer_id,
                    success=True,
                    bill_id=bill.bill_id,
                    invoice_number=bill.invoice_number,
                )

            except InvoiceNumberExhaustedError as e:
                await self.uow.rollback()
                logger.error(f"Invoice numbers exhausted for customer {customer_id}: {e}")
                return None, self._failure(customer_id, "INVOICE_NUMBER_CONFLICT", str(e))

            except ConflictError as e:
                await self.uow.rollback()
                last_conflict = e
                logger.warning(
                    f"Conflict writing bill for customer {customer_id} "
                    f"(attempt {attempt}/{self.insert_attempts}): {e}"
                )

            except StorageUnavailableError as e:
                await self.uow.rollback()
                logger.error(f"Storage unavailable while billing customer {customer_id}: {e}")
                return None, self._failure(customer_id, "STORAGE_UNAVAILABLE", str(e))

            except Exception as e:
                await self.uow.rollback()
                logger.error(f"Failed to generate bill for customer {customer_id}: {e}")
                return None, self._failure(customer_id, "BILL_GENERATION_FAILED", str(e))

        logger.error(
            f"Giving up on customer {customer_id} after {self.insert_attempts} "
            f"conflicting inserts: {last_conflict}"
        )
        return None, self._failure(customer_id, "INVOICE_NUMBER_CONFLICT", str(last_conflict))

    async def _bill_customer(
        self, customer_id: int, rate: Decimal, period_start: date, period_end: date
    ) -> Optional[BillResponseDTO]:
        total_liters = await self.delivery_repo.sum_total_liters(
            customer_id, period_start, period_end
        )
        if total_liters == 0:
            return None

        total_amount = compute_total_amount(total_liters, rate)

        existing = await self.bill_repo.get_for_period(customer_id, period_start, period_end)

        if existing is not None:
            total_paid = await self.payment_repo.total_paid(existing.id)
            existing.total_liters = total_liters
            existing.price_per_liter = rate
            existing.total_amount = total_amount
            existing.status = status_after_payments(total_paid, total_amount, existing.status)
            bill = await self.bill_repo.update(existing)
        else:
            total_paid = Decimal("0")
            invoice_number = await self.allocator.allocate(period_start)
            bill = await self.bill_repo.create(
                Bill(
                    customer_id=customer_id,
                    period_start=period_start,
                    period_end=period_end,
                    total_liters=total_liters,
                    price_per_liter=rate,
                    total_amount=total_amount,
                    invoice_number=invoice_number,
                    status=BillStatus.GENERATED,
                )
            )

        await self.uow.commit()
        return BillResponseDTO.from_bill(bill, total_paid)

    @staticmethod
    def _failure(customer_id: int, code: str, message: str) -> CustomerBillOutcomeDTO:
        return CustomerBillOutcomeDTO(
            customer_id=customer_id,
            success=False,
            error_code=code,
            error=message,
        )
