"""CreateManualBill Use Case

Creates a bill from liters and rate typed in by the operator, for
customers whose deliveries were not recorded day by day.
"""

from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.services.invoice_number_allocator import InvoiceNumberAllocator
from src.app.services.unit_of_work import UnitOfWork
from src.domain.bill import Bill, BillStatus
from src.domain.exceptions import ConflictError
from src.domain.pricing import compute_total_amount, fits_cents, quantize_money
from .dtos import CreateManualBillCommandDTO, BillResponseDTO


class CreateManualBill:
    """
    Use Case: Create a bill with explicit liters and rate

    Business Rules:
    1. total_liters > 0, price_per_liter > 0 (both to 2 decimal places),
       period_end >= period_start
    2. Customer must exist
    3. No existing bill for the same (customer, period)
    4. A new invoice number is allocated; status is GENERATED
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        bill_repo: BillRepository,
        allocator: InvoiceNumberAllocator,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.bill_repo = bill_repo
        self.allocator = allocator

    async def execute(self, command: CreateManualBillCommandDTO) -> Result[BillResponseDTO]:
        if (
            command.total_liters <= 0
            or command.price_per_liter <= 0
            or not fits_cents(command.total_liters)
            or not fits_cents(command.price_per_liter)
            or command.period_end < command.period_start
        ):
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Please provide a valid period, liters and rate",
                    reason=f"total_liters={command.total_liters}, "
                           f"price_per_liter={command.price_per_liter}, "
                           f"period={command.period_start}..{command.period_end}",
                )
            )

        try:
            customer = await self.customer_repo.get_by_id(command.customer_id)
            if not customer:
                return Return.err(
                    Error(
                        code="CUSTOMER_NOT_FOUND",
                        message=f"Customer with ID {command.customer_id} not found",
                        reason="Customer does not exist",
                    )
                )

            existing = await self.bill_repo.get_for_period(
                command.customer_id, command.period_start, command.period_end
            )
            if existing:
                return Return.err(
                    Error(
                        code="BILL_ALREADY_EXISTS",
                        message=f"Bill {existing.invoice_number} already exists for this period",
                        reason="Duplicate bill prevention",
                    )
                )

            rate = quantize_money(command.price_per_liter)
            invoice_number = await self.allocator.allocate(command.period_start)
            bill = await self.bill_repo.create(
                Bill(
                    customer_id=command.customer_id,
                    period_start=command.period_start,
                    period_end=command.period_end,
                    total_liters=command.total_liters,
                    price_per_liter=rate,
                    total_amount=compute_total_amount(command.total_liters, rate),
                    invoice_number=invoice_number,
                    status=BillStatus.GENERATED,
                    notes=command.notes,
                )
            )
            await self.uow.commit()

            return Return.ok(BillResponseDTO.from_bill(bill))

        except ConflictError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="INVOICE_NUMBER_CONFLICT",
                    message="Could not assign a unique invoice number, please retry",
                    reason=str(e),
                )
            )
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_MANUAL_BILL_FAILED",
                    message="Failed to create bill",
                    reason=str(e),
                )
            )
