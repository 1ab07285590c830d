"""RecordPayment Use Case

Appends a payment to a bill and derives the bill's settlement status.
"""

import logging
from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.bill import status_after_payments
from src.domain.exceptions import StorageUnavailableError
from src.domain.payment import Payment
from src.domain.pricing import fits_cents
from .dtos import RecordPaymentCommandDTO, BillResponseDTO

logger = logging.getLogger(__name__)


class RecordPayment:
    """
    Use Case: Record a payment against a bill

    Business Rules:
    1. amount_paid must be > 0 and a whole number of cents
    2. Bill must exist
    3. Payments are append-only
    4. status = PAID when total paid >= total_amount, else PARTIALLY_PAID
    5. Overpayment is accepted and stored; status stays PAID and the
       response shows a negative balance_due

    Flow:
    1. Validate amount
    2. Load bill
    3. Insert payment
    4. Sum all payments and update status
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        bill_repo: BillRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.bill_repo = bill_repo
        self.payment_repo = payment_repo

    async def execute(self, command: RecordPaymentCommandDTO) -> Result[BillResponseDTO]:
        """
        Execute payment recording

        Args:
            command: RecordPaymentCommandDTO with bill_id, amount_paid, paid_on

        Returns:
            Result[BillResponseDTO]: updated bill with payments, or error
        """
        if command.amount_paid <= 0 or not fits_cents(command.amount_paid):
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Payment amount must be greater than 0 with at most 2 decimal places",
                    reason=f"amount_paid={command.amount_paid}",
                )
            )

        try:
            bill = await self.bill_repo.get_by_id(command.bill_id)

            if not bill:
                return Return.err(
                    Error(
                        code="BILL_NOT_FOUND",
                        message=f"Bill with ID {command.bill_id} not found",
                        reason="Bill does not exist",
                    )
                )

            await self.payment_repo.create(
                Payment(
                    bill_id=bill.id,
                    amount_paid=command.amount_paid,
                    paid_on=command.paid_on,
                    note=command.note,
                )
            )

            total_paid = await self.payment_repo.total_paid(bill.id)
            bill.status = status_after_payments(total_paid, bill.total_amount, bill.status)
            bill = await self.bill_repo.update(bill)
            payments = await self.payment_repo.get_by_bill_id(bill.id)

            await self.uow.commit()

            if total_paid > bill.total_amount:
                logger.warning(
                    f"Bill {bill.invoice_number} overpaid: paid {total_paid}, "
                    f"billed {bill.total_amount}"
                )

            return Return.ok(BillResponseDTO.from_bill(bill, total_paid, payments))

        except StorageUnavailableError as e:
            await self.uow.rollback()
            return Return.err(
                Error(code="STORAGE_UNAVAILABLE", message="Database unavailable", reason=str(e))
            )
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="RECORD_PAYMENT_FAILED",
                    message="Failed to record payment",
                    reason=str(e),
                )
            )
