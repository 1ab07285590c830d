"""MarkBillSent Use Case

Stores the messaging provider's confirmation on a bill.
"""

from datetime import datetime
from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.bill import BillStatus
from .dtos import BillResponseDTO


class MarkBillSent:
    """
    Use Case: Mark a bill as delivered to the customer

    Business Rules:
    1. Bill must exist
    2. message id and sent_at are always stored
    3. GENERATED becomes SENT; PARTIALLY_PAID and PAID keep their status
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

    async def execute(self, bill_id: int, message_id: str) -> Result[BillResponseDTO]:
        try:
            bill = await self.bill_repo.get_by_id(bill_id)

            if not bill:
                return Return.err(
                    Error(
                        code="BILL_NOT_FOUND",
                        message=f"Bill with ID {bill_id} not found",
                        reason="Bill does not exist",
                    )
                )

            bill.whatsapp_message_id = message_id
            bill.sent_at = datetime.utcnow()
            if bill.status in (BillStatus.GENERATED, BillStatus.SENT):
                bill.status = BillStatus.SENT

            bill = await self.bill_repo.update(bill)
            total_paid = await self.payment_repo.total_paid(bill.id)
            await self.uow.commit()

            return Return.ok(BillResponseDTO.from_bill(bill, total_paid))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="MARK_SENT_FAILED",
                    message="Failed to mark bill as sent",
                    reason=str(e),
                )
            )
