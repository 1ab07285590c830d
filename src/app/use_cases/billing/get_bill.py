"""GetBill Use Case"""

from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.payment_repository import PaymentRepository
from .dtos import BillResponseDTO


class GetBill:
    """
    Use Case: Read a bill with its payment history
    """

    def __init__(self, bill_repo: BillRepository, payment_repo: PaymentRepository):
        self.bill_repo = bill_repo
        self.payment_repo = payment_repo

    async def execute(self, bill_id: int) -> Result[BillResponseDTO]:
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

            payments = await self.payment_repo.get_by_bill_id(bill_id)
            total_paid = sum((p.amount_paid for p in payments), Decimal("0"))

            return Return.ok(BillResponseDTO.from_bill(bill, total_paid, payments))

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_BILL_FAILED",
                    message="Failed to load bill",
                    reason=str(e),
                )
            )
