"""ApplyDeliveryReceipt Use Case

Handles WhatsApp delivery receipts reported through the provider webhook.
"""

from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.bill import BillStatus
from .dtos import DeliveryReceiptResponseDTO

CONFIRMED_STATUSES = {"delivered", "read"}


class ApplyDeliveryReceipt:
    """
    Use Case: Confirm delivery of a sent bill

    Business Rules:
    1. Only "delivered" and "read" receipts count
    2. Unknown message ids are ignored
    3. Only a GENERATED bill moves to SENT; payment states are kept
    """

    def __init__(self, uow: UnitOfWork, bill_repo: BillRepository):
        self.uow = uow
        self.bill_repo = bill_repo

    async def execute(self, message_id: str, status: str) -> Result[DeliveryReceiptResponseDTO]:
        response = DeliveryReceiptResponseDTO(message_id=message_id)

        if status.lower() not in CONFIRMED_STATUSES:
            return Return.ok(response)

        try:
            bill = await self.bill_repo.get_by_whatsapp_message_id(message_id)
            if not bill:
                return Return.ok(response)

            response.bill_id = bill.id
            if bill.status == BillStatus.GENERATED:
                bill.status = BillStatus.SENT
                await self.bill_repo.update(bill)
                await self.uow.commit()
                response.updated = True

            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELIVERY_RECEIPT_FAILED",
                    message="Failed to apply delivery receipt",
                    reason=str(e),
                )
            )
