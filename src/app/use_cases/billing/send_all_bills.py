"""SendAllBills Use Case

Sends every unsettled bill of a period, one at a time.
"""

import logging
from datetime import date
from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.domain.bill import BillStatus
from .dtos import SendAllBillsResponseDTO, SendResultDTO
from .send_bill import SendBill

logger = logging.getLogger(__name__)

SENDABLE_STATUSES = (BillStatus.GENERATED, BillStatus.PARTIALLY_PAID)


class SendAllBills:
    """
    Use Case: Bulk send bills for a period

    Business Rules:
    1. Bills in GENERATED or PARTIALLY_PAID status are sent
    2. One bill's failure does not stop the others
    3. Every bill gets its own entry in the result list
    """

    def __init__(self, bill_repo: BillRepository, send_bill: SendBill):
        self.bill_repo = bill_repo
        self.send_bill = send_bill

    async def execute(self, period_start: date, period_end: date) -> Result[SendAllBillsResponseDTO]:
        try:
            bills = await self.bill_repo.list_for_period(
                period_start, period_end, statuses=SENDABLE_STATUSES
            )
            targets = [(bill.id, bill.invoice_number) for bill in bills]
        except Exception as e:
            return Return.err(
                Error(
                    code="SEND_ALL_FAILED",
                    message="Failed to load bills for the period",
                    reason=str(e),
                )
            )

        response = SendAllBillsResponseDTO(period_start=period_start, period_end=period_end)

        for bill_id, invoice_number in targets:
            try:
                result = await self.send_bill.execute(bill_id)
            except Exception as e:
                logger.error(f"Unexpected error sending bill {bill_id}: {e}")
                result = Return.err(
                    Error(code="SEND_BILL_FAILED", message="Failed to send bill", reason=str(e))
                )

            if result.is_ok():
                response.sent_count += 1
                response.results.append(
                    SendResultDTO(
                        bill_id=bill_id,
                        invoice_number=invoice_number,
                        success=True,
                        message_id=result.value.message_id,
                    )
                )
            else:
                response.failed_count += 1
                response.results.append(
                    SendResultDTO(
                        bill_id=bill_id,
                        invoice_number=invoice_number,
                        success=False,
                        error_code=result.error.code,
                        error=result.error.reason or result.error.message,
                    )
                )

        logger.info(
            f"Send-all {period_start} to {period_end}: "
            f"{response.sent_count} sent, {response.failed_count} failed"
        )
        return Return.ok(response)
