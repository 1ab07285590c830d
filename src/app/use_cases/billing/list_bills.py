"""Read-side billing use cases: period overview and unsettled bills"""

from datetime import date
from decimal import Decimal
from typing import List
from libs.result import Result, Return, Error
from src.app.repositories.bill_repository import BillRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.bill import BillStatus
from src.domain.pricing import to_decimal
from .dtos import (
    BillResponseDTO,
    PendingBillDTO,
    PeriodBillRowDTO,
    PeriodBillsResponseDTO,
)

PENDING_STATUSES = (BillStatus.GENERATED, BillStatus.SENT, BillStatus.PARTIALLY_PAID)


class ListBillsForPeriod:
    """
    Use Case: Billing overview for one period

    Business Rules:
    1. Every bill whose period matches exactly is listed, even when its
       customer has since been deactivated
    2. Active customers without a bill get a row with bill = None
    3. Rows are ordered by customer name
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        bill_repo: BillRepository,
        payment_repo: PaymentRepository,
    ):
        self.customer_repo = customer_repo
        self.bill_repo = bill_repo
        self.payment_repo = payment_repo

    async def execute(self, period_start: date, period_end: date) -> Result[PeriodBillsResponseDTO]:
        if period_end < period_start:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="period_end must not be before period_start",
                    reason=f"{period_start} > {period_end}",
                )
            )

        try:
            customers = await self.customer_repo.list()
            bills = await self.bill_repo.list_for_period(period_start, period_end)
            paid = await self.payment_repo.totals_by_bill([b.id for b in bills])
            by_customer = {b.customer_id: b for b in bills}

            response = PeriodBillsResponseDTO(period_start=period_start, period_end=period_end)
            for customer in customers:
                bill = by_customer.get(customer.id)
                if bill is None and not customer.is_active:
                    continue

                row = PeriodBillRowDTO(
                    customer_id=customer.id,
                    customer_name=customer.name,
                    phone_number=customer.phone_number,
                    is_active=customer.is_active,
                )
                if bill is None:
                    response.unbilled_count += 1
                else:
                    row.bill = BillResponseDTO.from_bill(bill, to_decimal(paid.get(bill.id, 0)))
                    response.billed_count += 1
                    response.total_amount += row.bill.total_amount
                    response.total_paid += row.bill.total_paid
                response.rows.append(row)

            response.total_due = response.total_amount - response.total_paid
            return Return.ok(response)

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_BILLS_FAILED",
                    message="Failed to list bills for period",
                    reason=str(e),
                )
            )


class ListPendingBills:
    """
    Use Case: Bills still waiting for money

    GENERATED, SENT and PARTIALLY_PAID bills, newest first.
    """

    def __init__(
        self,
        customer_repo: CustomerRepository,
        bill_repo: BillRepository,
        payment_repo: PaymentRepository,
    ):
        self.customer_repo = customer_repo
        self.bill_repo = bill_repo
        self.payment_repo = payment_repo

    async def execute(self) -> Result[List[PendingBillDTO]]:
        try:
            bills = await self.bill_repo.list_by_statuses(PENDING_STATUSES)
            paid = await self.payment_repo.totals_by_bill([b.id for b in bills])
            customers = {c.id: c for c in await self.customer_repo.list()}

            pending = []
            for bill in bills:
                dto = PendingBillDTO.from_bill(bill, to_decimal(paid.get(bill.id, Decimal("0"))))
                customer = customers.get(bill.customer_id)
                if customer is not None:
                    dto.customer_name = customer.name
                    dto.phone_number = customer.phone_number
                pending.append(dto)

            return Return.ok(pending)

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_PENDING_BILLS_FAILED",
                    message="Failed to list pending bills",
                    reason=str(e),
                )
            )
