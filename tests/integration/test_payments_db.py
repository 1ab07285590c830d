"""Integration tests for RecordPayment and bill status transitions"""

import pytest
from datetime import date
from decimal import Decimal

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.bill_repository import SqlAlchemyBillRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.billing.dtos import GenerateBillsCommandDTO, RecordPaymentCommandDTO
from src.app.use_cases.billing.record_payment import RecordPayment
from src.domain.bill import BillStatus
from tests.integration.helpers import add_customer, add_deliveries, generate_bills_use_case

JANUARY = GenerateBillsCommandDTO(period_start=date(2024, 1, 1), period_end=date(2024, 1, 31))


def record_payment_use_case(session: AsyncSession) -> RecordPayment:
    return RecordPayment(
        uow=SqlAlchemyUnitOfWork(session),
        bill_repo=SqlAlchemyBillRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
    )


async def bill_for_1000(session: AsyncSession):
    customer = await add_customer(session, "Hari", price_per_liter=Decimal("50.00"))
    await add_deliveries(session, customer.id, date(2024, 1, 1), 20, Decimal("1"))
    result = await generate_bills_use_case(session).execute(JANUARY)
    return result.value.bills[0]


def payment(bill_id: int, amount: str) -> RecordPaymentCommandDTO:
    return RecordPaymentCommandDTO(
        bill_id=bill_id, amount_paid=Decimal(amount), paid_on=date(2024, 2, 5)
    )


@pytest.mark.asyncio
class TestRecordPaymentIntegration:
    async def test_partial_then_full_payment(self, db_session: AsyncSession):
        """
        Given: A 1000.00 bill
        When: 400 then 600 are paid
        Then: PARTIALLY_PAID with 600 due, then PAID with nothing due
        """
        bill = await bill_for_1000(db_session)
        assert bill.total_amount == Decimal("1000.00")

        first = await record_payment_use_case(db_session).execute(payment(bill.bill_id, "400"))
        assert first.is_ok()
        assert first.value.status == "PARTIALLY_PAID"
        assert first.value.balance_due == Decimal("600")

        second = await record_payment_use_case(db_session).execute(payment(bill.bill_id, "600"))
        assert second.value.status == "PAID"
        assert second.value.total_paid == Decimal("1000")
        assert second.value.balance_due == Decimal("0")
        assert len(second.value.payments) == 2

    async def test_overpayment_leaves_negative_balance(self, db_session: AsyncSession):
        bill = await bill_for_1000(db_session)

        result = await record_payment_use_case(db_session).execute(payment(bill.bill_id, "1200"))

        assert result.value.status == "PAID"
        assert result.value.balance_due == Decimal("-200")

    async def test_regeneration_after_payment_recomputes_status(self, db_session: AsyncSession):
        """
        Given: A 1000.00 bill fully paid
        When: More deliveries arrive and the month is regenerated
        Then: The bill drops back to PARTIALLY_PAID against the new total
        """
        bill = await bill_for_1000(db_session)
        await record_payment_use_case(db_session).execute(payment(bill.bill_id, "1000"))

        customer_id = bill.customer_id
        await add_deliveries(db_session, customer_id, date(2024, 1, 25), 2, Decimal("1"))
        result = await generate_bills_use_case(db_session).execute(JANUARY)

        regenerated = result.value.bills[0]
        assert regenerated.total_amount == Decimal("1100.00")
        assert regenerated.status == "PARTIALLY_PAID"
        assert regenerated.balance_due == Decimal("100.00")

    async def test_payment_for_unknown_bill(self, db_session: AsyncSession):
        result = await record_payment_use_case(db_session).execute(payment(999, "10"))

        assert result.is_err()
        assert result.error.code == "BILL_NOT_FOUND"

    async def test_sub_cent_payment_is_refused(self, db_session: AsyncSession):
        """
        Given: A 1000.00 bill in GENERATED status
        When: 0.004 is paid, which the amount column would store as 0.00
        Then: VALIDATION_ERROR, no payment row, the bill stays GENERATED
        """
        bill = await bill_for_1000(db_session)

        result = await record_payment_use_case(db_session).execute(payment(bill.bill_id, "0.004"))

        assert result.is_err()
        assert result.error.code == "VALIDATION_ERROR"
        assert await SqlAlchemyPaymentRepository(db_session).get_by_bill_id(bill.bill_id) == []
        stored = await SqlAlchemyBillRepository(db_session).get_by_id(bill.bill_id)
        assert stored.status == BillStatus.GENERATED
