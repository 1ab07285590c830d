"""SQLAlchemy Payment Repository Implementation"""

from decimal import Decimal
from typing import Dict, List, Sequence
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.payment import Payment
from src.domain.pricing import to_decimal
from .errors import translate_storage_errors


class SqlAlchemyPaymentRepository(PaymentRepository):
    """
    SQLAlchemy implementation of PaymentRepository

    Append-only: payments are created and read, never changed.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_storage_errors
    async def create(self, payment: Payment) -> Payment:
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    @translate_storage_errors
    async def get_by_bill_id(self, bill_id: int) -> List[Payment]:
        statement = (
            select(Payment)
            .where(Payment.bill_id == bill_id)
            .order_by(Payment.paid_on, Payment.id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    @translate_storage_errors
    async def total_paid(self, bill_id: int) -> Decimal:
        statement = (
            select(func.coalesce(func.sum(Payment.amount_paid), 0))
            .where(Payment.bill_id == bill_id)
        )
        result = await self.session.execute(statement)
        return to_decimal(result.scalar_one())

    @translate_storage_errors
    async def totals_by_bill(self, bill_ids: Sequence[int]) -> Dict[int, Decimal]:
        if not bill_ids:
            return {}

        statement = (
            select(Payment.bill_id, func.sum(Payment.amount_paid))
            .where(Payment.bill_id.in_(list(bill_ids)))
            .group_by(Payment.bill_id)
        )
        result = await self.session.execute(statement)
        return {bill_id: to_decimal(total) for bill_id, total in result.all()}
