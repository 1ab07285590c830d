"""SQLAlchemy Bill Repository Implementation

Implements bill persistence using SQLAlchemy async session.
"""

from typing import List, Optional, Sequence
from datetime import date, datetime
from sqlalchemy.exc import IntegrityError
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.bill_repository import BillRepository
from src.domain.bill import Bill, BillStatus
from src.domain.exceptions import ConflictError
from src.domain.invoice_number import year_prefix
from .errors import translate_storage_errors


class SqlAlchemyBillRepository(BillRepository):
    """
    SQLAlchemy implementation of BillRepository

    Features:
    - Unique invoice_number and (customer_id, period) constraints surface
      as ConflictError so callers can retry with a fresh number
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_storage_errors
    async def create(self, bill: Bill) -> Bill:
        """
        Create a new bill

        Args:
            bill: Bill entity to persist

        Returns:
            Created Bill with generated ID

        Raises:
            ConflictError: If invoice_number or (customer, period) already exists.
                The session must be rolled back before further use.
        """
        self.session.add(bill)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(
                f"Bill {bill.invoice_number} for customer {bill.customer_id} "
                f"conflicts with an existing bill"
            ) from e
        await self.session.refresh(bill)
        return bill

    @translate_storage_errors
    async def get_by_id(self, bill_id: int) -> Optional[Bill]:
        statement = select(Bill).where(Bill.id == bill_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def get_for_period(
        self, customer_id: int, period_start: date, period_end: date
    ) -> Optional[Bill]:
        statement = (
            select(Bill)
            .where(Bill.customer_id == customer_id)
            .where(Bill.period_start == period_start)
            .where(Bill.period_end == period_end)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def list_for_period(
        self,
        period_start: date,
        period_end: date,
        statuses: Optional[Sequence[BillStatus]] = None,
    ) -> List[Bill]:
        statement = (
            select(Bill)
            .where(Bill.period_start == period_start)
            .where(Bill.period_end == period_end)
        )

        if statuses:
            statement = statement.where(Bill.status.in_(list(statuses)))

        statement = statement.order_by(Bill.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    @translate_storage_errors
    async def update(self, bill: Bill) -> Bill:
        bill.updated_at = datetime.utcnow()
        self.session.add(bill)
        await self.session.flush()
        await self.session.refresh(bill)
        return bill

    @translate_storage_errors
    async def list_invoice_numbers(self, year: int) -> List[str]:
        statement = select(Bill.invoice_number).where(
            Bill.invoice_number.like(f"{year_prefix(year)}%")
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    @translate_storage_errors
    async def invoice_number_exists(self, invoice_number: str) -> bool:
        statement = (
            select(func.count())
            .select_from(Bill)
            .where(Bill.invoice_number == invoice_number)
        )
        result = await self.session.execute(statement)
        count = result.scalar_one()
        return count > 0

    @translate_storage_errors
    async def get_by_whatsapp_message_id(self, message_id: str) -> Optional[Bill]:
        statement = select(Bill).where(Bill.whatsapp_message_id == message_id)
        result = await self.session.execute(statement)
        return result.scalars().first()

    @translate_storage_errors
    async def list_by_statuses(self, statuses: Sequence[BillStatus]) -> List[Bill]:
        statement = (
            select(Bill)
            .where(Bill.status.in_(list(statuses)))
            .order_by(Bill.created_at.desc(), Bill.id.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    @translate_storage_errors
    async def list_for_customer(self, customer_id: int, limit: int = 12) -> List[Bill]:
        statement = (
            select(Bill)
            .where(Bill.customer_id == customer_id)
            .order_by(Bill.period_start.desc(), Bill.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
