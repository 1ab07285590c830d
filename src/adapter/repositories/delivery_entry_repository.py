"""SQLAlchemy Delivery Entry Repository Implementation

Implements the delivery ledger using SQLAlchemy async session.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple
from sqlalchemy import delete
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.delivery_entry_repository import DeliveryEntryRepository
from src.domain.delivery_entry import DeliveryEntry
from src.domain.pricing import to_decimal
from .errors import translate_storage_errors


class SqlAlchemyDeliveryEntryRepository(DeliveryEntryRepository):
    """
    SQLAlchemy implementation of DeliveryEntryRepository

    Features:
    - Upsert keyed on (customer_id, delivery_date)
    - Aggregate sum over an inclusive date range
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_storage_errors
    async def get(self, customer_id: int, delivery_date: date) -> Optional[DeliveryEntry]:
        statement = (
            select(DeliveryEntry)
            .where(DeliveryEntry.customer_id == customer_id)
            .where(DeliveryEntry.delivery_date == delivery_date)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def upsert(
        self,
        customer_id: int,
        delivery_date: date,
        total_liters: Decimal,
        morning_liters: Optional[Decimal] = None,
        evening_liters: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> DeliveryEntry:
        """
        Create or replace the entry for (customer_id, delivery_date)

        Args:
            customer_id: Customer ID
            delivery_date: Delivery date
            total_liters: Total liters for the day
            morning_liters: Optional morning split
            evening_liters: Optional evening split
            notes: Optional free-text note

        Returns:
            The stored DeliveryEntry
        """
        entry = await self.get(customer_id, delivery_date)

        if entry is None:
            entry = DeliveryEntry(
                customer_id=customer_id,
                delivery_date=delivery_date,
            )

        entry.total_liters = total_liters
        entry.morning_liters = morning_liters
        entry.evening_liters = evening_liters
        entry.notes = notes
        entry.updated_at = datetime.utcnow()

        self.session.add(entry)
        await self.session.flush()
        await self.session.refresh(entry)
        return entry

    @translate_storage_errors
    async def delete(self, customer_id: int, delivery_date: date) -> int:
        statement = (
            delete(DeliveryEntry)
            .where(DeliveryEntry.customer_id == customer_id)
            .where(DeliveryEntry.delivery_date == delivery_date)
        )
        result = await self.session.execute(statement)
        return result.rowcount

    @translate_storage_errors
    async def sum_total_liters(
        self, customer_id: int, period_start: date, period_end: date
    ) -> Decimal:
        statement = (
            select(func.coalesce(func.sum(DeliveryEntry.total_liters), 0))
            .where(DeliveryEntry.customer_id == customer_id)
            .where(DeliveryEntry.delivery_date >= period_start)
            .where(DeliveryEntry.delivery_date <= period_end)
        )
        result = await self.session.execute(statement)
        return to_decimal(result.scalar_one())

    @translate_storage_errors
    async def get_for_period(
        self, customer_id: int, period_start: date, period_end: date
    ) -> List[DeliveryEntry]:
        statement = (
            select(DeliveryEntry)
            .where(DeliveryEntry.customer_id == customer_id)
            .where(DeliveryEntry.delivery_date >= period_start)
            .where(DeliveryEntry.delivery_date <= period_end)
            .order_by(DeliveryEntry.delivery_date)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    @translate_storage_errors
    async def get_by_date(self, delivery_date: date) -> List[DeliveryEntry]:
        statement = (
            select(DeliveryEntry)
            .where(DeliveryEntry.delivery_date == delivery_date)
            .order_by(DeliveryEntry.customer_id)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    @translate_storage_errors
    async def daily_summary(self, delivery_date: date) -> Tuple[Decimal, int]:
        statement = (
            select(
                func.coalesce(func.sum(DeliveryEntry.total_liters), 0),
                func.count(DeliveryEntry.id),
            )
            .where(DeliveryEntry.delivery_date == delivery_date)
        )
        result = await self.session.execute(statement)
        total, count = result.one()
        return to_decimal(total), count

    @translate_storage_errors
    async def sum_for_range(self, start: date, end: date) -> Decimal:
        statement = (
            select(func.coalesce(func.sum(DeliveryEntry.total_liters), 0))
            .where(DeliveryEntry.delivery_date >= start)
            .where(DeliveryEntry.delivery_date <= end)
        )
        result = await self.session.execute(statement)
        return to_decimal(result.scalar_one())

    @translate_storage_errors
    async def recent_for_customer(self, customer_id: int, limit: int = 30) -> List[DeliveryEntry]:
        statement = (
            select(DeliveryEntry)
            .where(DeliveryEntry.customer_id == customer_id)
            .order_by(DeliveryEntry.delivery_date.desc())
            .limit(limit)
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())
