"""SQLAlchemy Customer Repository Implementation"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy import delete, or_
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.bill import Bill
from src.domain.customer import Customer
from src.domain.delivery_entry import DeliveryEntry
from src.domain.payment import Payment
from src.domain.pricing import to_decimal
from .errors import translate_storage_errors


class SqlAlchemyCustomerRepository(CustomerRepository):
    """
    SQLAlchemy implementation of CustomerRepository
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @translate_storage_errors
    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        statement = select(Customer).where(Customer.id == customer_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def get_active(self, customer_id: Optional[int] = None) -> List[Customer]:
        statement = select(Customer).where(Customer.is_active == True)  # noqa: E712

        if customer_id is not None:
            statement = statement.where(Customer.id == customer_id)

        statement = statement.order_by(Customer.name, Customer.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    @translate_storage_errors
    async def list(
        self, active: Optional[bool] = None, search: Optional[str] = None
    ) -> List[Customer]:
        statement = select(Customer)

        if active is not None:
            statement = statement.where(Customer.is_active == active)

        if search:
            statement = statement.where(
                or_(
                    Customer.name.ilike(f"%{search}%"),
                    Customer.phone_number.contains(search),
                )
            )

        statement = statement.order_by(Customer.name, Customer.id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    @translate_storage_errors
    async def create(self, customer: Customer) -> Customer:
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    @translate_storage_errors
    async def update(self, customer: Customer) -> Customer:
        customer.updated_at = datetime.utcnow()
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    @translate_storage_errors
    async def delete_cascade(self, customer_id: int) -> Dict[str, int]:
        """
        Delete a customer and its payments, bills and deliveries

        Runs inside the caller's transaction; the caller commits.
        """
        bill_ids = select(Bill.id).where(Bill.customer_id == customer_id)

        payments = await self.session.execute(
            delete(Payment).where(Payment.bill_id.in_(bill_ids))
        )
        bills = await self.session.execute(
            delete(Bill).where(Bill.customer_id == customer_id)
        )
        deliveries = await self.session.execute(
            delete(DeliveryEntry).where(DeliveryEntry.customer_id == customer_id)
        )
        customers = await self.session.execute(
            delete(Customer).where(Customer.id == customer_id)
        )

        return {
            "payments": payments.rowcount,
            "bills": bills.rowcount,
            "deliveries": deliveries.rowcount,
            "customers": customers.rowcount,
        }

    @translate_storage_errors
    async def count_active(self) -> int:
        statement = (
            select(func.count())
            .select_from(Customer)
            .where(Customer.is_active == True)  # noqa: E712
        )
        result = await self.session.execute(statement)
        return result.scalar_one()

    @translate_storage_errors
    async def get_stats(self, customer_ids: Sequence[int]) -> Dict[int, Dict[str, Any]]:
        ids = list(customer_ids)
        stats = {
            customer_id: {
                "total_liters": to_decimal(0),
                "delivery_days": 0,
                "total_billed": to_decimal(0),
                "total_paid": to_decimal(0),
            }
            for customer_id in ids
        }
        if not ids:
            return stats

        deliveries = await self.session.execute(
            select(
                DeliveryEntry.customer_id,
                func.sum(DeliveryEntry.total_liters),
                func.count(DeliveryEntry.id),
            )
            .where(DeliveryEntry.customer_id.in_(ids))
            .group_by(DeliveryEntry.customer_id)
        )
        for customer_id, liters, days in deliveries.all():
            stats[customer_id]["total_liters"] = to_decimal(liters)
            stats[customer_id]["delivery_days"] = days

        billed = await self.session.execute(
            select(Bill.customer_id, func.sum(Bill.total_amount))
            .where(Bill.customer_id.in_(ids))
            .group_by(Bill.customer_id)
        )
        for customer_id, total in billed.all():
            stats[customer_id]["total_billed"] = to_decimal(total)

        paid = await self.session.execute(
            select(Bill.customer_id, func.sum(Payment.amount_paid))
            .select_from(Payment)
            .join(Bill, Bill.id == Payment.bill_id)
            .where(Bill.customer_id.in_(ids))
            .group_by(Bill.customer_id)
        )
        for customer_id, total in paid.all():
            stats[customer_id]["total_paid"] = to_decimal(total)

        return stats
