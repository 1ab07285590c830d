"""Database builders for integration tests"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.bill_repository import SqlAlchemyBillRepository
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.delivery_entry_repository import SqlAlchemyDeliveryEntryRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.repositories.settings_repository import SqlAlchemySettingsRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.invoice_number_allocator import InvoiceNumberAllocator
from src.app.use_cases.billing.generate_bills import GenerateBills
from src.domain.customer import Customer
from src.domain.delivery_entry import DeliveryEntry


async def add_customer(
    session: AsyncSession,
    name: str,
    price_per_liter: Optional[Decimal] = None,
    is_active: bool = True,
) -> Customer:
    customer = Customer(
        name=name,
        phone_number="+919876543210",
        price_per_liter=price_per_liter,
        is_active=is_active,
        start_date=date(2023, 1, 1),
    )
    session.add(customer)
    await session.commit()
    await session.refresh(customer)
    return customer


async def add_deliveries(
    session: AsyncSession,
    customer_id: int,
    start: date,
    days: int,
    liters: Decimal,
):
    for offset in range(days):
        session.add(
            DeliveryEntry(
                customer_id=customer_id,
                delivery_date=start + timedelta(days=offset),
                total_liters=liters,
            )
        )
    await session.commit()


def generate_bills_use_case(session: AsyncSession) -> GenerateBills:
    bill_repo = SqlAlchemyBillRepository(session)
    return GenerateBills(
        uow=SqlAlchemyUnitOfWork(session),
        customer_repo=SqlAlchemyCustomerRepository(session),
        delivery_repo=SqlAlchemyDeliveryEntryRepository(session),
        bill_repo=bill_repo,
        payment_repo=SqlAlchemyPaymentRepository(session),
        settings_repo=SqlAlchemySettingsRepository(session),
        allocator=InvoiceNumberAllocator(bill_repo),
    )
