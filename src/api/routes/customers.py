"""Customer API Routes"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.use_cases.customers import (
    CreateCustomer,
    CreateCustomerCommandDTO,
    CustomerDetailDTO,
    CustomerResponseDTO,
    DeleteCustomer,
    DeleteCustomerResponseDTO,
    GetCustomer,
    ListCustomers,
    ToggleCustomerStatus,
    UpdateCustomer,
    UpdateCustomerCommandDTO,
)
from src.adapter.repositories.bill_repository import SqlAlchemyBillRepository
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.delivery_entry_repository import SqlAlchemyDeliveryEntryRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("", response_model=List[CustomerResponseDTO])
async def list_customers(
    active: Optional[bool] = Query(default=None, description="Filter on active status"),
    search: Optional[str] = Query(default=None, description="Match on name or phone"),
    with_stats: bool = Query(default=False, description="Include lifetime totals per customer"),
    session: AsyncSession = Depends(get_session)
):
    result = await ListCustomers(SqlAlchemyCustomerRepository(session)).execute(
        active, search, with_stats
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("", response_model=CustomerResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_customer(
    request: CreateCustomerCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    """
    Register a customer.

    Ten-digit phone numbers are stored with the +91 prefix. Leave
    `price_per_liter` empty to bill at the farm-wide rate.
    """
    use_case = CreateCustomer(SqlAlchemyUnitOfWork(session), SqlAlchemyCustomerRepository(session))
    result = await use_case.execute(request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{customer_id}", response_model=CustomerDetailDTO)
async def get_customer(
    customer_id: int,
    session: AsyncSession = Depends(get_session)
):
    """Customer with lifetime totals, the last 12 bills and the last 30 delivery days."""
    use_case = GetCustomer(
        SqlAlchemyCustomerRepository(session),
        SqlAlchemyBillRepository(session),
        SqlAlchemyDeliveryEntryRepository(session),
        SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(customer_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.patch("/{customer_id}", response_model=CustomerResponseDTO)
async def update_customer(
    customer_id: int,
    request: UpdateCustomerCommandDTO,
    session: AsyncSession = Depends(get_session)
):
    use_case = UpdateCustomer(SqlAlchemyUnitOfWork(session), SqlAlchemyCustomerRepository(session))
    result = await use_case.execute(customer_id, request)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("/{customer_id}/toggle-status", response_model=CustomerResponseDTO)
async def toggle_customer_status(
    customer_id: int,
    session: AsyncSession = Depends(get_session)
):
    """Activate or deactivate a customer. Inactive customers are not billed."""
    use_case = ToggleCustomerStatus(
        SqlAlchemyUnitOfWork(session), SqlAlchemyCustomerRepository(session)
    )
    result = await use_case.execute(customer_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.delete("/{customer_id}", response_model=DeleteCustomerResponseDTO)
async def delete_customer(
    customer_id: int,
    session: AsyncSession = Depends(get_session)
):
    """
    Permanently delete a customer with its deliveries, bills and payments.

    **Returns:**
    - 200: Deleted; `deleted` holds the number of rows removed per table
    - 404: Customer not found
    """
    use_case = DeleteCustomer(SqlAlchemyUnitOfWork(session), SqlAlchemyCustomerRepository(session))
    result = await use_case.execute(customer_id)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
