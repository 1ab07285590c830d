"""Delivery Ledger API Routes"""

from datetime import date

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.schemas.delivery_request import (
    SaveDeliveriesRequestSchema,
    SaveMonthlyDeliveriesRequestSchema,
)
from src.app.use_cases.deliveries import (
    CopyPreviousDay,
    CopyPreviousDayResponseDTO,
    DailyEntriesResponseDTO,
    MonthlyEntryChangeDTO,
    SaveMonthlyEntries,
    SaveMonthlyEntriesCommandDTO,
    SaveMonthlyEntriesResponseDTO,
    DeliveryEntryInputDTO,
    GetDailyEntries,
    SaveDailyEntries,
    SaveDailyEntriesCommandDTO,
    SaveDailyEntriesResponseDTO,
)
from src.adapter.repositories.delivery_entry_repository import SqlAlchemyDeliveryEntryRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session
from src.api.error import ClientError

router = APIRouter(prefix="/deliveries", tags=["Deliveries"])


@router.get("/{delivery_date}", response_model=DailyEntriesResponseDTO)
async def get_deliveries(
    delivery_date: date,
    session: AsyncSession = Depends(get_session)
):
    """Deliveries recorded on a date with the day's total liters."""
    result = await GetDailyEntries(SqlAlchemyDeliveryEntryRepository(session)).execute(delivery_date)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.put("/{delivery_date}", response_model=SaveDailyEntriesResponseDTO)
async def save_deliveries(
    delivery_date: date,
    request: SaveDeliveriesRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Save the day's deliveries.

    Each entry replaces that customer's record for the date. An entry with
    no quantities (or all zero) removes the record.

    **Returns:**
    - 200: Saved; `deleted_count` counts removed records
    - 400: A quantity is negative
    """
    use_case = SaveDailyEntries(
        SqlAlchemyUnitOfWork(session), SqlAlchemyDeliveryEntryRepository(session)
    )
    command = SaveDailyEntriesCommandDTO(
        delivery_date=delivery_date,
        entries=[DeliveryEntryInputDTO(**entry.model_dump()) for entry in request.entries],
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.get("/{delivery_date}/copy-previous", response_model=CopyPreviousDayResponseDTO)
async def copy_previous_day(
    delivery_date: date,
    session: AsyncSession = Depends(get_session)
):
    """
    The previous day's quantities, ready to be edited and saved for this date.

    Nothing is stored until the entries are sent to `PUT /deliveries/{date}`.
    """
    result = await CopyPreviousDay(SqlAlchemyDeliveryEntryRepository(session)).execute(delivery_date)

    if result.is_err():
        raise ClientError(result.error)

    return result.value


@router.post("/bulk", response_model=SaveMonthlyEntriesResponseDTO)
async def save_monthly_deliveries(
    request: SaveMonthlyDeliveriesRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Save changed cells of the month grid in one transaction.

    **Returns:**
    - 200: Saved; counts of stored and removed entries
    - 400: A quantity is negative or has more than 2 decimal places
    """
    use_case = SaveMonthlyEntries(
        SqlAlchemyUnitOfWork(session), SqlAlchemyDeliveryEntryRepository(session)
    )
    result = await use_case.execute(
        SaveMonthlyEntriesCommandDTO(
            changes=[MonthlyEntryChangeDTO(**change.model_dump()) for change in request.changes]
        )
    )

    if result.is_err():
        raise ClientError(result.error)

    return result.value
