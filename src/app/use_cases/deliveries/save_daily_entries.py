"""SaveDailyEntries Use Case

Records the day's deliveries for many customers at once.
"""

import logging
from datetime import date
from typing import Optional, Tuple
from libs.result import Result, Return, Error
from src.app.repositories.delivery_entry_repository import DeliveryEntryRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.delivery_entry import DeliveryEntry
from src.domain.exceptions import StorageUnavailableError
from src.domain.pricing import fits_cents
from .dtos import (
    DeliveryEntryDTO,
    DeliveryEntryInputDTO,
    SaveDailyEntriesCommandDTO,
    SaveDailyEntriesResponseDTO,
)

logger = logging.getLogger(__name__)


def quantity_error(item: DeliveryEntryInputDTO, delivery_date: date) -> Optional[Error]:
    """VALIDATION_ERROR for a negative or sub-centiliter quantity, else None"""
    for value in (item.morning_liters, item.evening_liters, item.total_liters):
        if value is None:
            continue
        if value < 0 or not fits_cents(value):
            return Error(
                code="VALIDATION_ERROR",
                message="Liters must be zero or more with at most 2 decimal places",
                reason=f"customer_id={item.customer_id}, date={delivery_date}, liters={value}",
            )
    return None


async def apply_entry(
    delivery_repo: DeliveryEntryRepository,
    delivery_date: date,
    item: DeliveryEntryInputDTO,
) -> Tuple[Optional[DeliveryEntry], int]:
    """Upsert the entry, or delete the row when the entry is empty

    Returns:
        (stored entry or None, number of rows deleted)
    """
    if item.is_empty():
        return None, await delivery_repo.delete(item.customer_id, delivery_date)

    entry = await delivery_repo.upsert(
        customer_id=item.customer_id,
        delivery_date=delivery_date,
        total_liters=item.resolved_total(),
        morning_liters=item.morning_liters,
        evening_liters=item.evening_liters,
        notes=item.notes,
    )
    return entry, 0


class SaveDailyEntries:
    """
    Use Case: Save one day of deliveries

    Business Rules:
    1. Quantities must not be negative and fit two decimal places
    2. An entry with no quantities removes that customer's row for the day
    3. All entries are saved in one transaction
    """

    def __init__(self, uow: UnitOfWork, delivery_repo: DeliveryEntryRepository):
        self.uow = uow
        self.delivery_repo = delivery_repo

    async def execute(self, command: SaveDailyEntriesCommandDTO) -> Result[SaveDailyEntriesResponseDTO]:
        for item in command.entries:
            error = quantity_error(item, command.delivery_date)
            if error:
                return Return.err(error)

        response = SaveDailyEntriesResponseDTO(delivery_date=command.delivery_date)

        try:
            for item in command.entries:
                entry, deleted = await apply_entry(self.delivery_repo, command.delivery_date, item)
                response.deleted_count += deleted
                if entry is not None:
                    response.saved.append(DeliveryEntryDTO.from_entry(entry))

            await self.uow.commit()

        except StorageUnavailableError as e:
            await self.uow.rollback()
            return Return.err(
                Error(code="STORAGE_UNAVAILABLE", message="Database unavailable", reason=str(e))
            )
        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SAVE_DELIVERIES_FAILED",
                    message="Failed to save deliveries",
                    reason=str(e),
                )
            )

        logger.info(
            f"Deliveries for {command.delivery_date}: {len(response.saved)} saved, "
            f"{response.deleted_count} removed"
        )
        return Return.ok(response)
