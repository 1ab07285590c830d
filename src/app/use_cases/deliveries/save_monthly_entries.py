"""SaveMonthlyEntries Use Case

Saves the cells changed in the month grid, across many dates and
customers, in one transaction.
"""

import logging
from collections import defaultdict
from libs.result import Result, Return, Error
from src.app.repositories.delivery_entry_repository import DeliveryEntryRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.exceptions import StorageUnavailableError
from .dtos import SaveMonthlyEntriesCommandDTO, SaveMonthlyEntriesResponseDTO
from .save_daily_entries import apply_entry, quantity_error

logger = logging.getLogger(__name__)


class SaveMonthlyEntries:
    """
    Use Case: Save a batch of (date, customer) delivery changes

    Business Rules:
    1. Same quantity rules as a daily save
    2. Empty cells remove the stored entry
    3. Any failure rolls back the whole batch
    """

    def __init__(self, uow: UnitOfWork, delivery_repo: DeliveryEntryRepository):
        self.uow = uow
        self.delivery_repo = delivery_repo

    async def execute(self, command: SaveMonthlyEntriesCommandDTO) -> Result[SaveMonthlyEntriesResponseDTO]:
        by_date = defaultdict(list)
        for change in command.changes:
            error = quantity_error(change, change.delivery_date)
            if error:
                return Return.err(error)
            by_date[change.delivery_date].append(change)

        response = SaveMonthlyEntriesResponseDTO(dates=sorted(by_date))

        try:
            for delivery_date in response.dates:
                for change in by_date[delivery_date]:
                    entry, deleted = await apply_entry(self.delivery_repo, delivery_date, change)
                    response.deleted_count += deleted
                    if entry is not None:
                        response.saved_count += 1

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
                    message="Failed to save monthly entries",
                    reason=str(e),
                )
            )

        logger.info(
            f"Monthly entries over {len(response.dates)} days: "
            f"{response.saved_count} saved, {response.deleted_count} removed"
        )
        return Return.ok(response)
