"""GetDailyEntries Use Case"""

from datetime import date
from libs.result import Result, Return, Error
from src.app.repositories.delivery_entry_repository import DeliveryEntryRepository
from .dtos import DailyEntriesResponseDTO, DeliveryEntryDTO


class GetDailyEntries:
    def __init__(self, delivery_repo: DeliveryEntryRepository):
        self.delivery_repo = delivery_repo

    async def execute(self, delivery_date: date) -> Result[DailyEntriesResponseDTO]:
        try:
            entries = await self.delivery_repo.get_by_date(delivery_date)
            total_liters, customer_count = await self.delivery_repo.daily_summary(delivery_date)

            return Return.ok(
                DailyEntriesResponseDTO(
                    delivery_date=delivery_date,
                    entries=[DeliveryEntryDTO.from_entry(e) for e in entries],
                    total_liters=total_liters,
                    customer_count=customer_count,
                )
            )
        except Exception as e:
            return Return.err(
                Error(
                    code="GET_DELIVERIES_FAILED",
                    message="Failed to load deliveries",
                    reason=str(e),
                )
            )
