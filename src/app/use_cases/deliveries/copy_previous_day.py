"""CopyPreviousDay Use Case"""

from datetime import date, timedelta
from libs.result import Result, Return, Error
from src.app.repositories.delivery_entry_repository import DeliveryEntryRepository
from .dtos import CopyPreviousDayResponseDTO, DeliveryEntryInputDTO


class CopyPreviousDay:
    """Prefill a day with the quantities recorded the day before"""

    def __init__(self, delivery_repo: DeliveryEntryRepository):
        self.delivery_repo = delivery_repo

    async def execute(self, target_date: date) -> Result[CopyPreviousDayResponseDTO]:
        source_date = target_date - timedelta(days=1)
        try:
            entries = await self.delivery_repo.get_by_date(source_date)
        except Exception as e:
            return Return.err(
                Error(
                    code="COPY_PREVIOUS_DAY_FAILED",
                    message="Failed to load the previous day's deliveries",
                    reason=str(e),
                )
            )

        return Return.ok(
            CopyPreviousDayResponseDTO(
                source_date=source_date,
                target_date=target_date,
                entries=[
                    DeliveryEntryInputDTO(
                        customer_id=entry.customer_id,
                        morning_liters=entry.morning_liters,
                        evening_liters=entry.evening_liters,
                        total_liters=entry.total_liters,
                    )
                    for entry in entries
                ],
            )
        )
