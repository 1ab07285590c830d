"""Data Transfer Objects for Delivery Ledger Use Cases"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field
from src.domain.delivery_entry import DeliveryEntry


class DeliveryEntryInputDTO(BaseModel):
    """
    One customer's quantities for a day

    total_liters defaults to morning + evening when left out.
    """

    customer_id: int
    morning_liters: Optional[Decimal] = None
    evening_liters: Optional[Decimal] = None
    total_liters: Optional[Decimal] = None
    notes: Optional[str] = None

    def resolved_total(self) -> Decimal:
        if self.total_liters is not None:
            return self.total_liters
        return (self.morning_liters or Decimal("0")) + (self.evening_liters or Decimal("0"))

    def is_empty(self) -> bool:
        return (
            self.resolved_total() == 0
            and not self.morning_liters
            and not self.evening_liters
        )


class SaveDailyEntriesCommandDTO(BaseModel):
    delivery_date: date
    entries: List[DeliveryEntryInputDTO] = Field(default_factory=list)


class DeliveryEntryDTO(BaseModel):
    entry_id: int
    customer_id: int
    delivery_date: date
    morning_liters: Optional[Decimal] = None
    evening_liters: Optional[Decimal] = None
    total_liters: Decimal
    notes: Optional[str] = None
    updated_at: datetime

    @classmethod
    def from_entry(cls, entry: DeliveryEntry) -> "DeliveryEntryDTO":
        return cls(
            entry_id=entry.id,
            customer_id=entry.customer_id,
            delivery_date=entry.delivery_date,
            morning_liters=entry.morning_liters,
            evening_liters=entry.evening_liters,
            total_liters=entry.total_liters,
            notes=entry.notes,
            updated_at=entry.updated_at,
        )


class SaveDailyEntriesResponseDTO(BaseModel):
    delivery_date: date
    saved: List[DeliveryEntryDTO] = Field(default_factory=list)
    deleted_count: int = 0


class DailyEntriesResponseDTO(BaseModel):
    """Entries recorded on a date with the day's totals"""

    delivery_date: date
    entries: List[DeliveryEntryDTO] = Field(default_factory=list)
    total_liters: Decimal = Decimal("0")
    customer_count: int = 0


class MonthlyEntryChangeDTO(DeliveryEntryInputDTO):
    """One changed cell of the month grid"""

    delivery_date: date


class SaveMonthlyEntriesCommandDTO(BaseModel):
    changes: List[MonthlyEntryChangeDTO] = Field(default_factory=list)


class SaveMonthlyEntriesResponseDTO(BaseModel):
    saved_count: int = 0
    deleted_count: int = 0
    dates: List[date] = Field(default_factory=list, description="Dates touched, ascending")


class CopyPreviousDayResponseDTO(BaseModel):
    """
    Previous day's quantities ready to be saved for target_date

    Nothing is written; the entries are meant to be reviewed and sent back
    through SaveDailyEntries.
    """

    source_date: date
    target_date: date
    entries: List[DeliveryEntryInputDTO] = Field(default_factory=list)
