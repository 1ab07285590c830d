"""Delivery ledger use cases"""
from .save_daily_entries import SaveDailyEntries
from .save_monthly_entries import SaveMonthlyEntries
from .get_daily_entries import GetDailyEntries
from .copy_previous_day import CopyPreviousDay
from .dtos import (
    DeliveryEntryInputDTO,
    SaveDailyEntriesCommandDTO,
    SaveDailyEntriesResponseDTO,
    DeliveryEntryDTO,
    DailyEntriesResponseDTO,
    MonthlyEntryChangeDTO,
    SaveMonthlyEntriesCommandDTO,
    SaveMonthlyEntriesResponseDTO,
    CopyPreviousDayResponseDTO,
)

__all__ = [
    "SaveDailyEntries",
    "SaveMonthlyEntries",
    "GetDailyEntries",
    "CopyPreviousDay",
    "DeliveryEntryInputDTO",
    "SaveDailyEntriesCommandDTO",
    "SaveDailyEntriesResponseDTO",
    "DeliveryEntryDTO",
    "DailyEntriesResponseDTO",
    "MonthlyEntryChangeDTO",
    "SaveMonthlyEntriesCommandDTO",
    "SaveMonthlyEntriesResponseDTO",
    "CopyPreviousDayResponseDTO",
]
