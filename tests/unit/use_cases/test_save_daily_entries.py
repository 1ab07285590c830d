"""Unit tests for the delivery ledger use cases"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.deliveries import (
    CopyPreviousDay,
    DeliveryEntryInputDTO,
    GetDailyEntries,
    MonthlyEntryChangeDTO,
    SaveDailyEntries,
    SaveDailyEntriesCommandDTO,
    SaveMonthlyEntries,
    SaveMonthlyEntriesCommandDTO,
)
from src.domain.exceptions import StorageUnavailableError
from src.domain.delivery_entry import DeliveryEntry

DAY = date(2024, 1, 15)


@pytest.fixture
def mock_delivery_repo():
    repo = MagicMock()

    async def _upsert(customer_id, delivery_date, total_liters, morning_liters=None,
                      evening_liters=None, notes=None):
        return DeliveryEntry(
            id=customer_id,
            customer_id=customer_id,
            delivery_date=delivery_date,
            morning_liters=morning_liters,
            evening_liters=evening_liters,
            total_liters=total_liters,
            notes=notes,
            updated_at=datetime(2024, 1, 15),
        )

    repo.upsert = AsyncMock(side_effect=_upsert)
    repo.delete = AsyncMock(return_value=1)
    return repo


@pytest.mark.asyncio
class TestSaveDailyEntries:
    async def test_upserts_and_deletes_in_one_transaction(self, mock_uow, mock_delivery_repo):
        """
        Given: One split entry, one single total and one empty entry
        When: The day is saved
        Then: Two rows upserted, the empty one deleted, one commit
        """
        command = SaveDailyEntriesCommandDTO(
            delivery_date=DAY,
            entries=[
                DeliveryEntryInputDTO(
                    customer_id=1, morning_liters=Decimal("1.0"), evening_liters=Decimal("0.5")
                ),
                DeliveryEntryInputDTO(customer_id=2, total_liters=Decimal("2.0")),
                DeliveryEntryInputDTO(customer_id=3, morning_liters=Decimal("0")),
            ],
        )

        result = await SaveDailyEntries(mock_uow, mock_delivery_repo).execute(command)

        assert result.is_ok()
        assert [e.customer_id for e in result.value.saved] == [1, 2]
        assert result.value.saved[0].total_liters == Decimal("1.5")
        assert result.value.deleted_count == 1
        mock_delivery_repo.delete.assert_called_once_with(3, DAY)
        mock_uow.commit.assert_called_once()

    async def test_negative_liters_rejected(self, mock_uow, mock_delivery_repo):
        command = SaveDailyEntriesCommandDTO(
            delivery_date=DAY,
            entries=[DeliveryEntryInputDTO(customer_id=1, total_liters=Decimal("-1"))],
        )

        result = await SaveDailyEntries(mock_uow, mock_delivery_repo).execute(command)

        assert result.error.code == "VALIDATION_ERROR"
        mock_delivery_repo.upsert.assert_not_called()

    @pytest.mark.parametrize(
        "entry",
        [
            {"total_liters": Decimal("0.004")},
            {"morning_liters": Decimal("1.005"), "evening_liters": Decimal("1")},
        ],
    )
    async def test_sub_cent_liters_rejected(self, mock_uow, mock_delivery_repo, entry):
        command = SaveDailyEntriesCommandDTO(
            delivery_date=DAY,
            entries=[
                DeliveryEntryInputDTO(customer_id=1, total_liters=Decimal("2")),
                DeliveryEntryInputDTO(customer_id=2, **entry),
            ],
        )

        result = await SaveDailyEntries(mock_uow, mock_delivery_repo).execute(command)

        assert result.error.code == "VALIDATION_ERROR"
        assert "customer_id=2" in result.error.reason
        mock_delivery_repo.upsert.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_failure_rolls_back_whole_day(self, mock_uow, mock_delivery_repo):
        mock_delivery_repo.upsert = AsyncMock(side_effect=RuntimeError("constraint"))
        command = SaveDailyEntriesCommandDTO(
            delivery_date=DAY,
            entries=[DeliveryEntryInputDTO(customer_id=1, total_liters=Decimal("1"))],
        )

        result = await SaveDailyEntries(mock_uow, mock_delivery_repo).execute(command)

        assert result.error.code == "SAVE_DELIVERIES_FAILED"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
class TestGetDailyEntries:
    async def test_returns_entries_and_summary(self, mock_delivery_repo):
        mock_delivery_repo.get_by_date = AsyncMock(return_value=[])
        mock_delivery_repo.daily_summary = AsyncMock(return_value=(Decimal("42.5"), 17))

        result = await GetDailyEntries(mock_delivery_repo).execute(DAY)

        assert result.value.total_liters == Decimal("42.5")
        assert result.value.customer_count == 17


def change(day, customer_id, **quantities):
    return MonthlyEntryChangeDTO(delivery_date=date(2024, 1, day), customer_id=customer_id, **quantities)


@pytest.mark.asyncio
class TestSaveMonthlyEntries:
    async def test_changes_across_dates_share_one_commit(self, mock_uow, mock_delivery_repo):
        """
        Given: Grid edits on three dates, one of them a cleared cell
        When: The batch is saved
        Then: Two upserts, one delete, dates sorted, a single commit
        """
        command = SaveMonthlyEntriesCommandDTO(
            changes=[
                change(20, 1, total_liters=Decimal("2")),
                change(3, 2, morning_liters=Decimal("1"), evening_liters=Decimal("0.5")),
                change(11, 1),
            ]
        )

        result = await SaveMonthlyEntries(mock_uow, mock_delivery_repo).execute(command)

        assert result.is_ok()
        assert result.value.saved_count == 2
        assert result.value.deleted_count == 1
        assert result.value.dates == [date(2024, 1, 3), date(2024, 1, 11), date(2024, 1, 20)]
        mock_delivery_repo.delete.assert_called_once_with(1, date(2024, 1, 11))
        first_upsert = mock_delivery_repo.upsert.call_args_list[0].kwargs
        assert first_upsert["delivery_date"] == date(2024, 1, 3)
        assert first_upsert["total_liters"] == Decimal("1.5")
        mock_uow.commit.assert_called_once()

    async def test_invalid_cell_rejects_whole_batch(self, mock_uow, mock_delivery_repo):
        command = SaveMonthlyEntriesCommandDTO(
            changes=[
                change(1, 1, total_liters=Decimal("2")),
                change(2, 1, total_liters=Decimal("0.004")),
            ]
        )

        result = await SaveMonthlyEntries(mock_uow, mock_delivery_repo).execute(command)

        assert result.error.code == "VALIDATION_ERROR"
        mock_delivery_repo.upsert.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_storage_failure_rolls_back(self, mock_uow, mock_delivery_repo):
        mock_delivery_repo.upsert = AsyncMock(side_effect=StorageUnavailableError("db down"))
        command = SaveMonthlyEntriesCommandDTO(changes=[change(1, 1, total_liters=Decimal("2"))])

        result = await SaveMonthlyEntries(mock_uow, mock_delivery_repo).execute(command)

        assert result.error.code == "STORAGE_UNAVAILABLE"
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestCopyPreviousDay:
    async def test_returns_yesterdays_quantities(self, mock_delivery_repo):
        yesterday = DeliveryEntry(
            id=5,
            customer_id=4,
            delivery_date=date(2024, 1, 14),
            morning_liters=Decimal("1.00"),
            evening_liters=Decimal("0.50"),
            total_liters=Decimal("1.50"),
            notes="Leave at gate",
            updated_at=datetime(2024, 1, 14),
        )
        mock_delivery_repo.get_by_date = AsyncMock(return_value=[yesterday])

        result = await CopyPreviousDay(mock_delivery_repo).execute(DAY)

        mock_delivery_repo.get_by_date.assert_called_once_with(date(2024, 1, 14))
        assert result.value.source_date == date(2024, 1, 14)
        assert result.value.target_date == DAY
        [entry] = result.value.entries
        assert entry.customer_id == 4
        assert entry.total_liters == Decimal("1.50")
        assert entry.notes is None

    async def test_first_of_month_reads_last_day_of_previous_month(self, mock_delivery_repo):
        mock_delivery_repo.get_by_date = AsyncMock(return_value=[])

        result = await CopyPreviousDay(mock_delivery_repo).execute(date(2024, 3, 1))

        assert result.value.source_date == date(2024, 2, 29)
        assert result.value.entries == []
