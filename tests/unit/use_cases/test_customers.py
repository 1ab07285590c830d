"""Unit tests for customer use cases"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.customers import (
    CreateCustomer,
    CreateCustomerCommandDTO,
    DeleteCustomer,
    GetCustomer,
    ListCustomers,
    ToggleCustomerStatus,
    UpdateCustomer,
    UpdateCustomerCommandDTO,
)
from src.domain.delivery_entry import DeliveryEntry
from tests.unit.use_cases.factories import make_bill, make_customer


@pytest.fixture
def mock_customer_repo():
    repo = MagicMock()

    async def _create(customer):
        customer.id = 11
        return customer

    repo.create = AsyncMock(side_effect=_create)
    repo.update = AsyncMock(side_effect=lambda c: c)
    repo.get_by_id = AsyncMock(return_value=make_customer(11, price_per_liter=Decimal("55.00")))
    return repo


@pytest.mark.asyncio
class TestCreateCustomer:
    async def test_normalizes_phone(self, mock_uow, mock_customer_repo):
        command = CreateCustomerCommandDTO(
            name=" Ramesh Kumar ", phone_number="98765 43210", start_date=date(2024, 1, 1)
        )

        result = await CreateCustomer(mock_uow, mock_customer_repo).execute(command)

        assert result.is_ok()
        assert result.value.customer_id == 11
        assert result.value.name == "Ramesh Kumar"
        assert result.value.phone_number == "+919876543210"
        assert result.value.is_active is True
        assert result.value.price_per_liter is None
        mock_uow.commit.assert_called_once()

    @pytest.mark.parametrize("rate", ["0", "55.005"])
    async def test_rejects_invalid_rate(self, mock_uow, mock_customer_repo, rate):
        command = CreateCustomerCommandDTO(
            name="Ramesh", phone_number="9876543210", price_per_liter=Decimal(rate)
        )

        result = await CreateCustomer(mock_uow, mock_customer_repo).execute(command)

        assert result.error.code == "VALIDATION_ERROR"
        mock_customer_repo.create.assert_not_called()


@pytest.mark.asyncio
class TestUpdateCustomer:
    async def test_clear_price_override(self, mock_uow, mock_customer_repo):
        command = UpdateCustomerCommandDTO(clear_price_override=True, address="New Road")

        result = await UpdateCustomer(mock_uow, mock_customer_repo).execute(11, command)

        assert result.value.price_per_liter is None
        assert result.value.address == "New Road"

    async def test_not_found(self, mock_uow, mock_customer_repo):
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)

        result = await UpdateCustomer(mock_uow, mock_customer_repo).execute(
            99, UpdateCustomerCommandDTO(name="X")
        )

        assert result.error.code == "CUSTOMER_NOT_FOUND"

    async def test_toggle_deactivates(self, mock_uow, mock_customer_repo):
        result = await ToggleCustomerStatus(mock_uow, mock_customer_repo).execute(11)

        assert result.value.is_active is False
        mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
class TestDeleteCustomer:
    async def test_returns_cascade_counts(self, mock_uow, mock_customer_repo):
        counts = {"payments": 2, "bills": 1, "deliveries": 30, "customers": 1}
        mock_customer_repo.delete_cascade = AsyncMock(return_value=counts)

        result = await DeleteCustomer(mock_uow, mock_customer_repo).execute(11)

        assert result.value.deleted == counts
        mock_customer_repo.delete_cascade.assert_called_once_with(11)
        mock_uow.commit.assert_called_once()

    async def test_not_found(self, mock_uow, mock_customer_repo):
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)
        mock_customer_repo.delete_cascade = AsyncMock()

        result = await DeleteCustomer(mock_uow, mock_customer_repo).execute(99)

        assert result.error.code == "CUSTOMER_NOT_FOUND"
        mock_customer_repo.delete_cascade.assert_not_called()


@pytest.mark.asyncio
class TestListCustomers:
    async def test_passes_filters(self, mock_customer_repo):
        mock_customer_repo.list = AsyncMock(return_value=[make_customer(1), make_customer(2)])

        result = await ListCustomers(mock_customer_repo).execute(active=True, search="Ram")

        assert [c.customer_id for c in result.value] == [1, 2]
        mock_customer_repo.list.assert_called_once_with(active=True, search="Ram")

    async def test_with_stats(self, mock_customer_repo):
        mock_customer_repo.list = AsyncMock(return_value=[make_customer(1), make_customer(2)])
        mock_customer_repo.get_stats = AsyncMock(
            return_value={
                1: {
                    "total_liters": Decimal("45.50"),
                    "delivery_days": 30,
                    "total_billed": Decimal("2730.00"),
                    "total_paid": Decimal("2000.00"),
                },
                2: {
                    "total_liters": Decimal("0"),
                    "delivery_days": 0,
                    "total_billed": Decimal("0"),
                    "total_paid": Decimal("0"),
                },
            }
        )

        result = await ListCustomers(mock_customer_repo).execute(with_stats=True)

        first, second = result.value
        assert first.stats.balance == Decimal("730.00")
        assert first.stats.delivery_days == 30
        assert second.stats.total_liters == Decimal("0")
        mock_customer_repo.get_stats.assert_called_once_with([1, 2])

    async def test_stats_left_out_by_default(self, mock_customer_repo):
        mock_customer_repo.list = AsyncMock(return_value=[make_customer(1)])
        mock_customer_repo.get_stats = AsyncMock()

        result = await ListCustomers(mock_customer_repo).execute()

        assert result.value[0].stats is None
        mock_customer_repo.get_stats.assert_not_called()


@pytest.fixture
def detail_repos(mock_customer_repo):
    mock_customer_repo.get_stats = AsyncMock(
        return_value={
            11: {
                "total_liters": Decimal("62.00"),
                "delivery_days": 40,
                "total_billed": Decimal("3400.00"),
                "total_paid": Decimal("3000.00"),
            }
        }
    )
    bill_repo = MagicMock()
    bill_repo.list_for_customer = AsyncMock(
        return_value=[
            make_bill(bill_id=2, customer_id=11, total_amount=Decimal("1800.00")),
            make_bill(bill_id=1, customer_id=11, total_amount=Decimal("1600.00")),
        ]
    )
    payment_repo = MagicMock()
    payment_repo.totals_by_bill = AsyncMock(return_value={1: Decimal("1600.00"), 2: Decimal("1400.00")})
    delivery_repo = MagicMock()
    delivery_repo.recent_for_customer = AsyncMock(
        return_value=[
            DeliveryEntry(
                id=9,
                customer_id=11,
                delivery_date=date(2024, 3, 5),
                total_liters=Decimal("1.50"),
                updated_at=datetime(2024, 3, 5),
            )
        ]
    )
    return mock_customer_repo, bill_repo, delivery_repo, payment_repo


@pytest.mark.asyncio
class TestGetCustomer:
    async def test_detail_with_stats_bills_and_entries(self, detail_repos):
        """
        Given: A customer with two bills and recent deliveries
        When: The customer is read
        Then: Lifetime balance, per-bill balances and recent entries are returned
        """
        customer_repo, bill_repo, delivery_repo, payment_repo = detail_repos

        result = await GetCustomer(customer_repo, bill_repo, delivery_repo, payment_repo).execute(11)

        assert result.is_ok()
        detail = result.value
        assert detail.customer_id == 11
        assert detail.stats.balance == Decimal("400.00")
        assert [b.bill_id for b in detail.recent_bills] == [2, 1]
        assert detail.recent_bills[0].balance_due == Decimal("400.00")
        assert detail.recent_bills[1].balance_due == Decimal("0.00")
        assert detail.recent_entries[0].total_liters == Decimal("1.50")
        bill_repo.list_for_customer.assert_called_once_with(11, limit=12)
        delivery_repo.recent_for_customer.assert_called_once_with(11, limit=30)
        payment_repo.totals_by_bill.assert_called_once_with([2, 1])

    async def test_not_found(self, detail_repos):
        customer_repo, bill_repo, delivery_repo, payment_repo = detail_repos
        customer_repo.get_by_id = AsyncMock(return_value=None)

        result = await GetCustomer(customer_repo, bill_repo, delivery_repo, payment_repo).execute(99)

        assert result.error.code == "CUSTOMER_NOT_FOUND"
        bill_repo.list_for_customer.assert_not_called()

    async def test_repository_failure(self, detail_repos):
        customer_repo, bill_repo, delivery_repo, payment_repo = detail_repos
        bill_repo.list_for_customer = AsyncMock(side_effect=RuntimeError("boom"))

        result = await GetCustomer(customer_repo, bill_repo, delivery_repo, payment_repo).execute(11)

        assert result.error.code == "GET_CUSTOMER_FAILED"
