"""Unit tests for CreateManualBill use case"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.billing.create_manual_bill import CreateManualBill
from src.app.use_cases.billing.dtos import CreateManualBillCommandDTO
from src.domain.exceptions import ConflictError
from tests.unit.use_cases.factories import make_bill, make_customer


@pytest.fixture
def mock_customer_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=make_customer(3))
    return repo


@pytest.fixture
def mock_bill_repo():
    repo = MagicMock()
    repo.get_for_period = AsyncMock(return_value=None)

    async def _create(bill):
        bill.id = 77
        return bill

    repo.create = AsyncMock(side_effect=_create)
    return repo


@pytest.fixture
def mock_allocator():
    allocator = MagicMock()
    allocator.allocate = AsyncMock(return_value="INV-2024-03-012")
    return allocator


@pytest.fixture
def use_case(mock_uow, mock_customer_repo, mock_bill_repo, mock_allocator):
    return CreateManualBill(mock_uow, mock_customer_repo, mock_bill_repo, mock_allocator)


def command(**overrides):
    values = dict(
        customer_id=3,
        period_start=date(2024, 3, 1),
        period_end=date(2024, 3, 31),
        total_liters=Decimal("30"),
        price_per_liter=Decimal("58.50"),
        notes="Paper register",
    )
    values.update(overrides)
    return CreateManualBillCommandDTO(**values)


@pytest.mark.asyncio
class TestCreateManualBill:
    async def test_creates_bill_with_new_number(self, use_case, mock_uow):
        result = await use_case.execute(command())

        assert result.is_ok()
        assert result.value.bill_id == 77
        assert result.value.invoice_number == "INV-2024-03-012"
        assert result.value.total_amount == Decimal("1755.00")
        assert result.value.status == "GENERATED"
        assert result.value.notes == "Paper register"
        mock_uow.commit.assert_called_once()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"total_liters": Decimal("0")},
            {"price_per_liter": Decimal("-1")},
            {"total_liters": Decimal("0.005")},
            {"price_per_liter": Decimal("58.505")},
            {"period_end": date(2024, 2, 1)},
        ],
    )
    async def test_invalid_input(self, use_case, mock_customer_repo, overrides):
        result = await use_case.execute(command(**overrides))

        assert result.error.code == "VALIDATION_ERROR"
        mock_customer_repo.get_by_id.assert_not_called()

    async def test_customer_not_found(self, use_case, mock_customer_repo):
        mock_customer_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute(command())

        assert result.error.code == "CUSTOMER_NOT_FOUND"

    async def test_duplicate_period(self, use_case, mock_bill_repo, mock_allocator):
        mock_bill_repo.get_for_period = AsyncMock(return_value=make_bill())

        result = await use_case.execute(command())

        assert result.error.code == "BILL_ALREADY_EXISTS"
        mock_allocator.allocate.assert_not_called()

    async def test_conflict_on_insert(self, use_case, mock_bill_repo, mock_uow):
        mock_bill_repo.create = AsyncMock(side_effect=ConflictError("taken"))

        result = await use_case.execute(command())

        assert result.error.code == "INVOICE_NUMBER_CONFLICT"
        mock_uow.rollback.assert_called_once()
