"""Unit tests for SendBill and SendAllBills use cases

Tests cover:
- Document, file name and caption handed to the messaging service
- Bill marked SENT with the provider message id
- Messaging not configured / delivery failure
- Bulk send keeps going when one bill fails
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.billing.send_all_bills import SendAllBills
from src.app.use_cases.billing.send_bill import SendBill, build_caption
from src.domain.bill import BillStatus
from src.domain.exceptions import MessageDeliveryError, MessagingNotConfiguredError
from tests.unit.use_cases.factories import make_bill, make_customer, make_settings


@pytest.fixture
def bills():
    return {
        i: make_bill(
            bill_id=i,
            customer_id=i,
            invoice_number=f"INV-2024-01-{i:03d}",
            status=BillStatus.GENERATED,
        )
        for i in range(1, 6)
    }


@pytest.fixture
def mock_bill_repo(bills):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(side_effect=lambda bill_id: bills.get(bill_id))
    repo.update = AsyncMock(side_effect=lambda b: b)
    repo.list_for_period = AsyncMock(side_effect=lambda start, end, statuses=None: list(bills.values()))
    return repo


@pytest.fixture
def mock_customer_repo():
    repo = MagicMock()
    repo.get_by_id = AsyncMock(side_effect=lambda customer_id: make_customer(customer_id))
    return repo


@pytest.fixture
def mock_delivery_repo():
    repo = MagicMock()
    repo.get_for_period = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_payment_repo():
    repo = MagicMock()
    repo.total_paid = AsyncMock(return_value=Decimal("0"))
    return repo


@pytest.fixture
def mock_settings_repo():
    repo = MagicMock()
    repo.get = AsyncMock(
        return_value=make_settings(whatsapp_instance_id="1101", whatsapp_api_token="secret")
    )
    return repo


@pytest.fixture
def mock_pdf_service():
    service = MagicMock()
    service.generate_invoice = MagicMock(return_value=b"%PDF-1.4 bill")
    return service


@pytest.fixture
def mock_messaging():
    messaging = MagicMock()
    messaging.send_document = AsyncMock(return_value="BAE5F4886F6F2D05")
    return messaging


@pytest.fixture
def send_use_case(
    mock_uow,
    mock_bill_repo,
    mock_customer_repo,
    mock_delivery_repo,
    mock_payment_repo,
    mock_settings_repo,
    mock_pdf_service,
    mock_messaging,
):
    return SendBill(
        uow=mock_uow,
        bill_repo=mock_bill_repo,
        customer_repo=mock_customer_repo,
        delivery_repo=mock_delivery_repo,
        payment_repo=mock_payment_repo,
        settings_repo=mock_settings_repo,
        pdf_service=mock_pdf_service,
        messaging_factory=lambda settings: mock_messaging,
    )


def test_build_caption():
    bill = make_bill(total_amount=Decimal("750"))

    caption = build_caption(bill, make_settings())

    assert caption == (
        "Milk bill for January 2024\n"
        "From: Green Valley Dairy\n"
        "Total: Rs.750.00\n"
        "Invoice: INV-2024-01-001"
    )


@pytest.mark.asyncio
class TestSendBill:
    async def test_sends_pdf_and_marks_bill_sent(self, send_use_case, mock_messaging, bills, mock_uow):
        """
        Given: A GENERATED bill and configured WhatsApp credentials
        When: The bill is sent
        Then: The PDF goes out as {invoice}.pdf and the bill is SENT
        """
        result = await send_use_case.execute(2)

        assert result.is_ok()
        assert result.value.message_id == "BAE5F4886F6F2D05"
        assert result.value.status == "SENT"
        assert result.value.invoice_number == "INV-2024-01-002"

        kwargs = mock_messaging.send_document.call_args.kwargs
        assert kwargs["phone_number"] == "+919876540002"
        assert kwargs["document"] == b"%PDF-1.4 bill"
        assert kwargs["file_name"] == "INV-2024-01-002.pdf"
        assert "Invoice: INV-2024-01-002" in kwargs["caption"]

        assert bills[2].status == BillStatus.SENT
        assert bills[2].whatsapp_message_id == "BAE5F4886F6F2D05"
        mock_uow.commit.assert_called_once()

    async def test_messaging_not_configured(self, send_use_case, mock_messaging, mock_pdf_service):
        def _factory(settings):
            raise MessagingNotConfiguredError("WhatsApp is not configured")

        send_use_case.messaging_factory = _factory

        result = await send_use_case.execute(1)

        assert result.error.code == "MESSAGING_NOT_CONFIGURED"
        mock_messaging.send_document.assert_not_called()
        mock_pdf_service.generate_invoice.assert_not_called()

    async def test_delivery_failure_leaves_bill_unsent(self, send_use_case, mock_messaging, bills, mock_uow):
        mock_messaging.send_document = AsyncMock(side_effect=MessageDeliveryError("HTTP 500"))

        result = await send_use_case.execute(1)

        assert result.error.code == "DELIVERY_FAILED"
        assert bills[1].status == BillStatus.GENERATED
        assert bills[1].whatsapp_message_id is None
        mock_uow.commit.assert_not_called()

    async def test_bill_not_found(self, send_use_case, mock_messaging):
        result = await send_use_case.execute(404)

        assert result.error.code == "BILL_NOT_FOUND"
        mock_messaging.send_document.assert_not_called()


@pytest.mark.asyncio
class TestSendAllBills:
    async def test_one_failing_bill_does_not_stop_the_rest(
        self, send_use_case, mock_bill_repo, mock_messaging
    ):
        """
        Given: Five unsent bills, sending bill #3 fails
        When: All bills of the period are sent
        Then: Four succeed, bill #3 is reported failed, every bill has a result
        """
        async def _send(phone_number, document, file_name, caption):
            if file_name == "INV-2024-01-003.pdf":
                raise MessageDeliveryError("recipient not on WhatsApp")
            return f"MSG-{file_name}"

        mock_messaging.send_document = AsyncMock(side_effect=_send)
        use_case = SendAllBills(mock_bill_repo, send_use_case)

        result = await use_case.execute(date(2024, 1, 1), date(2024, 1, 31))

        assert result.is_ok()
        response = result.value
        assert response.sent_count == 4
        assert response.failed_count == 1
        assert [r.bill_id for r in response.results] == [1, 2, 3, 4, 5]

        failed = response.results[2]
        assert failed.success is False
        assert failed.error_code == "DELIVERY_FAILED"
        assert "recipient not on WhatsApp" in failed.error
        assert all(r.success for i, r in enumerate(response.results) if i != 2)

        statuses = mock_bill_repo.list_for_period.call_args.kwargs["statuses"]
        assert set(statuses) == {BillStatus.GENERATED, BillStatus.PARTIALLY_PAID}

    async def test_load_failure(self, send_use_case, mock_bill_repo):
        mock_bill_repo.list_for_period = AsyncMock(side_effect=RuntimeError("boom"))

        result = await SendAllBills(mock_bill_repo, send_use_case).execute(
            date(2024, 1, 1), date(2024, 1, 31)
        )

        assert result.error.code == "SEND_ALL_FAILED"
