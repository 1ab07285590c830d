"""Unit tests for settlement status derivation"""

import pytest
from decimal import Decimal

from src.domain.bill import BillStatus, status_after_payments


@pytest.mark.parametrize(
    "total_paid, current, expected",
    [
        (Decimal("0"), BillStatus.GENERATED, BillStatus.GENERATED),
        (Decimal("0"), BillStatus.SENT, BillStatus.SENT),
        (Decimal("0"), BillStatus.PAID, BillStatus.GENERATED),
        (Decimal("400.00"), BillStatus.GENERATED, BillStatus.PARTIALLY_PAID),
        (Decimal("400.00"), BillStatus.SENT, BillStatus.PARTIALLY_PAID),
        (Decimal("1000.00"), BillStatus.PARTIALLY_PAID, BillStatus.PAID),
        (Decimal("1200.00"), BillStatus.SENT, BillStatus.PAID),
    ],
)
def test_status_after_payments(total_paid, current, expected):
    assert status_after_payments(total_paid, Decimal("1000.00"), current) == expected


def test_lowered_amount_turns_partial_payment_into_paid():
    """Regeneration with fewer liters can settle a partially paid bill"""
    assert status_after_payments(
        Decimal("400.00"), Decimal("350.00"), BillStatus.PARTIALLY_PAID
    ) == BillStatus.PAID
