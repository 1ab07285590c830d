"""Unit tests for pricing rules

Tests cover:
- Rate precedence (customer override over global rate)
- Half-up rounding of the billed amount
- Two-decimal precision check for stored quantities and amounts
"""

import pytest
from decimal import Decimal
from types import SimpleNamespace

from src.domain.pricing import (
    compute_total_amount,
    fits_cents,
    quantize_money,
    resolve_rate,
    to_decimal,
)


@pytest.fixture
def settings():
    return SimpleNamespace(global_price_per_liter=Decimal("60.00"))


class TestResolveRate:
    def test_customer_override_wins(self, settings):
        """
        Given: Customer has a custom price of 55.00, global rate is 60.00
        When: resolve_rate is called
        Then: 55.00 is returned
        """
        customer = SimpleNamespace(price_per_liter=Decimal("55.00"))

        assert resolve_rate(customer, settings) == Decimal("55.00")

    def test_falls_back_to_global_rate(self, settings):
        customer = SimpleNamespace(price_per_liter=None)

        assert resolve_rate(customer, settings) == Decimal("60.00")

    def test_float_rate_is_converted_without_binary_noise(self):
        customer = SimpleNamespace(price_per_liter=None)
        settings = SimpleNamespace(global_price_per_liter=62.1)

        assert resolve_rate(customer, settings) == Decimal("62.1")


class TestComputeTotalAmount:
    def test_exact_amount(self):
        """12.5 L at 60.00 bills exactly 750.00"""
        assert compute_total_amount(Decimal("12.5"), Decimal("60.00")) == Decimal("750.00")

    def test_rounds_half_up_to_cent(self):
        # 3.333 * 1.5 = 4.9995
        assert compute_total_amount(Decimal("3.333"), Decimal("1.5")) == Decimal("5.00")
        # 0.125 * 1 = 0.125
        assert compute_total_amount(Decimal("0.125"), Decimal("1")) == Decimal("0.13")

    def test_result_has_two_decimal_places(self):
        amount = compute_total_amount(Decimal("10"), Decimal("55"))

        assert amount == Decimal("550.00")
        assert amount.as_tuple().exponent == -2

    def test_accepts_strings_and_ints(self):
        assert compute_total_amount("2.5", 40) == Decimal("100.00")


def test_quantize_money():
    assert quantize_money(Decimal("10.005")) == Decimal("10.01")
    assert to_decimal("1.10") == Decimal("1.10")


class TestFitsCents:
    @pytest.mark.parametrize("value", ["0", "12", "12.5", "0.01", "999.99", "-3.20"])
    def test_two_places_or_fewer(self, value):
        assert fits_cents(Decimal(value))

    @pytest.mark.parametrize("value", ["0.004", "0.005", "10.001", "1.2345"])
    def test_sub_cent_values(self, value):
        """A value a NUMERIC(10, 2) column would round is refused"""
        assert not fits_cents(Decimal(value))

    def test_trailing_zeros_are_fine(self):
        assert fits_cents(Decimal("5.000"))

    def test_non_finite(self):
        assert not fits_cents(Decimal("NaN"))
        assert not fits_cents(Decimal("Infinity"))
