"""Pricing rules

Pure functions: no I/O, no failure modes.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CENT = Decimal("0.01")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal going through str so floats do not carry binary noise"""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def resolve_rate(customer, settings) -> Decimal:
    """
    Effective price per liter for a customer.

    The customer's own price wins when set; otherwise the farm-wide
    default from settings applies.
    """
    if customer.price_per_liter is not None:
        return to_decimal(customer.price_per_liter)
    return to_decimal(settings.global_price_per_liter)


def quantize_money(amount: Number) -> Decimal:
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def compute_total_amount(total_liters: Number, rate: Number) -> Decimal:
    """total_liters * rate rounded half-up to the cent"""
    return quantize_money(to_decimal(total_liters) * to_decimal(rate))


def fits_cents(value: Number) -> bool:
    """True when value is stored by a two-decimal column without rounding"""
    value = to_decimal(value)
    return value.is_finite() and value == value.quantize(CENT)
