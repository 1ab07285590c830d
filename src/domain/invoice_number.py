"""Invoice number format

INV-{year}-{month:02d}-{seq:03d}. The sequence is shared by every month of
a year, so the number alone identifies a bill in a flat yearly ledger.
"""

from datetime import date
from typing import Iterable, Optional

INVOICE_PREFIX = "INV"


def year_prefix(year: int) -> str:
    return f"{INVOICE_PREFIX}-{year}-"


def format_invoice_number(period_start: date, sequence: int) -> str:
    return f"{INVOICE_PREFIX}-{period_start.year}-{period_start.month:02d}-{sequence:03d}"


def parse_sequence(invoice_number: str) -> Optional[int]:
    """Trailing numeric segment, or None when it is not a number"""
    tail = invoice_number.rsplit("-", 1)[-1]
    if not tail.isdigit():
        return None
    return int(tail)


def max_sequence(invoice_numbers: Iterable[str]) -> int:
    """Highest parsable sequence among the given numbers (0 when none)"""
    highest = 0
    for number in invoice_numbers:
        sequence = parse_sequence(number)
        if sequence is not None and sequence > highest:
            highest = sequence
    return highest
