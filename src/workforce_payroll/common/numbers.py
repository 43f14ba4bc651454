from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..core.constants import HOURS_QUANTUM, MONEY_QUANTUM, SECONDS_PER_HOUR


def round_half_up(value: Decimal, quantum: Decimal) -> Decimal:
    return value.quantize(quantum, rounding=ROUND_HALF_UP)


def seconds_to_hours(seconds: int | float) -> Decimal:
    """Convert a duration in seconds to hours rounded to two decimals."""
    return round_half_up(Decimal(str(seconds)) / Decimal(SECONDS_PER_HOUR), HOURS_QUANTUM)


def round_money(value: Decimal) -> Decimal:
    return round_half_up(value, MONEY_QUANTUM)


def to_decimal(value: Any) -> Decimal:
    """Coerce DB/JSON numeric values (Decimal, float, int, str, None) to Decimal."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
