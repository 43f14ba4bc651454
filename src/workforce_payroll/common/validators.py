from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_iso_datetime


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required", field=field_name)
    return value.strip()


def require_positive_id(value: Any, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer id", field=field_name) from None
    if parsed <= 0:
        raise ValidationError(f"{field_name} must be a positive id", field=field_name)
    return parsed


def require_date_range(start: date, end: date) -> None:
    if start > end:
        raise ValidationError(
            f"Invalid date range: {start.isoformat()} is after {end.isoformat()}",
            field="period",
        )


def require_non_negative_amount(value: Any, field_name: str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number", field=field_name) from None
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field_name} must not be negative", field=field_name)
    return amount


def parse_date_field(value: Any, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)", field=field_name) from None


def parse_datetime_field(value: Any, field_name: str) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return parse_iso_datetime(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an ISO timestamp", field=field_name) from None


def parse_enum_field(enum_cls, value: Any, field_name: str):
    """Case-insensitive enum parse; blank input gives ``None``."""
    if value in (None, ""):
        return None
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}", field=field_name) from None


def optional_id(value: Any, field_name: str) -> Optional[int]:
    if value in (None, ""):
        return None
    return require_positive_id(value, field_name)


def optional_date(value: Any, field_name: str) -> Optional[date]:
    if value in (None, ""):
        return None
    return parse_date_field(value, field_name)
