from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp (``2025-01-31T08:00:00``) into a naive datetime."""
    return datetime.fromisoformat(value)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month (both inclusive)."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def resolve_window(day: date, start: time, end: time) -> Optional[tuple[datetime, datetime]]:
    """Place a time-of-day window on a calendar day.

    ``end <= start`` means the window runs past midnight into the next day.
    A zero-length window (``start == end``) resolves to ``None``.
    """
    if start == end:
        return None
    begin = datetime.combine(day, start)
    finish = datetime.combine(day, end)
    if finish <= begin:
        finish += timedelta(days=1)
    return begin, finish

