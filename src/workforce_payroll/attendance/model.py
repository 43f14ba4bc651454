from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus

ZERO_HOURS = Decimal("0.00")


@dataclass(frozen=True)
class WorkHourBreakdown:
    """Classified hours of one worked interval (all in hours, 2 decimals).

    ``uncovered_hours`` is worked time that no window pays for, including the
    part of the lunch break that was worked through (``break_hours``).
    """

    main_hours: Decimal
    regular_overtime_hours: Decimal
    weekly_overtime_hours: Decimal
    uncovered_hours: Decimal
    break_hours: Decimal
    total_hours: Decimal

    @property
    def has_uncovered_time(self) -> bool:
        return self.uncovered_hours > 0


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per employee per calendar day."""

    attendance_id: int
    employee_id: int
    attendance_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    main_work_hours: Decimal = ZERO_HOURS
    regular_overtime_hours: Decimal = ZERO_HOURS
    weekly_overtime_hours: Decimal = ZERO_HOURS
    uncovered_hours: Decimal = ZERO_HOURS
    note: Optional[str] = None
