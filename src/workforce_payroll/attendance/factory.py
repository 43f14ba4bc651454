from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..shifts.model import ShiftSchedule
from .strategies.base import AttendanceStrategy
from .strategies.early_strategy import EarlyLeaveStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def is_late(self, *, check_in: datetime, attendance_date: date, shift: Optional[ShiftSchedule], grace_minutes: int) -> bool:
        if not shift:
            return False
        window = shift.main_window.on(attendance_date)
        if not window:
            return False
        return check_in > window[0] + timedelta(minutes=grace_minutes)

    def for_checkin(
        self, *, now: datetime, attendance_date: date, shift: Optional[ShiftSchedule], grace_minutes: int
    ) -> AttendanceStrategy:
        if self.is_late(check_in=now, attendance_date=attendance_date, shift=shift, grace_minutes=grace_minutes):
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(
        self,
        *,
        check_in: datetime,
        now: datetime,
        attendance_date: date,
        shift: Optional[ShiftSchedule],
        grace_minutes: int,
    ) -> AttendanceStrategy:
        if not shift:
            return NormalStrategy()
        if self.is_late(check_in=check_in, attendance_date=attendance_date, shift=shift, grace_minutes=grace_minutes):
            return LateStrategy()

        window = shift.main_window.on(attendance_date)
        if window and now < window[1]:
            return EarlyLeaveStrategy()
        return NormalStrategy()
