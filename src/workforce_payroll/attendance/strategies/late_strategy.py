from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftSchedule
from .base import AttendanceStrategy, StatusDecision, minutes_between


class LateStrategy(AttendanceStrategy):
    """Late check-in; the record stays LATE whatever the check-out time."""

    def decide_checkin(
        self, *, now: datetime, attendance_date: date, shift: Optional[ShiftSchedule], grace_minutes: int
    ) -> StatusDecision:
        note = None
        if shift:
            start = shift.main_window.on(attendance_date)
            if start:
                note = f"Late by {minutes_between(start[0], now)} minutes"
        return StatusDecision(status=AttendanceStatus.IN_PROGRESS, note=note)

    def decide_checkout(
        self, *, check_in: datetime, now: datetime, attendance_date: date, shift: Optional[ShiftSchedule]
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
