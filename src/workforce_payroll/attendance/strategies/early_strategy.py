from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftSchedule
from .base import AttendanceStrategy, StatusDecision, minutes_between


class EarlyLeaveStrategy(AttendanceStrategy):
    """Early leave on checkout (only when check-in was on time)."""

    def decide_checkin(
        self, *, now: datetime, attendance_date: date, shift: Optional[ShiftSchedule], grace_minutes: int
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.IN_PROGRESS)

    def decide_checkout(
        self, *, check_in: datetime, now: datetime, attendance_date: date, shift: Optional[ShiftSchedule]
    ) -> StatusDecision:
        note = None
        if shift:
            window = shift.main_window.on(attendance_date)
            if window:
                note = f"Left {minutes_between(now, window[1])} minutes early"
        return StatusDecision(status=AttendanceStatus.EARLY_LEAVE, note=note)
