from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftSchedule
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time check-in, full-shift check-out."""

    def decide_checkin(
        self, *, now: datetime, attendance_date: date, shift: Optional[ShiftSchedule], grace_minutes: int
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.IN_PROGRESS)

    def decide_checkout(
        self, *, check_in: datetime, now: datetime, attendance_date: date, shift: Optional[ShiftSchedule]
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
