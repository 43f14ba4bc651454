from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftSchedule


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_checkin(
        self, *, now: datetime, attendance_date: date, shift: Optional[ShiftSchedule], grace_minutes: int
    ) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_checkout(
        self, *, check_in: datetime, now: datetime, attendance_date: date, shift: Optional[ShiftSchedule]
    ) -> StatusDecision:
        raise NotImplementedError


def minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)
