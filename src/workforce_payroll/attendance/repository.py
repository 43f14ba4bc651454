from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, WorkHourBreakdown


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        """Most recent record that has a check-in but no check-out yet."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        """Records whose attendance_date lies in [start_date, end_date]."""

        raise NotImplementedError

    def create_checkin(
        self,
        *,
        employee_id: int,
        attendance_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        status: AttendanceStatus,
        hours: WorkHourBreakdown,
        note: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def admin_update_record(
        self,
        *,
        attendance_id: int,
        check_in_time: datetime,
        check_out_time: Optional[datetime],
        status: AttendanceStatus,
        hours: Optional[WorkHourBreakdown],
        note: Optional[str] = None,
    ) -> bool:
        """Administrative correction; ``hours=None`` resets the buckets to zero."""

        raise NotImplementedError
