from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_LATE_GRACE_MINUTES
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AttendanceNotFound,
    ConflictError,
    EmployeeNotFound,
    ShiftNotFound,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..shifts.model import ShiftSchedule
from ..shifts.repository import ShiftRepository
from .classifier import WorkHourClassifier
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Check-in / check-out recording; classifies hours when a record is closed."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        shifts: ShiftRepository,
        *,
        classifier: WorkHourClassifier | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    ):
        self._attendance = attendance
        self._employees = employees
        self._shifts = shifts
        self._classifier = classifier or WorkHourClassifier()
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._grace_minutes = int(grace_minutes)

    def _get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise EmployeeNotFound(employee_id)
        return employee

    def _get_shift(self, employee: Employee) -> ShiftSchedule:
        if not employee.shift_id:
            raise ValidationError(f"Employee {employee.employee_id} has no shift assigned", field="shift_id")
        shift = self._shifts.get_by_id(employee.shift_id)
        if not shift:
            raise ShiftNotFound(employee.shift_id)
        return shift

    def check_in(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        employee = self._get_employee(employee_id)

        if self._attendance.get_for_employee_and_date(employee_id, today):
            raise ConflictError(f"Employee {employee_id} already checked in on {today.isoformat()}")
        open_record = self._attendance.get_open_for_employee(employee_id)
        if open_record:
            raise ConflictError(
                f"Employee {employee_id} has not checked out of {open_record.attendance_date.isoformat()} yet"
            )

        shift = self._shifts.get_by_id(employee.shift_id) if employee.shift_id else None
        strategy = self._factory.for_checkin(
            now=now, attendance_date=today, shift=shift, grace_minutes=self._grace_minutes
        )
        decision = strategy.decide_checkin(
            now=now, attendance_date=today, shift=shift, grace_minutes=self._grace_minutes
        )

        attendance_id = self._attendance.create_checkin(
            employee_id=employee_id,
            attendance_date=today,
            check_in_time=now,
            status=decision.status,
            note=decision.note,
        )
        logger.info("Employee %s checked in at %s", employee_id, now.isoformat())
        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=employee_id,
            attendance_date=today,
            check_in_time=now,
            check_out_time=None,
            status=decision.status,
            note=decision.note,
        )

    def check_out(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()

        record = self._attendance.get_open_for_employee(employee_id)
        if not record:
            raise ValidationError(f"Employee {employee_id} has no open check-in")

        employee = self._get_employee(employee_id)
        shift = self._get_shift(employee)

        hours = self._classifier.classify(record.check_in_time, now, shift, attendance_date=record.attendance_date)
        strategy = self._factory.for_checkout(
            check_in=record.check_in_time,
            now=now,
            attendance_date=record.attendance_date,
            shift=shift,
            grace_minutes=self._grace_minutes,
        )
        decision = strategy.decide_checkout(
            check_in=record.check_in_time, now=now, attendance_date=record.attendance_date, shift=shift
        )
        note = _join_notes(record.note, decision.note)
        if hours.has_uncovered_time:
            logger.info(
                "Employee %s worked %s h outside paid windows on %s",
                employee_id,
                hours.uncovered_hours,
                record.attendance_date.isoformat(),
            )

        if not self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            status=decision.status,
            hours=hours,
            note=note,
        ):
            raise ConflictError(f"Attendance {record.attendance_id} was already checked out")

        return AttendanceRecord(
            attendance_id=record.attendance_id,
            employee_id=employee_id,
            attendance_date=record.attendance_date,
            check_in_time=record.check_in_time,
            check_out_time=now,
            status=decision.status,
            main_work_hours=hours.main_hours,
            regular_overtime_hours=hours.regular_overtime_hours,
            weekly_overtime_hours=hours.weekly_overtime_hours,
            uncovered_hours=hours.uncovered_hours,
            note=note,
        )

    def correct_record(
        self,
        attendance_id: int,
        *,
        check_in_time: datetime,
        check_out_time: Optional[datetime],
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        """Administrative correction: re-time a record and classify it again."""
        record = self._attendance.get_by_id(attendance_id)
        if not record:
            raise AttendanceNotFound(attendance_id)

        employee = self._get_employee(record.employee_id)
        note = note if note is not None else record.note

        hours = None
        status = AttendanceStatus.IN_PROGRESS
        if check_out_time is not None:
            shift = self._get_shift(employee)
            hours = self._classifier.classify(
                check_in_time, check_out_time, shift, attendance_date=record.attendance_date
            )
            strategy = self._factory.for_checkout(
                check_in=check_in_time,
                now=check_out_time,
                attendance_date=record.attendance_date,
                shift=shift,
                grace_minutes=self._grace_minutes,
            )
            status = strategy.decide_checkout(
                check_in=check_in_time, now=check_out_time, attendance_date=record.attendance_date, shift=shift
            ).status

        self._attendance.admin_update_record(
            attendance_id=attendance_id,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            status=status,
            hours=hours,
            note=note,
        )
        logger.info("Attendance %s corrected (status=%s)", attendance_id, status.value)

        corrected = self._attendance.get_by_id(attendance_id)
        if corrected is None:
            raise AttendanceNotFound(attendance_id)
        return corrected

    def get_history(self, employee_id: int, *, limit: int = 30) -> Sequence[AttendanceRecord]:
        return self._attendance.get_recent_for_employee(employee_id, limit)


def _join_notes(*notes: Optional[str]) -> Optional[str]:
    parts = [n for n in notes if n]
    return "; ".join(parts) if parts else None
