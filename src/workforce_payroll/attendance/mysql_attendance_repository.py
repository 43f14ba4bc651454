from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..common.numbers import to_decimal
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ZERO_HOURS, AttendanceRecord, WorkHourBreakdown
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, attendance_date, check_in_time, check_out_time, status,
    main_work_hours, regular_overtime_hours, weekly_overtime_hours, uncovered_hours, note
"""


def _row_to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        attendance_date=r["attendance_date"],
        check_in_time=r["check_in_time"],
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        main_work_hours=to_decimal(r.get("main_work_hours")),
        regular_overtime_hours=to_decimal(r.get("regular_overtime_hours")),
        weekly_overtime_hours=to_decimal(r.get("weekly_overtime_hours")),
        uncovered_hours=to_decimal(r.get("uncovered_hours")),
        note=r.get("note"),
    )


def _hour_params(hours: Optional[WorkHourBreakdown]) -> tuple:
    if hours is None:
        return (ZERO_HOURS, ZERO_HOURS, ZERO_HOURS, ZERO_HOURS)
    return (hours.main_hours, hours.regular_overtime_hours, hours.weekly_overtime_hours, hours.uncovered_hours)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_recent_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s
                ORDER BY attendance_date DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE employee_id=%s AND attendance_date=%s",
                (int(employee_id), attendance_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND check_out_time IS NULL
                ORDER BY attendance_date DESC
                LIMIT 1
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND attendance_date BETWEEN %s AND %s
                ORDER BY attendance_date ASC
                """,
                (int(employee_id), start_date, end_date),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        employee_id: int,
        attendance_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, attendance_date, check_in_time, status, note)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), attendance_date, check_in_time, status.value, note),
            )
            return int(cur.lastrowid)

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        status: AttendanceStatus,
        hours: WorkHourBreakdown,
        note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Guarded so two concurrent check-outs cannot both classify the record.
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, status=%s,
                    main_work_hours=%s, regular_overtime_hours=%s, weekly_overtime_hours=%s, uncovered_hours=%s,
                    note=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, status.value) + _hour_params(hours) + (note, int(attendance_id)),
            )
            return cur.rowcount > 0

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_in_time=%s, check_out_time=%s, status=%s,
                    main_work_hours=%s, regular_overtime_hours=%s, weekly_overtime_hours=%s, uncovered_hours=%s,
                    note=%s
                WHERE attendance_id=%s
                """,
                (check_in_time, check_out_time, status.value) + _hour_params(hours) + (note, int(attendance_id)),
            )
            return cur.rowcount > 0
