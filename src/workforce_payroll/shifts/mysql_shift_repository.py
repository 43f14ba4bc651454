from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import ShiftSchedule
from .repository import ShiftRepository

_COLUMNS = """
    shift_id, shift_name, shift_type, sub_department_id,
    main_work_start, main_work_end,
    lunch_break_start, lunch_break_end,
    regular_overtime_start, regular_overtime_end,
    weekly_overtime_start, weekly_overtime_end
"""


def _row_to_shift(r: Dict[str, Any]) -> ShiftSchedule:
    return ShiftSchedule(
        shift_id=int(r["shift_id"]),
        shift_name=r["shift_name"],
        shift_type=ShiftType(r.get("shift_type") or ShiftType.NON_SHIFT.value),
        sub_department_id=int(r["sub_department_id"]) if r.get("sub_department_id") else None,
        main_work_start=normalize_mysql_time(r["main_work_start"]),
        main_work_end=normalize_mysql_time(r["main_work_end"]),
        lunch_break_start=normalize_mysql_time(r.get("lunch_break_start")),
        lunch_break_end=normalize_mysql_time(r.get("lunch_break_end")),
        regular_overtime_start=normalize_mysql_time(r.get("regular_overtime_start")),
        regular_overtime_end=normalize_mysql_time(r.get("regular_overtime_end")),
        weekly_overtime_start=normalize_mysql_time(r.get("weekly_overtime_start")),
        weekly_overtime_end=normalize_mysql_time(r.get("weekly_overtime_end")),
    )


def _params(shift: ShiftSchedule) -> tuple:
    return (
        shift.shift_name,
        shift.shift_type.value,
        shift.sub_department_id,
        shift.main_work_start,
        shift.main_work_end,
        shift.lunch_break_start,
        shift.lunch_break_end,
        shift.regular_overtime_start,
        shift.regular_overtime_end,
        shift.weekly_overtime_start,
        shift.weekly_overtime_end,
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[ShiftSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts ORDER BY shift_name")
            return [_row_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[ShiftSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _row_to_shift(r) if r else None

    def create(self, shift: ShiftSchedule) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(
                    shift_name, shift_type, sub_department_id,
                    main_work_start, main_work_end,
                    lunch_break_start, lunch_break_end,
                    regular_overtime_start, regular_overtime_end,
                    weekly_overtime_start, weekly_overtime_end
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(shift),
            )
            return int(cur.lastrowid)

    def update(self, shift: ShiftSchedule) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET shift_name=%s, shift_type=%s, sub_department_id=%s,
                    main_work_start=%s, main_work_end=%s,
                    lunch_break_start=%s, lunch_break_end=%s,
                    regular_overtime_start=%s, regular_overtime_end=%s,
                    weekly_overtime_start=%s, weekly_overtime_end=%s
                WHERE shift_id=%s
                """,
                _params(shift) + (int(shift.shift_id),),
            )
            return cur.rowcount > 0
