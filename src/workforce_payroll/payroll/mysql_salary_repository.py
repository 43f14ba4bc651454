from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, Optional, Sequence

import mysql.connector

from ..common.numbers import to_decimal
from ..core.enums import ContractType, PaymentStatus, UpsertOutcome
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Salary, SalaryFilter, SalaryLine, SalaryView, UpsertResult
from .repository import SalaryRepository

_COLUMNS = """
    s.salary_id, s.employee_id, s.period_start, s.period_end,
    s.main_work_hours, s.regular_overtime_hours, s.weekly_overtime_hours,
    s.base_salary, s.overtime_salary, s.weekly_overtime_salary, s.total_salary,
    s.payment_status, s.payment_date, s.created_at, s.updated_at
"""


def _row_to_salary(r: Dict[str, Any]) -> Salary:
    return Salary(
        salary_id=int(r["salary_id"]),
        employee_id=int(r["employee_id"]),
        period_start=r["period_start"],
        period_end=r["period_end"],
        main_work_hours=to_decimal(r["main_work_hours"]),
        regular_overtime_hours=to_decimal(r["regular_overtime_hours"]),
        weekly_overtime_hours=to_decimal(r["weekly_overtime_hours"]),
        base_salary=to_decimal(r["base_salary"]),
        overtime_salary=to_decimal(r["overtime_salary"]),
        weekly_overtime_salary=to_decimal(r["weekly_overtime_salary"]),
        total_salary=to_decimal(r["total_salary"]),
        payment_status=PaymentStatus(r["payment_status"]),
        payment_date=r.get("payment_date"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _line_values(line: SalaryLine) -> tuple:
    return (
        line.hours.main_work_hours,
        line.hours.regular_overtime_hours,
        line.hours.weekly_overtime_hours,
        line.amounts.base_salary,
        line.amounts.overtime_salary,
        line.amounts.weekly_overtime_salary,
        line.amounts.total_salary,
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, salary_id: int) -> Optional[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salaries s WHERE s.salary_id=%s", (int(salary_id),))
            r = fetchone(cur)
            return _row_to_salary(r) if r else None

    def list_overlapping(self, *, employee_id: int, period_start: date, period_end: date) -> Sequence[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM salaries s
                WHERE s.employee_id=%s AND s.period_start <= %s AND s.period_end >= %s
                ORDER BY s.period_start
                """,
                (int(employee_id), period_end, period_start),
            )
            return [_row_to_salary(r) for r in fetchall(cur)]

    def list_unpaid_for_employee(self, employee_id: int) -> Sequence[Salary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM salaries s
                WHERE s.employee_id=%s AND s.payment_status=%s
                ORDER BY s.period_start
                """,
                (int(employee_id), PaymentStatus.UNPAID.value),
            )
            return [_row_to_salary(r) for r in fetchall(cur)]

    def upsert_line(self, line: SalaryLine, *, overwrite_unpaid: bool = True) -> UpsertResult:
        key = (int(line.employee_id), line.period_start, line.period_end)
        select_locked = f"""
            SELECT {_COLUMNS} FROM salaries s
            WHERE s.employee_id=%s AND s.period_start=%s AND s.period_end=%s
            FOR UPDATE
        """

        with db_cursor(self._conn_factory) as (_, cur):
            # The row lock makes check-then-write atomic against a concurrent
            # payment or a second payroll run for the same period.
            cur.execute(select_locked, key)
            existing = fetchone(cur)

            if existing is None:
                try:
                    cur.execute(
                        """
                        INSERT INTO salaries(
                            employee_id, period_start, period_end,
                            main_work_hours, regular_overtime_hours, weekly_overtime_hours,
                            base_salary, overtime_salary, weekly_overtime_salary, total_salary,
                            payment_status
                        )
                        VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                        """,
                        key + _line_values(line) + (PaymentStatus.UNPAID.value,),
                    )
                    salary_id = int(cur.lastrowid)
                    cur.execute(f"SELECT {_COLUMNS} FROM salaries s WHERE s.salary_id=%s", (salary_id,))
                    return UpsertResult(outcome=UpsertOutcome.CREATED, salary=_row_to_salary(fetchone(cur)))
                except mysql.connector.IntegrityError:
                    # Lost the race against a concurrent insert of the same key.
                    cur.execute(select_locked, key)
                    existing = fetchone(cur)
                    if existing is None:
                        raise

            current = _row_to_salary(existing)
            if current.is_paid:
                return UpsertResult(outcome=UpsertOutcome.PAID_CONFLICT, salary=current)
            if not overwrite_unpaid:
                return UpsertResult(outcome=UpsertOutcome.EXISTING_CONFLICT, salary=current)

            cur.execute(
                """
                UPDATE salaries
                SET main_work_hours=%s, regular_overtime_hours=%s, weekly_overtime_hours=%s,
                    base_salary=%s, overtime_salary=%s, weekly_overtime_salary=%s, total_salary=%s
                WHERE salary_id=%s AND payment_status=%s
                """,
                _line_values(line) + (current.salary_id, PaymentStatus.UNPAID.value),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM salaries s WHERE s.salary_id=%s", (current.salary_id,))
            return UpsertResult(outcome=UpsertOutcome.UPDATED, salary=_row_to_salary(fetchone(cur)))

    def mark_paid(self, salary_ids: Iterable[int], *, payment_date: date) -> int:
        ids = [int(i) for i in salary_ids]
        if not ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE salaries
                SET payment_status=%s, payment_date=%s
                WHERE salary_id IN ({in_clause(ids)}) AND payment_status=%s
                """,
                (PaymentStatus.PAID.value, payment_date, *ids, PaymentStatus.UNPAID.value),
            )
            return int(cur.rowcount)

    def set_payment_status(self, salary_id: int, *, status: PaymentStatus, payment_date: Optional[date]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE salaries SET payment_status=%s, payment_date=%s WHERE salary_id=%s",
                (status.value, payment_date, int(salary_id)),
            )
            return cur.rowcount > 0

    def list_views(self, salary_filter: SalaryFilter) -> Sequence[SalaryView]:
        clauses: list[str] = []
        params: list[object] = []

        if salary_filter.employee_id is not None:
            clauses.append("s.employee_id=%s")
            params.append(int(salary_filter.employee_id))
        if salary_filter.payment_status is not None:
            clauses.append("s.payment_status=%s")
            params.append(salary_filter.payment_status.value)
        if salary_filter.start_date is not None:
            clauses.append("s.period_start >= %s")
            params.append(salary_filter.start_date)
        if salary_filter.end_date is not None:
            clauses.append("s.period_start <= %s")
            params.append(salary_filter.end_date)
        if salary_filter.department_id is not None:
            clauses.append("e.department_id=%s")
            params.append(int(salary_filter.department_id))
        if salary_filter.contract_type is not None:
            clauses.append("e.contract_type=%s")
            params.append(salary_filter.contract_type.value)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS},
                    e.employee_code, e.full_name, e.department_id, e.contract_type,
                    d.department_name
                FROM salaries s
                JOIN employees e ON e.employee_id = s.employee_id
                LEFT JOIN departments d ON d.department_id = e.department_id
                {where}
                ORDER BY s.period_start DESC, e.full_name ASC
                """,
                tuple(params),
            )
            return [
                SalaryView(
                    salary=_row_to_salary(r),
                    employee_code=r["employee_code"],
                    full_name=r["full_name"],
                    department_id=int(r["department_id"]),
                    department_name=r.get("department_name"),
                    contract_type=ContractType(r["contract_type"]),
                )
                for r in fetchall(cur)
            ]
