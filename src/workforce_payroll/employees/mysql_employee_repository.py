from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ContractType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_SELECT = """
    SELECT
        e.employee_id, e.employee_code, e.full_name, e.department_id,
        e.contract_type, e.shift_id, e.contract_end_date, e.is_active,
        d.department_name
    FROM employees e
    LEFT JOIN departments d ON d.department_id = e.department_id
"""


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        employee_code=r["employee_code"],
        full_name=r["full_name"],
        department_id=int(r["department_id"]),
        contract_type=ContractType(r["contract_type"]),
        shift_id=int(r["shift_id"]) if r.get("shift_id") else None,
        contract_end_date=r.get("contract_end_date"),
        is_active=bool(r.get("is_active", 1)),
        department_name=r.get("department_name"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def list_for_payroll(self, *, period_start: date, department_id: Optional[int] = None) -> Sequence[Employee]:
        clauses = ["e.is_active=1", "(e.contract_end_date IS NULL OR e.contract_end_date >= %s)"]
        params: list[object] = [period_start]
        if department_id is not None:
            clauses.append("e.department_id=%s")
            params.append(int(department_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + f" WHERE {where} ORDER BY e.full_name ASC, e.employee_id ASC", tuple(params))
            return [_row_to_employee(r) for r in fetchall(cur)]
