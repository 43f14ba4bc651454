from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..common.numbers import to_decimal
from ..core.enums import ContractType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SalaryRate
from .repository import SalaryRateRepository

_COLUMNS = """
    rate_id, department_id, contract_type,
    main_work_hour_rate, regular_overtime_rate, weekly_overtime_rate
"""


def _row_to_rate(r: Dict[str, Any]) -> SalaryRate:
    return SalaryRate(
        rate_id=int(r["rate_id"]),
        department_id=int(r["department_id"]),
        contract_type=ContractType(r["contract_type"]),
        main_work_hour_rate=to_decimal(r["main_work_hour_rate"]),
        regular_overtime_rate=to_decimal(r["regular_overtime_rate"]),
        weekly_overtime_rate=to_decimal(r["weekly_overtime_rate"]),
    )


class MySQLSalaryRateRepository(SalaryRateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, department_id: Optional[int] = None) -> Sequence[SalaryRate]:
        sql = f"SELECT {_COLUMNS} FROM salary_rates"
        params: tuple = ()
        if department_id is not None:
            sql += " WHERE department_id=%s"
            params = (int(department_id),)
        sql += " ORDER BY department_id, contract_type"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_rate(r) for r in fetchall(cur)]

    def get_by_id(self, rate_id: int) -> Optional[SalaryRate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salary_rates WHERE rate_id=%s", (int(rate_id),))
            r = fetchone(cur)
            return _row_to_rate(r) if r else None

    def find(self, *, department_id: int, contract_type: ContractType) -> Optional[SalaryRate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM salary_rates WHERE department_id=%s AND contract_type=%s",
                (int(department_id), contract_type.value),
            )
            r = fetchone(cur)
            return _row_to_rate(r) if r else None

    def exists(self, *, department_id: int, contract_type: ContractType, exclude_id: Optional[int] = None) -> bool:
        sql = "SELECT COUNT(*) AS n FROM salary_rates WHERE department_id=%s AND contract_type=%s"
        params: list[object] = [int(department_id), contract_type.value]
        if exclude_id is not None:
            sql += " AND rate_id<>%s"
            params.append(int(exclude_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            r = fetchone(cur)
            return bool(r and int(r["n"]) > 0)

    def create(self, rate: SalaryRate) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_rates(
                    department_id, contract_type, main_work_hour_rate, regular_overtime_rate, weekly_overtime_rate
                )
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    int(rate.department_id),
                    rate.contract_type.value,
                    rate.main_work_hour_rate,
                    rate.regular_overtime_rate,
                    rate.weekly_overtime_rate,
                ),
            )
            return int(cur.lastrowid)

    def update(self, rate: SalaryRate) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE salary_rates
                SET department_id=%s, contract_type=%s,
                    main_work_hour_rate=%s, regular_overtime_rate=%s, weekly_overtime_rate=%s
                WHERE rate_id=%s
                """,
                (
                    int(rate.department_id),
                    rate.contract_type.value,
                    rate.main_work_hour_rate,
                    rate.regular_overtime_rate,
                    rate.weekly_overtime_rate,
                    int(rate.rate_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, rate_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salary_rates WHERE rate_id=%s", (int(rate_id),))
            return cur.rowcount > 0
