from __future__ import annotations

from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.validators import require_date_range
from ..core.exceptions import EmployeeNotFound
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import HourTotals, SalaryLine
from .rates import RateResolver


class SalaryAggregator:
    """Sum an employee's stored attendance buckets over a period and price them.

    The per-day buckets were classified at check-out time; they are trusted
    as stored and not re-derived here. Nothing is persisted.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        rates: RateResolver,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._rates = rates
        self._calculator = calculator or StandardPayrollCalculator()

    def aggregate(
        self,
        employee_id: int,
        period_start: date,
        period_end: date,
        *,
        employee: Optional[Employee] = None,
    ) -> SalaryLine:
        require_date_range(period_start, period_end)

        employee = employee or self._employees.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFound(employee_id)

        records = self._attendance.list_for_employee(employee_id, start_date=period_start, end_date=period_end)
        hours = HourTotals()
        days = 0
        for record in records:
            if not (period_start <= record.attendance_date <= period_end):
                continue
            hours = hours + HourTotals(
                main_work_hours=record.main_work_hours,
                regular_overtime_hours=record.regular_overtime_hours,
                weekly_overtime_hours=record.weekly_overtime_hours,
            )
            if record.check_out_time is not None:
                days += 1

        rate = self._rates.resolve(employee.department_id, employee.contract_type)
        return SalaryLine(
            employee_id=employee_id,
            period_start=period_start,
            period_end=period_end,
            department_id=employee.department_id,
            contract_type=employee.contract_type,
            hours=hours,
            amounts=self._calculator.amounts(hours, rate),
            attendance_days=days,
        )
