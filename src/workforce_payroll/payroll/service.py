from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Sequence

from ..common.numbers import round_money
from ..common.validators import require_date_range
from ..core.enums import PaymentStatus
from ..core.exceptions import SalaryNotFound
from .model import Salary, SalaryFilter, SalaryView
from .repository import SalaryRepository


@dataclass(frozen=True)
class DepartmentBreakdown:
    department_name: str
    count: int
    total_amount: Decimal
    average_salary: Decimal


@dataclass(frozen=True)
class SalaryStatistics:
    total_employees: int
    total_salary_amount: Decimal
    paid_salaries: int
    unpaid_salaries: int
    department_breakdown: dict[str, DepartmentBreakdown] = field(default_factory=dict)


EXPORT_COLUMNS = [
    "Employee Code",
    "Employee Name",
    "Department",
    "Contract Type",
    "Period Start",
    "Period End",
    "Main Work Hours",
    "Regular Overtime Hours",
    "Weekly Overtime Hours",
    "Base Salary",
    "Overtime Salary",
    "Weekly Overtime Salary",
    "Total Salary",
    "Payment Status",
    "Payment Date",
]


class PayrollReportService:
    """Read side of payroll: listings, statistics and export rows."""

    def __init__(self, salaries: SalaryRepository):
        self._salaries = salaries

    def get_salary(self, salary_id: int) -> Salary:
        salary = self._salaries.get_by_id(int(salary_id))
        if salary is None:
            raise SalaryNotFound(salary_id)
        return salary

    def list_salaries(self, salary_filter: SalaryFilter | None = None) -> Sequence[SalaryView]:
        salary_filter = salary_filter or SalaryFilter()
        if salary_filter.start_date and salary_filter.end_date:
            require_date_range(salary_filter.start_date, salary_filter.end_date)
        return self._salaries.list_views(salary_filter)

    def statistics(self, *, start: date, end: date) -> SalaryStatistics:
        require_date_range(start, end)
        views = self._salaries.list_views(SalaryFilter(start_date=start, end_date=end))

        total = Decimal("0")
        paid = 0
        per_dept: dict[str, list[Decimal]] = {}
        for v in views:
            total += v.salary.total_salary
            if v.salary.payment_status == PaymentStatus.PAID:
                paid += 1
            per_dept.setdefault(v.department_name or "-", []).append(v.salary.total_salary)

        breakdown = {}
        for name, amounts in per_dept.items():
            dept_total = sum(amounts, Decimal("0"))
            breakdown[name] = DepartmentBreakdown(
                department_name=name,
                count=len(amounts),
                total_amount=dept_total,
                average_salary=round_money(dept_total / len(amounts)),
            )

        return SalaryStatistics(
            total_employees=len(views),
            total_salary_amount=total,
            paid_salaries=paid,
            unpaid_salaries=len(views) - paid,
            department_breakdown=breakdown,
        )

    def export_rows(self, salary_filter: SalaryFilter | None = None) -> list[dict]:
        """Flat rows keyed by ``EXPORT_COLUMNS``; file formatting is the caller's job."""
        rows: list[dict] = []
        for v in self.list_salaries(salary_filter):
            s = v.salary
            rows.append(
                {
                    "Employee Code": v.employee_code,
                    "Employee Name": v.full_name,
                    "Department": v.department_name or "-",
                    "Contract Type": v.contract_type.value,
                    "Period Start": s.period_start.strftime("%Y-%m-%d"),
                    "Period End": s.period_end.strftime("%Y-%m-%d"),
                    "Main Work Hours": s.main_work_hours,
                    "Regular Overtime Hours": s.regular_overtime_hours,
                    "Weekly Overtime Hours": s.weekly_overtime_hours,
                    "Base Salary": s.base_salary,
                    "Overtime Salary": s.overtime_salary,
                    "Weekly Overtime Salary": s.weekly_overtime_salary,
                    "Total Salary": s.total_salary,
                    "Payment Status": "Paid" if s.is_paid else "Unpaid",
                    "Payment Date": s.payment_date.strftime("%Y-%m-%d") if s.payment_date else "",
                }
            )
        return rows
