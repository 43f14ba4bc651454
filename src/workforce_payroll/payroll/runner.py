from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import month_bounds
from ..common.validators import require_date_range
from ..core.constants import REGENERATION_OVERWRITE_UNPAID, REGENERATION_REJECT_EXISTING
from ..core.enums import IssueKind, UpsertOutcome
from ..core.exceptions import (
    EmployeeNotFound,
    ExistingSalaryConflict,
    PaidSalaryConflict,
    PeriodOverlapConflict,
    RateNotFound,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .aggregator import SalaryAggregator
from .model import PayrollIssue, PayrollRunResult, Salary, UpsertResult
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


class PayrollRunner:
    """Generate and persist salaries for every eligible employee of a period.

    One employee's failure never aborts the batch: it is recorded as a
    ``PayrollIssue`` and the run continues. Each employee is written in its
    own transaction.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        salaries: SalaryRepository,
        aggregator: SalaryAggregator,
        *,
        regeneration_policy: str = REGENERATION_OVERWRITE_UNPAID,
    ):
        if regeneration_policy not in (REGENERATION_OVERWRITE_UNPAID, REGENERATION_REJECT_EXISTING):
            raise ValueError(f"Unknown salary regeneration policy: {regeneration_policy!r}")
        self._employees = employees
        self._salaries = salaries
        self._aggregator = aggregator
        self._overwrite_unpaid = regeneration_policy == REGENERATION_OVERWRITE_UNPAID

    def generate_for_month(self, year: int, month: int, department_id: Optional[int] = None) -> PayrollRunResult:
        if not 1 <= int(month) <= 12:
            raise ValidationError(f"Month must be between 1 and 12, got {month}", field="month")
        if not 1 <= int(year) <= 9999:
            raise ValidationError(f"Invalid year {year}", field="year")
        start, end = month_bounds(int(year), int(month))
        return self.generate_for_period(start, end, department_id)

    def generate_for_period(
        self,
        period_start: date,
        period_end: date,
        department_id: Optional[int] = None,
    ) -> PayrollRunResult:
        require_date_range(period_start, period_end)
        result = PayrollRunResult(period_start=period_start, period_end=period_end)

        employees = self._employees.list_for_payroll(period_start=period_start, department_id=department_id)
        logger.info(
            "Payroll run %s..%s (department=%s): %s employees",
            period_start.isoformat(),
            period_end.isoformat(),
            department_id if department_id is not None else "all",
            len(employees),
        )

        for employee in employees:
            self._process_employee(employee, result)

        logger.info(
            "Payroll run %s..%s finished: created=%s updated=%s issues=%s",
            period_start.isoformat(),
            period_end.isoformat(),
            result.created,
            result.updated,
            len(result.issues),
        )
        return result

    def recalculate_unpaid(self, employee_id: int) -> PayrollRunResult | None:
        """Recompute every UNPAID salary of one employee (e.g. after a contract change).

        Returns ``None`` when the employee has no unpaid salary.
        """
        employee = self._employees.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFound(employee_id)

        unpaid = sorted(self._salaries.list_unpaid_for_employee(employee_id), key=lambda s: s.period_start)
        if not unpaid:
            return None

        result = PayrollRunResult(period_start=unpaid[0].period_start, period_end=unpaid[-1].period_end)
        for salary in unpaid:
            self._write(employee, salary.period_start, salary.period_end, result, overwrite_unpaid=True)
        logger.info("Recalculated %s unpaid salaries for employee %s", result.updated, employee_id)
        return result

    def generate_for_employee(self, employee_id: int, period_start: date, period_end: date) -> Salary:
        """Generate one employee's salary, raising instead of collecting issues.

        Raises ``EmployeeNotFound``, ``RateNotFound``, ``PaidSalaryConflict``
        or ``ConflictError`` (existing salary under ``reject_existing``, or an
        overlapping period).
        """
        require_date_range(period_start, period_end)
        employee = self._employees.get_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFound(employee_id)

        self._ensure_no_overlap(employee, period_start, period_end)
        upsert = self._upsert(employee, period_start, period_end, overwrite_unpaid=self._overwrite_unpaid)
        return upsert.salary

    def _ensure_no_overlap(self, employee: Employee, period_start: date, period_end: date) -> None:
        overlapping = [
            s
            for s in self._salaries.list_overlapping(
                employee_id=employee.employee_id,
                period_start=period_start,
                period_end=period_end,
            )
            if (s.period_start, s.period_end) != (period_start, period_end)
        ]
        if overlapping:
            other = overlapping[0]
            raise PeriodOverlapConflict(
                f"Salary {other.salary_id} already covers {other.period_start.isoformat()}.."
                f"{other.period_end.isoformat()}"
            )

    def _upsert(
        self,
        employee: Employee,
        period_start: date,
        period_end: date,
        *,
        overwrite_unpaid: bool,
    ) -> UpsertResult:
        line = self._aggregator.aggregate(employee.employee_id, period_start, period_end, employee=employee)
        upsert = self._salaries.upsert_line(line, overwrite_unpaid=overwrite_unpaid)

        span = f"{period_start.isoformat()}..{period_end.isoformat()}"
        if upsert.outcome == UpsertOutcome.PAID_CONFLICT:
            raise PaidSalaryConflict(f"Salary for {span} is already paid")
        if upsert.outcome == UpsertOutcome.EXISTING_CONFLICT:
            raise ExistingSalaryConflict(f"Salary for {span} already exists")

        logger.debug(
            "Salary %s for employee %s: total=%s",
            upsert.outcome.value.lower(),
            employee.employee_id,
            line.total_salary,
        )
        return upsert

    def _process_employee(self, employee: Employee, result: PayrollRunResult) -> None:
        try:
            self._ensure_no_overlap(employee, result.period_start, result.period_end)
        except PeriodOverlapConflict as e:
            self._issue(result, employee.employee_id, IssueKind.PERIOD_OVERLAP, str(e))
            return

        self._write(employee, result.period_start, result.period_end, result, overwrite_unpaid=self._overwrite_unpaid)

    def _write(
        self,
        employee: Employee,
        period_start: date,
        period_end: date,
        result: PayrollRunResult,
        *,
        overwrite_unpaid: bool,
    ) -> None:
        try:
            upsert = self._upsert(employee, period_start, period_end, overwrite_unpaid=overwrite_unpaid)
        except RateNotFound as e:
            self._issue(result, employee.employee_id, IssueKind.RATE_NOT_FOUND, str(e))
            return
        except EmployeeNotFound as e:
            self._issue(result, employee.employee_id, IssueKind.EMPLOYEE_NOT_FOUND, str(e))
            return
        except PaidSalaryConflict as e:
            self._issue(result, employee.employee_id, IssueKind.PAID_CONFLICT, str(e))
            return
        except ExistingSalaryConflict as e:
            self._issue(result, employee.employee_id, IssueKind.EXISTING_SALARY, str(e))
            return

        if upsert.outcome == UpsertOutcome.CREATED:
            result.created += 1
        else:
            result.updated += 1
        if upsert.salary is not None:
            result.salaries.append(upsert.salary)

    def _issue(self, result: PayrollRunResult, employee_id: int, kind: IssueKind, message: str) -> None:
        logger.warning("Payroll skipped employee %s (%s): %s", employee_id, kind.value, message)
        result.issues.append(PayrollIssue(employee_id=employee_id, kind=kind, message=message))
