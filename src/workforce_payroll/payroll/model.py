from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ContractType, IssueKind, PaymentStatus, UpsertOutcome

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class SalaryRate:
    """Hourly rates for one (department, contract type) pair."""

    rate_id: int
    department_id: int
    contract_type: ContractType
    main_work_hour_rate: Decimal
    regular_overtime_rate: Decimal
    weekly_overtime_rate: Decimal


@dataclass(frozen=True)
class HourTotals:
    main_work_hours: Decimal = ZERO
    regular_overtime_hours: Decimal = ZERO
    weekly_overtime_hours: Decimal = ZERO

    def __add__(self, other: "HourTotals") -> "HourTotals":
        return HourTotals(
            main_work_hours=self.main_work_hours + other.main_work_hours,
            regular_overtime_hours=self.regular_overtime_hours + other.regular_overtime_hours,
            weekly_overtime_hours=self.weekly_overtime_hours + other.weekly_overtime_hours,
        )


@dataclass(frozen=True)
class SalaryAmounts:
    base_salary: Decimal
    overtime_salary: Decimal
    weekly_overtime_salary: Decimal
    total_salary: Decimal


@dataclass(frozen=True)
class SalaryLine:
    """Computed (not yet persisted) salary of one employee for one period."""

    employee_id: int
    period_start: date
    period_end: date
    department_id: int
    contract_type: ContractType
    hours: HourTotals
    amounts: SalaryAmounts
    attendance_days: int = 0

    @property
    def total_salary(self) -> Decimal:
        return self.amounts.total_salary


@dataclass(frozen=True)
class Salary:
    """Persisted salary; unique per (employee_id, period_start, period_end).

    Note: ``payment_date`` is set if and only if the salary is PAID.
    """

    salary_id: int
    employee_id: int
    period_start: date
    period_end: date
    main_work_hours: Decimal
    regular_overtime_hours: Decimal
    weekly_overtime_hours: Decimal
    base_salary: Decimal
    overtime_salary: Decimal
    weekly_overtime_salary: Decimal
    total_salary: Decimal
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    payment_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID


@dataclass(frozen=True)
class SalaryView:
    """Read-model for listings/exports: salary joined with employee info."""

    salary: Salary
    employee_code: str
    full_name: str
    department_id: int
    department_name: Optional[str]
    contract_type: ContractType


@dataclass(frozen=True)
class SalaryFilter:
    department_id: Optional[int] = None
    contract_type: Optional[ContractType] = None
    payment_status: Optional[PaymentStatus] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    employee_id: Optional[int] = None


@dataclass(frozen=True)
class UpsertResult:
    outcome: UpsertOutcome
    salary: Optional[Salary] = None


@dataclass(frozen=True)
class PayrollIssue:
    employee_id: int
    kind: IssueKind
    message: str


@dataclass
class PayrollRunResult:
    period_start: date
    period_end: date
    salaries: list[Salary] = field(default_factory=list)
    issues: list[PayrollIssue] = field(default_factory=list)
    created: int = 0
    updated: int = 0

    @property
    def conflicts(self) -> list[PayrollIssue]:
        return [i for i in self.issues if i.kind in (IssueKind.PAID_CONFLICT, IssueKind.EXISTING_SALARY, IssueKind.PERIOD_OVERLAP)]

    @property
    def errors(self) -> list[PayrollIssue]:
        return [i for i in self.issues if i not in self.conflicts]


@dataclass(frozen=True)
class PaymentResult:
    updated_count: int
    payment_date: date
