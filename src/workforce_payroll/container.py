from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.classifier import WorkHourClassifier
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_LATE_GRACE_MINUTES, REGENERATION_OVERWRITE_UNPAID
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .payroll.aggregator import SalaryAggregator
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_salary_rate_repository import MySQLSalaryRateRepository
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.payments import PaymentProcessor
from .payroll.rates import RateResolver, SalaryRateService
from .payroll.repository import SalaryRateRepository, SalaryRepository
from .payroll.runner import PayrollRunner
from .payroll.service import PayrollReportService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService


@dataclass(frozen=True)
class PayrollSettings:
    """Policy values read from the settings module and passed down explicitly."""

    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    regeneration_policy: str = REGENERATION_OVERWRITE_UNPAID

    @classmethod
    def from_settings(cls, settings: Any) -> "PayrollSettings":
        return cls(
            late_grace_minutes=int(getattr(settings, "LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES)),
            regeneration_policy=str(getattr(settings, "SALARY_REGENERATION_POLICY", REGENERATION_OVERWRITE_UNPAID)),
        )


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    settings: PayrollSettings

    employees_repo: EmployeeRepository
    shifts_repo: ShiftRepository
    attendance_repo: AttendanceRepository
    salary_rates_repo: SalaryRateRepository
    salaries_repo: SalaryRepository

    shift_service: ShiftService
    attendance_service: AttendanceService
    salary_rate_service: SalaryRateService
    payroll_runner: PayrollRunner
    payment_processor: PaymentProcessor
    payroll_report_service: PayrollReportService


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    shifts_repo: ShiftRepository,
    attendance_repo: AttendanceRepository,
    salary_rates_repo: SalaryRateRepository,
    salaries_repo: SalaryRepository,
    payroll_settings: Optional[PayrollSettings] = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build every service on top of the given repositories."""
    settings = payroll_settings or PayrollSettings()

    aggregator = SalaryAggregator(
        attendance_repo,
        employees_repo,
        RateResolver(salary_rates_repo),
        calculator=StandardPayrollCalculator(),
    )

    return Container(
        conn=conn,
        settings=settings,
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        attendance_repo=attendance_repo,
        salary_rates_repo=salary_rates_repo,
        salaries_repo=salaries_repo,
        shift_service=ShiftService(shifts_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            employees_repo,
            shifts_repo,
            classifier=WorkHourClassifier(),
            strategy_factory=AttendanceStrategyFactory(),
            grace_minutes=settings.late_grace_minutes,
        ),
        salary_rate_service=SalaryRateService(salary_rates_repo),
        payroll_runner=PayrollRunner(
            employees_repo,
            salaries_repo,
            aggregator,
            regeneration_policy=settings.regeneration_policy,
        ),
        payment_processor=PaymentProcessor(salaries_repo),
        payroll_report_service=PayrollReportService(salaries_repo),
    )


def build_container(
    *,
    db_config: Mapping[str, Any],
    payroll_settings: Optional[PayrollSettings] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        salary_rates_repo=MySQLSalaryRateRepository(conn),
        salaries_repo=MySQLSalaryRepository(conn),
        payroll_settings=payroll_settings,
        conn=conn,
    )
