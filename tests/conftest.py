from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

import pytest

from workforce_payroll.attendance.model import ZERO_HOURS, AttendanceRecord
from workforce_payroll.container import PayrollSettings, wire_container
from workforce_payroll.core.enums import AttendanceStatus, ContractType, PaymentStatus, UpsertOutcome
from workforce_payroll.employees.model import Employee
from workforce_payroll.payroll.model import Salary, SalaryFilter, SalaryRate, SalaryView, UpsertResult
from workforce_payroll.shifts.model import ShiftSchedule


class InMemoryEmployees:
    def __init__(self, employees=()):
        self.by_id: dict[int, Employee] = {e.employee_id: e for e in employees}

    def add(self, employee: Employee) -> Employee:
        self.by_id[employee.employee_id] = employee
        return employee

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(int(employee_id))

    def list_for_payroll(self, *, period_start: date, department_id: Optional[int] = None):
        items = [
            e
            for e in self.by_id.values()
            if e.is_payable_for(period_start) and (department_id is None or e.department_id == department_id)
        ]
        items.sort(key=lambda e: (e.full_name, e.employee_id))
        return items


class InMemoryShifts:
    def __init__(self, shifts=()):
        self.by_id: dict[int, ShiftSchedule] = {s.shift_id: s for s in shifts}

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda s: s.shift_id)

    def get_by_id(self, shift_id: int) -> Optional[ShiftSchedule]:
        return self.by_id.get(int(shift_id))

    def create(self, shift: ShiftSchedule) -> int:
        new_id = max(self.by_id, default=0) + 1
        self.by_id[new_id] = replace(shift, shift_id=new_id)
        return new_id

    def update(self, shift: ShiftSchedule) -> bool:
        if shift.shift_id not in self.by_id:
            return False
        self.by_id[shift.shift_id] = shift
        return True


class InMemoryAttendance:
    def __init__(self):
        self.by_id: dict[int, AttendanceRecord] = {}
        self._id = 0

    def add_day(
        self,
        employee_id: int,
        attendance_date: date,
        *,
        main: str = "8",
        regular: str = "0",
        weekly: str = "0",
        status: AttendanceStatus = AttendanceStatus.PRESENT,
    ) -> AttendanceRecord:
        """Store an already-classified day."""
        self._id += 1
        rec = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            attendance_date=attendance_date,
            check_in_time=datetime.combine(attendance_date, time(8, 0)),
            check_out_time=datetime.combine(attendance_date, time(17, 0)),
            status=status,
            main_work_hours=Decimal(main),
            regular_overtime_hours=Decimal(regular),
            weekly_overtime_hours=Decimal(weekly),
        )
        self.by_id[rec.attendance_id] = rec
        return rec

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self.by_id.get(int(attendance_id))

    def get_recent_for_employee(self, employee_id: int, limit: int):
        items = [r for r in self.by_id.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.check_in_time, reverse=True)
        return items[:limit]

    def get_for_employee_and_date(self, employee_id: int, attendance_date: date) -> Optional[AttendanceRecord]:
        for r in self.by_id.values():
            if r.employee_id == employee_id and r.attendance_date == attendance_date:
                return r
        return None

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        items = [r for r in self.by_id.values() if r.employee_id == employee_id and r.check_out_time is None]
        items.sort(key=lambda r: r.check_in_time, reverse=True)
        return items[0] if items else None

    def list_for_employee(self, employee_id: int, *, start_date: date, end_date: date):
        return sorted(
            (
                r
                for r in self.by_id.values()
                if r.employee_id == employee_id and start_date <= r.attendance_date <= end_date
            ),
            key=lambda r: r.attendance_date,
        )

    def create_checkin(self, *, employee_id, attendance_date, check_in_time, status, note=None) -> int:
        self._id += 1
        self.by_id[self._id] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            attendance_date=attendance_date,
            check_in_time=check_in_time,
            check_out_time=None,
            status=status,
            note=note,
        )
        return self._id

    def update_checkout(self, *, attendance_id, check_out_time, status, hours, note=None) -> bool:
        rec = self.by_id.get(attendance_id)
        if rec is None or rec.check_out_time is not None:
            return False
        self.by_id[attendance_id] = replace(
            rec,
            check_out_time=check_out_time,
            status=status,
            main_work_hours=hours.main_hours,
            regular_overtime_hours=hours.regular_overtime_hours,
            weekly_overtime_hours=hours.weekly_overtime_hours,
            uncovered_hours=hours.uncovered_hours,
            note=note,
        )
        return True

    def admin_update_record(self, *, attendance_id, check_in_time, check_out_time, status, hours, note=None) -> bool:
        rec = self.by_id.get(attendance_id)
        if rec is None:
            return False
        self.by_id[attendance_id] = replace(
            rec,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            status=status,
            main_work_hours=hours.main_hours if hours else ZERO_HOURS,
            regular_overtime_hours=hours.regular_overtime_hours if hours else ZERO_HOURS,
            weekly_overtime_hours=hours.weekly_overtime_hours if hours else ZERO_HOURS,
            uncovered_hours=hours.uncovered_hours if hours else ZERO_HOURS,
            note=note,
        )
        return True


class InMemorySalaryRates:
    def __init__(self):
        self.by_id: dict[int, SalaryRate] = {}

    def add(self, department_id: int, contract_type: ContractType, main: str, regular: str, weekly: str) -> SalaryRate:
        rate = SalaryRate(
            rate_id=0,
            department_id=department_id,
            contract_type=contract_type,
            main_work_hour_rate=Decimal(main),
            regular_overtime_rate=Decimal(regular),
            weekly_overtime_rate=Decimal(weekly),
        )
        return replace(rate, rate_id=self.create(rate))

    def list_all(self, *, department_id: Optional[int] = None):
        return [r for r in self.by_id.values() if department_id is None or r.department_id == department_id]

    def get_by_id(self, rate_id: int) -> Optional[SalaryRate]:
        return self.by_id.get(int(rate_id))

    def find(self, *, department_id: int, contract_type: ContractType) -> Optional[SalaryRate]:
        for r in self.by_id.values():
            if r.department_id == department_id and r.contract_type == contract_type:
                return r
        return None

    def exists(self, *, department_id, contract_type, exclude_id=None) -> bool:
        found = self.find(department_id=department_id, contract_type=contract_type)
        return found is not None and found.rate_id != exclude_id

    def create(self, rate: SalaryRate) -> int:
        new_id = max(self.by_id, default=0) + 1
        self.by_id[new_id] = replace(rate, rate_id=new_id)
        return new_id

    def update(self, rate: SalaryRate) -> bool:
        if rate.rate_id not in self.by_id:
            return False
        self.by_id[rate.rate_id] = rate
        return True

    def delete(self, rate_id: int) -> bool:
        return self.by_id.pop(int(rate_id), None) is not None


class InMemorySalaries:
    """Mirrors the MySQL upsert: keyed by (employee, period), PAID rows are never written."""

    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.by_id: dict[int, Salary] = {}
        self._id = 0

    def add(self, salary: Salary) -> Salary:
        self._id = max(self._id, salary.salary_id)
        self.by_id[salary.salary_id] = salary
        return salary

    def get_by_id(self, salary_id: int) -> Optional[Salary]:
        return self.by_id.get(int(salary_id))

    def lookup(self, *, employee_id, period_start, period_end) -> Optional[Salary]:
        for s in self.by_id.values():
            if (s.employee_id, s.period_start, s.period_end) == (employee_id, period_start, period_end):
                return s
        return None

    def list_overlapping(self, *, employee_id, period_start, period_end):
        return [
            s
            for s in self.by_id.values()
            if s.employee_id == employee_id and s.period_start <= period_end and period_start <= s.period_end
        ]

    def list_unpaid_for_employee(self, employee_id: int):
        return [s for s in self.by_id.values() if s.employee_id == employee_id and not s.is_paid]

    def upsert_line(self, line, *, overwrite_unpaid: bool = True) -> UpsertResult:
        values = dict(
            main_work_hours=line.hours.main_work_hours,
            regular_overtime_hours=line.hours.regular_overtime_hours,
            weekly_overtime_hours=line.hours.weekly_overtime_hours,
            base_salary=line.amounts.base_salary,
            overtime_salary=line.amounts.overtime_salary,
            weekly_overtime_salary=line.amounts.weekly_overtime_salary,
            total_salary=line.amounts.total_salary,
        )
        existing = self.lookup(
            employee_id=line.employee_id, period_start=line.period_start, period_end=line.period_end
        )
        if existing is None:
            self._id += 1
            salary = Salary(
                salary_id=self._id,
                employee_id=line.employee_id,
                period_start=line.period_start,
                period_end=line.period_end,
                **values,
            )
            self.by_id[salary.salary_id] = salary
            return UpsertResult(outcome=UpsertOutcome.CREATED, salary=salary)
        if existing.is_paid:
            return UpsertResult(outcome=UpsertOutcome.PAID_CONFLICT, salary=existing)
        if not overwrite_unpaid:
            return UpsertResult(outcome=UpsertOutcome.EXISTING_CONFLICT, salary=existing)
        updated = replace(existing, **values)
        self.by_id[existing.salary_id] = updated
        return UpsertResult(outcome=UpsertOutcome.UPDATED, salary=updated)

    def mark_paid(self, salary_ids, *, payment_date: date) -> int:
        count = 0
        for salary_id in salary_ids:
            s = self.by_id.get(int(salary_id))
            if s is not None and not s.is_paid:
                self.by_id[s.salary_id] = replace(s, payment_status=PaymentStatus.PAID, payment_date=payment_date)
                count += 1
        return count

    def set_payment_status(self, salary_id: int, *, status: PaymentStatus, payment_date) -> bool:
        s = self.by_id.get(int(salary_id))
        if s is None:
            return False
        self.by_id[s.salary_id] = replace(s, payment_status=status, payment_date=payment_date)
        return True

    def list_views(self, salary_filter: SalaryFilter):
        f = salary_filter
        views = []
        for s in sorted(self.by_id.values(), key=lambda s: (s.period_start, s.salary_id)):
            e = self._employees.get_by_id(s.employee_id)
            if e is None:
                continue
            if f.employee_id is not None and s.employee_id != f.employee_id:
                continue
            if f.payment_status is not None and s.payment_status != f.payment_status:
                continue
            if f.start_date is not None and s.period_start < f.start_date:
                continue
            if f.end_date is not None and s.period_start > f.end_date:
                continue
            if f.department_id is not None and e.department_id != f.department_id:
                continue
            if f.contract_type is not None and e.contract_type != f.contract_type:
                continue
            views.append(
                SalaryView(
                    salary=s,
                    employee_code=e.employee_code,
                    full_name=e.full_name,
                    department_id=e.department_id,
                    department_name=e.department_name,
                    contract_type=e.contract_type,
                )
            )
        return views


OFFICE_SHIFT = ShiftSchedule(
    shift_id=1,
    shift_name="Office day",
    main_work_start=time(8, 0),
    main_work_end=time(16, 0),
    lunch_break_start=time(12, 0),
    lunch_break_end=time(13, 0),
    regular_overtime_start=time(16, 0),
    regular_overtime_end=time(18, 0),
    weekly_overtime_start=time(18, 0),
    weekly_overtime_end=time(22, 0),
)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 1, 6, 8, 0, 0)


@pytest.fixture
def office_shift() -> ShiftSchedule:
    return OFFICE_SHIFT


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            Employee(
                employee_id=1,
                employee_code="EMP001",
                full_name="An Nguyen",
                department_id=10,
                contract_type=ContractType.PERMANENT,
                shift_id=1,
                department_name="Production",
            ),
            Employee(
                employee_id=2,
                employee_code="EMP002",
                full_name="Binh Tran",
                department_id=10,
                contract_type=ContractType.TRAINING,
                shift_id=1,
                department_name="Production",
            ),
            Employee(
                employee_id=3,
                employee_code="EMP003",
                full_name="Cuong Le",
                department_id=20,
                contract_type=ContractType.PERMANENT,
                shift_id=1,
                department_name="Warehouse",
            ),
        ]
    )


@pytest.fixture
def shifts(office_shift) -> InMemoryShifts:
    return InMemoryShifts([office_shift])


@pytest.fixture
def attendance() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def rates() -> InMemorySalaryRates:
    repo = InMemorySalaryRates()
    repo.add(10, ContractType.PERMANENT, "20000", "30000", "40000")
    repo.add(20, ContractType.PERMANENT, "18000", "27000", "36000")
    return repo


@pytest.fixture
def salaries(employees) -> InMemorySalaries:
    return InMemorySalaries(employees)


@pytest.fixture
def payroll_settings() -> PayrollSettings:
    return PayrollSettings()


@pytest.fixture
def container(employees, shifts, attendance, rates, salaries, payroll_settings):
    return wire_container(
        employees_repo=employees,
        shifts_repo=shifts,
        attendance_repo=attendance,
        salary_rates_repo=rates,
        salaries_repo=salaries,
        payroll_settings=payroll_settings,
    )
