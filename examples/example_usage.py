"""Example: use the engine directly, without Flask or a database.

Classifies one worked day against a shift and prices a month of such days.
"""

from datetime import datetime, time
from decimal import Decimal

from workforce_payroll.attendance.classifier import WorkHourClassifier
from workforce_payroll.core.enums import ContractType
from workforce_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator
from workforce_payroll.payroll.model import HourTotals, SalaryRate
from workforce_payroll.shifts.model import ShiftSchedule


def main():
    shift = ShiftSchedule(
        shift_id=1,
        shift_name="Office day",
        main_work_start=time(8, 0),
        main_work_end=time(16, 0),
        lunch_break_start=time(12, 0),
        lunch_break_end=time(13, 0),
        regular_overtime_start=time(16, 0),
        regular_overtime_end=time(18, 0),
    ).validate()

    day = WorkHourClassifier().classify(datetime(2025, 1, 6, 8, 0), datetime(2025, 1, 6, 17, 0), shift)
    print(day)

    rate = SalaryRate(
        rate_id=1,
        department_id=1,
        contract_type=ContractType.PERMANENT,
        main_work_hour_rate=Decimal("20000"),
        regular_overtime_rate=Decimal("30000"),
        weekly_overtime_rate=Decimal("40000"),
    )
    month = HourTotals(
        main_work_hours=day.main_hours * 20,
        regular_overtime_hours=day.regular_overtime_hours * 20,
        weekly_overtime_hours=day.weekly_overtime_hours * 20,
    )
    print(StandardPayrollCalculator().amounts(month, rate))


if __name__ == "__main__":
    main()
