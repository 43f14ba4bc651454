from __future__ import annotations

from ...common.numbers import round_money
from ..model import HourTotals, SalaryAmounts, SalaryRate
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: every hour bucket times its own hourly rate, no allowances."""

    def amounts(self, hours: HourTotals, rate: SalaryRate) -> SalaryAmounts:
        base = round_money(hours.main_work_hours * rate.main_work_hour_rate)
        overtime = round_money(hours.regular_overtime_hours * rate.regular_overtime_rate)
        weekly = round_money(hours.weekly_overtime_hours * rate.weekly_overtime_rate)
        return SalaryAmounts(
            base_salary=base,
            overtime_salary=overtime,
            weekly_overtime_salary=weekly,
            total_salary=base + overtime + weekly,
        )
