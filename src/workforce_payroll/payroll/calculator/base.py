from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import HourTotals, SalaryAmounts, SalaryRate


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def amounts(self, hours: HourTotals, rate: SalaryRate) -> SalaryAmounts:
        raise NotImplementedError
