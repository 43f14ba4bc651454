from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Employee directory used by attendance and payroll.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def list_for_payroll(self, *, period_start: date, department_id: Optional[int] = None) -> Sequence[Employee]:
        """Employees whose contract is still running at ``period_start``."""

        raise NotImplementedError
