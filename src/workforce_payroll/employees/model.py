from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ContractType


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee as seen by payroll.

    Note: department and contract type together select the salary rate.
    """

    employee_id: int
    employee_code: str
    full_name: str
    department_id: int
    contract_type: ContractType
    shift_id: Optional[int] = None
    contract_end_date: Optional[date] = None
    is_active: bool = True
    department_name: Optional[str] = None

    def is_payable_for(self, period_start: date) -> bool:
        """Active, and the contract has not ended before the period starts."""
        if not self.is_active:
            return False
        return self.contract_end_date is None or self.contract_end_date >= period_start
