from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import ContractType, PaymentStatus
from .model import Salary, SalaryFilter, SalaryLine, SalaryRate, SalaryView, UpsertResult


class SalaryRateRepository(Protocol):
    def list_all(self, *, department_id: Optional[int] = None) -> Sequence[SalaryRate]:
        raise NotImplementedError

    def get_by_id(self, rate_id: int) -> Optional[SalaryRate]:
        raise NotImplementedError

    def find(self, *, department_id: int, contract_type: ContractType) -> Optional[SalaryRate]:
        raise NotImplementedError

    def exists(self, *, department_id: int, contract_type: ContractType, exclude_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def create(self, rate: SalaryRate) -> int:
        raise NotImplementedError

    def update(self, rate: SalaryRate) -> bool:
        raise NotImplementedError

    def delete(self, rate_id: int) -> bool:
        raise NotImplementedError


class SalaryRepository(Protocol):
    def get_by_id(self, salary_id: int) -> Optional[Salary]:
        raise NotImplementedError

    def list_overlapping(self, *, employee_id: int, period_start: date, period_end: date) -> Sequence[Salary]:
        """Salaries of the employee whose period intersects [period_start, period_end]."""

        raise NotImplementedError

    def list_unpaid_for_employee(self, employee_id: int) -> Sequence[Salary]:
        raise NotImplementedError

    def upsert_line(self, line: SalaryLine, *, overwrite_unpaid: bool = True) -> UpsertResult:
        """Create or update the salary for (employee, period) atomically.

        Must never modify a PAID row; returns PAID_CONFLICT instead. With
        ``overwrite_unpaid=False`` an existing UNPAID row is left alone and
        EXISTING_CONFLICT is returned.
        """

        raise NotImplementedError

    def mark_paid(self, salary_ids: Iterable[int], *, payment_date: date) -> int:
        """Transition UNPAID rows to PAID. Returns the number of rows transitioned."""

        raise NotImplementedError

    def set_payment_status(self, salary_id: int, *, status: PaymentStatus, payment_date: Optional[date]) -> bool:
        raise NotImplementedError

    def list_views(self, salary_filter: SalaryFilter) -> Sequence[SalaryView]:
        raise NotImplementedError
