from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidAttendanceWindow(ValidationError):
    """Raised when a check-out is not strictly after its check-in."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    entity = "Entity"

    def __init__(self, identifier: Any, message: Optional[str] = None):
        self.identifier = identifier
        super().__init__(message or f"{self.entity} {identifier!r} not found")


class EmployeeNotFound(NotFoundError):
    entity = "Employee"


class ShiftNotFound(NotFoundError):
    entity = "Shift"


class AttendanceNotFound(NotFoundError):
    entity = "Attendance record"


class SalaryNotFound(NotFoundError):
    entity = "Salary"


class SalaryRateNotFound(NotFoundError):
    entity = "Salary rate"


class RateNotFound(NotFoundError):
    """No salary rate row exists for a (department, contract type) pair."""

    entity = "Salary rate"

    def __init__(self, department_id: int, contract_type: Any):
        self.department_id = department_id
        self.contract_type = contract_type
        contract = getattr(contract_type, "value", contract_type)
        super().__init__(
            (department_id, contract),
            f"No salary rate for department {department_id} with contract type {contract}",
        )


class ConflictError(DomainError):
    """Raised when a write would duplicate or overwrite protected data."""


class PaidSalaryConflict(ConflictError):
    """Raised when regeneration would overwrite a salary that is already PAID."""


class ExistingSalaryConflict(ConflictError):
    """Raised when a salary for the period exists and regeneration may not replace it."""


class PeriodOverlapConflict(ConflictError):
    """Raised when another salary of the employee covers part of the requested period."""
