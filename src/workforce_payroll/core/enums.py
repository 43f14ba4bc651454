from __future__ import annotations

from enum import Enum


class ShiftType(str, Enum):
    """Kind of shift a schedule belongs to."""

    NON_SHIFT = "NON_SHIFT"
    SHIFT_A = "SHIFT_A"
    SHIFT_B = "SHIFT_B"


class ContractType(str, Enum):
    """Employment contract; together with the department it selects a salary rate."""

    PERMANENT = "PERMANENT"
    TRAINING = "TRAINING"


class AttendanceStatus(str, Enum):
    """Normalized attendance status stored in the database."""

    IN_PROGRESS = "IN_PROGRESS"
    PRESENT = "PRESENT"
    LATE = "LATE"
    EARLY_LEAVE = "EARLY_LEAVE"
    ABSENT = "ABSENT"


class PaymentStatus(str, Enum):
    UNPAID = "UNPAID"
    PAID = "PAID"


class UpsertOutcome(str, Enum):
    """Result of writing one salary line for an (employee, period) key."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    PAID_CONFLICT = "PAID_CONFLICT"
    EXISTING_CONFLICT = "EXISTING_CONFLICT"


class IssueKind(str, Enum):
    """Why an employee was skipped during a payroll run."""

    EMPLOYEE_NOT_FOUND = "EMPLOYEE_NOT_FOUND"
    RATE_NOT_FOUND = "RATE_NOT_FOUND"
    PAID_CONFLICT = "PAID_CONFLICT"
    EXISTING_SALARY = "EXISTING_SALARY"
    PERIOD_OVERLAP = "PERIOD_OVERLAP"
