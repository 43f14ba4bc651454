from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional

from ..common.validators import require_positive_id
from ..core.enums import PaymentStatus
from ..core.exceptions import SalaryNotFound, ValidationError
from .model import PaymentResult, Salary
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


class PaymentProcessor:
    """Payment status transitions for persisted salaries."""

    def __init__(self, salaries: SalaryRepository):
        self._salaries = salaries

    def mark_paid(self, salary_ids: Iterable[int], payment_date: Optional[date] = None) -> PaymentResult:
        """Mark UNPAID salaries as PAID in one statement.

        Already PAID ids are left untouched; ``updated_count`` counts only the
        rows that actually changed, so it can be smaller than the input.
        """
        ids = sorted({require_positive_id(i, "salary_ids") for i in salary_ids})
        if not ids:
            raise ValidationError("Select at least one salary to pay", field="salary_ids")
        payment_date = payment_date or date.today()

        updated = self._salaries.mark_paid(ids, payment_date=payment_date)
        logger.info("Marked %s of %s salaries as paid on %s", updated, len(ids), payment_date.isoformat())
        return PaymentResult(updated_count=updated, payment_date=payment_date)

    def update_status(
        self,
        salary_id: int,
        status: PaymentStatus,
        payment_date: Optional[date] = None,
    ) -> Salary:
        """Set one salary's payment status.

        UNPAID clears the payment date; PAID without a date uses today. A PAID
        salary marked PAID again keeps its original payment date.
        """
        salary = self._salaries.get_by_id(int(salary_id))
        if salary is None:
            raise SalaryNotFound(salary_id)
        status = PaymentStatus(status)

        if status == PaymentStatus.PAID:
            if salary.is_paid:
                return salary
            new_date: Optional[date] = payment_date or date.today()
        else:
            new_date = None

        self._salaries.set_payment_status(int(salary_id), status=status, payment_date=new_date)
        logger.info("Salary %s payment status -> %s", salary_id, status.value)

        updated = self._salaries.get_by_id(int(salary_id))
        if updated is None:
            raise SalaryNotFound(salary_id)
        return updated
