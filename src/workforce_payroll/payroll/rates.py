from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from ..common.validators import require_non_negative_amount, require_positive_id
from ..core.enums import ContractType
from ..core.exceptions import ConflictError, RateNotFound, SalaryRateNotFound
from .model import SalaryRate
from .repository import SalaryRateRepository

logger = logging.getLogger(__name__)


class RateResolver:
    """Look up the hourly rates for a (department, contract type) pair.

    A missing pair is an error, never a zero rate.
    """

    def __init__(self, rates: SalaryRateRepository):
        self._rates = rates

    def resolve(self, department_id: int, contract_type: ContractType) -> SalaryRate:
        rate = self._rates.find(department_id=int(department_id), contract_type=ContractType(contract_type))
        if rate is None:
            raise RateNotFound(department_id, contract_type)
        return rate


class SalaryRateService:
    """Administration of the rate table; one row per (department, contract type)."""

    def __init__(self, rates: SalaryRateRepository):
        self._rates = rates

    def list_rates(self, *, department_id: Optional[int] = None) -> Sequence[SalaryRate]:
        return self._rates.list_all(department_id=department_id)

    def get(self, rate_id: int) -> SalaryRate:
        rate = self._rates.get_by_id(int(rate_id))
        if rate is None:
            raise SalaryRateNotFound(rate_id)
        return rate

    def create(
        self,
        *,
        department_id: int,
        contract_type: ContractType,
        main_work_hour_rate,
        regular_overtime_rate,
        weekly_overtime_rate,
    ) -> SalaryRate:
        rate = SalaryRate(
            rate_id=0,
            department_id=require_positive_id(department_id, "department_id"),
            contract_type=ContractType(contract_type),
            main_work_hour_rate=require_non_negative_amount(main_work_hour_rate, "main_work_hour_rate"),
            regular_overtime_rate=require_non_negative_amount(regular_overtime_rate, "regular_overtime_rate"),
            weekly_overtime_rate=require_non_negative_amount(weekly_overtime_rate, "weekly_overtime_rate"),
        )
        self._ensure_unique(rate)
        rate_id = self._rates.create(rate)
        logger.info(
            "Created salary rate %s for department %s / %s", rate_id, rate.department_id, rate.contract_type.value
        )
        return replace(rate, rate_id=rate_id)

    def update(self, rate_id: int, **changes) -> SalaryRate:
        current = self.get(rate_id)
        values = {}
        if changes.get("department_id") is not None:
            values["department_id"] = require_positive_id(changes["department_id"], "department_id")
        if changes.get("contract_type") is not None:
            values["contract_type"] = ContractType(changes["contract_type"])
        for name in ("main_work_hour_rate", "regular_overtime_rate", "weekly_overtime_rate"):
            if changes.get(name) is not None:
                values[name] = require_non_negative_amount(changes[name], name)

        rate = replace(current, **values)
        self._ensure_unique(rate)
        self._rates.update(rate)
        logger.info("Updated salary rate %s", rate_id)
        return rate

    def delete(self, rate_id: int) -> None:
        self.get(rate_id)
        self._rates.delete(int(rate_id))
        logger.info("Deleted salary rate %s", rate_id)

    def _ensure_unique(self, rate: SalaryRate) -> None:
        if self._rates.exists(
            department_id=rate.department_id,
            contract_type=rate.contract_type,
            exclude_id=rate.rate_id or None,
        ):
            raise ConflictError(
                f"A salary rate for department {rate.department_id} "
                f"with contract type {rate.contract_type.value} already exists"
            )
