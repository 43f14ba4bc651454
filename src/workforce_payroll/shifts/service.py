from __future__ import annotations

import logging
from dataclasses import replace
from typing import Sequence

from ..core.exceptions import ShiftNotFound
from .model import ShiftSchedule
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


class ShiftService:
    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def list_all(self) -> Sequence[ShiftSchedule]:
        return self._shifts.list_all()

    def get(self, shift_id: int) -> ShiftSchedule:
        shift = self._shifts.get_by_id(int(shift_id))
        if shift is None:
            raise ShiftNotFound(shift_id)
        return shift

    def create(self, shift: ShiftSchedule) -> ShiftSchedule:
        shift.validate()
        shift_id = self._shifts.create(shift)
        logger.info("Created shift %s (%s)", shift_id, shift.shift_name)
        return replace(shift, shift_id=shift_id)

    def update(self, shift: ShiftSchedule) -> ShiftSchedule:
        """Replace a shift definition.

        Already-classified attendance keeps its stored hours; only later
        check-outs and corrections use the new windows.
        """
        self.get(shift.shift_id)
        shift.validate()
        self._shifts.update(shift)
        logger.info("Updated shift %s (%s)", shift.shift_id, shift.shift_name)
        return shift
