from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ShiftSchedule


class ShiftRepository(Protocol):
    def list_all(self) -> Sequence[ShiftSchedule]:
        raise NotImplementedError

    def get_by_id(self, shift_id: int) -> Optional[ShiftSchedule]:
        raise NotImplementedError

    def create(self, shift: ShiftSchedule) -> int:
        """Insert a shift (``shift_id`` is ignored). Returns the new id."""

        raise NotImplementedError

    def update(self, shift: ShiftSchedule) -> bool:
        raise NotImplementedError
