from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.datetime_utils import resolve_window
from ..core.enums import ShiftType
from ..core.exceptions import ValidationError

# Any fixed day works: window relations only depend on time-of-day.
_REFERENCE_DAY = date(2000, 1, 3)


@dataclass(frozen=True)
class TimeWindow:
    """A time-of-day range; ``end <= start`` wraps past midnight."""

    start: time
    end: time

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def on(self, day: date) -> Optional[tuple[datetime, datetime]]:
        return resolve_window(day, self.start, self.end)

    def label(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"


def _window(start: Optional[time], end: Optional[time], name: str) -> Optional[TimeWindow]:
    if start is None and end is None:
        return None
    if start is None or end is None:
        raise ValidationError(f"{name} needs both a start and an end time", field=name)
    return TimeWindow(start=start, end=end)


def _overlaps(a: tuple[datetime, datetime], b: tuple[datetime, datetime]) -> bool:
    return a[0] < b[1] and b[0] < a[1]


@dataclass(frozen=True)
class ShiftSchedule:
    """Domain entity: a shift and its resolved time windows."""

    shift_id: int
    shift_name: str
    main_work_start: time
    main_work_end: time
    shift_type: ShiftType = ShiftType.NON_SHIFT
    lunch_break_start: Optional[time] = None
    lunch_break_end: Optional[time] = None
    regular_overtime_start: Optional[time] = None
    regular_overtime_end: Optional[time] = None
    weekly_overtime_start: Optional[time] = None
    weekly_overtime_end: Optional[time] = None
    sub_department_id: Optional[int] = None

    @property
    def main_window(self) -> TimeWindow:
        return TimeWindow(self.main_work_start, self.main_work_end)

    @property
    def lunch_window(self) -> Optional[TimeWindow]:
        return _window(self.lunch_break_start, self.lunch_break_end, "lunch_break")

    @property
    def regular_overtime_window(self) -> Optional[TimeWindow]:
        return _window(self.regular_overtime_start, self.regular_overtime_end, "regular_overtime")

    @property
    def weekly_overtime_window(self) -> Optional[TimeWindow]:
        return _window(self.weekly_overtime_start, self.weekly_overtime_end, "weekly_overtime")

    def validate(self) -> "ShiftSchedule":
        """Reject malformed schedules before they are stored.

        Rules: the main window has a length, the lunch break lies inside the
        main window, overtime windows do not overlap the main window or each
        other.
        """
        if not self.shift_name or not self.shift_name.strip():
            raise ValidationError("Shift name is required", field="shift_name")
        if self.main_window.is_empty:
            raise ValidationError("Main work start and end must differ", field="main_work_end")

        main = self.main_window.on(_REFERENCE_DAY)

        lunch = self.lunch_window
        if lunch is not None and not lunch.is_empty:
            inside = False
            for offset in (0, 1):
                resolved = lunch.on(_REFERENCE_DAY + timedelta(days=offset))
                if resolved and main[0] <= resolved[0] and resolved[1] <= main[1]:
                    inside = True
                    break
            if not inside:
                raise ValidationError(
                    f"Lunch break {lunch.label()} must lie inside main work {self.main_window.label()}",
                    field="lunch_break",
                )

        for name, window in (
            ("regular_overtime", self.regular_overtime_window),
            ("weekly_overtime", self.weekly_overtime_window),
        ):
            if window is None or window.is_empty:
                continue
            for offset in (-1, 0, 1):
                resolved = window.on(_REFERENCE_DAY + timedelta(days=offset))
                if resolved and _overlaps(resolved, main):
                    raise ValidationError(
                        f"{name.replace('_', ' ').capitalize()} {window.label()} overlaps main work "
                        f"{self.main_window.label()}",
                        field=name,
                    )

        regular = self.regular_overtime_window
        weekly = self.weekly_overtime_window
        if regular is not None and weekly is not None and not (regular.is_empty or weekly.is_empty):
            anchored = regular.on(_REFERENCE_DAY)
            for offset in (-1, 0, 1):
                resolved = weekly.on(_REFERENCE_DAY + timedelta(days=offset))
                if resolved and _overlaps(resolved, anchored):
                    raise ValidationError(
                        f"Weekly overtime {weekly.label()} overlaps regular overtime {regular.label()}",
                        field="weekly_overtime",
                    )
        return self
