"""Work-hour classification.

Turns one worked interval into main / regular overtime / weekly overtime hours
according to the employee's shift windows. Pure functions over plain data;
nothing here touches storage.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Tuple

from ..common.numbers import seconds_to_hours
from ..core.exceptions import InvalidAttendanceWindow
from ..shifts.model import ShiftSchedule, TimeWindow
from .model import WorkHourBreakdown

Interval = Tuple[datetime, datetime]


def _intersect(a: Interval, b: Interval) -> Optional[Interval]:
    start = max(a[0], b[0])
    end = min(a[1], b[1])
    if end <= start:
        return None
    return start, end


def _merge(intervals: Iterable[Interval]) -> List[Interval]:
    merged: List[Interval] = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1]:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
        else:
            merged.append((start, end))
    return merged


def _seconds(intervals: Iterable[Interval]) -> int:
    return int(sum((end - start).total_seconds() for start, end in intervals))


def _occurrences(window: Optional[TimeWindow], days: Sequence[date]) -> List[Interval]:
    """Every placement of a daily window on the given days.

    A window is shorter than a day, so placements on consecutive days never
    overlap each other.
    """
    if window is None:
        return []
    out: List[Interval] = []
    for day in days:
        resolved = window.on(day)
        if resolved is not None:
            out.append(resolved)
    return out


def _clip(worked: Interval, windows: Iterable[Interval]) -> List[Interval]:
    out: List[Interval] = []
    for window in windows:
        part = _intersect(worked, window)
        if part is not None:
            out.append(part)
    return _merge(out)


def _subtract_overlap(parts: Sequence[Interval], holes: Sequence[Interval]) -> int:
    """Seconds of ``parts`` that also fall inside ``holes``."""
    overlap: List[Interval] = []
    for part in parts:
        overlap.extend(_clip(part, holes))
    return _seconds(_merge(overlap))


class WorkHourClassifier:
    """Split a worked interval into hour buckets using a shift's windows.

    Windows are time-of-day ranges placed on the attendance date; a window
    whose end is not after its start runs into the next day. Placements on the
    day before and on every day the interval reaches are considered too, so
    night shifts and multi-day intervals are classified the same way.
    """

    def classify(
        self,
        check_in: datetime,
        check_out: datetime,
        schedule: ShiftSchedule,
        *,
        attendance_date: Optional[date] = None,
    ) -> WorkHourBreakdown:
        if check_in is None or check_out is None:
            raise InvalidAttendanceWindow("Both check-in and check-out are required", field="check_out_time")
        if check_out <= check_in:
            raise InvalidAttendanceWindow(
                f"Check-out {check_out.isoformat()} must be after check-in {check_in.isoformat()}",
                field="check_out_time",
            )

        anchor = attendance_date or check_in.date()
        first_day = min(anchor, check_in.date()) - timedelta(days=1)
        days = [first_day + timedelta(days=i) for i in range((check_out.date() - first_day).days + 1)]
        worked: Interval = (check_in, check_out)

        main_parts = _clip(worked, _occurrences(schedule.main_window, days))
        lunch = schedule.lunch_window
        break_seconds = _subtract_overlap(main_parts, _occurrences(lunch, days)) if lunch else 0
        main_seconds = _seconds(main_parts) - break_seconds

        regular_parts = _clip(worked, _occurrences(schedule.regular_overtime_window, days))
        weekly_parts = _clip(worked, _occurrences(schedule.weekly_overtime_window, days))
        # Time inside both overtime windows is paid once, as regular overtime.
        weekly_seconds = _seconds(weekly_parts) - _subtract_overlap(weekly_parts, regular_parts)

        covered_seconds = _seconds(_merge(list(main_parts) + regular_parts + weekly_parts))
        total_seconds = int((check_out - check_in).total_seconds())
        uncovered_seconds = total_seconds - covered_seconds + break_seconds

        return WorkHourBreakdown(
            main_hours=seconds_to_hours(max(main_seconds, 0)),
            regular_overtime_hours=seconds_to_hours(_seconds(regular_parts)),
            weekly_overtime_hours=seconds_to_hours(weekly_seconds),
            uncovered_hours=seconds_to_hours(max(uncovered_seconds, 0)),
            break_hours=seconds_to_hours(break_seconds),
            total_hours=seconds_to_hours(total_seconds),
        )


def classify(
    check_in: datetime,
    check_out: datetime,
    schedule: ShiftSchedule,
    *,
    attendance_date: Optional[date] = None,
) -> WorkHourBreakdown:
    return WorkHourClassifier().classify(check_in, check_out, schedule, attendance_date=attendance_date)
