from datetime import date, datetime, time
from decimal import Decimal

import pytest

from workforce_payroll.attendance.classifier import WorkHourClassifier, classify
from workforce_payroll.core.enums import ShiftType
from workforce_payroll.core.exceptions import InvalidAttendanceWindow, ValidationError
from workforce_payroll.shifts.model import ShiftSchedule


def _at(h: int, m: int = 0, s: int = 0, day: int = 6) -> datetime:
    return datetime(2025, 1, day, h, m, s)


def test_office_day_with_one_hour_overtime(office_shift):
    result = WorkHourClassifier().classify(_at(8), _at(17), office_shift)

    assert result.main_hours == Decimal("7.00")
    assert result.regular_overtime_hours == Decimal("1.00")
    assert result.weekly_overtime_hours == Decimal("0.00")
    assert result.break_hours == Decimal("1.00")
    assert result.uncovered_hours == Decimal("1.00")
    assert result.total_hours == Decimal("9.00")


@pytest.mark.parametrize(
    "check_in,check_out",
    [
        (_at(8), _at(17)),
        (_at(6, 30), _at(21, 15)),
        (_at(7, 59, 41), _at(12, 0, 19)),
        (_at(12, 10), _at(12, 50)),
        (_at(23), _at(9, day=7)),
        (_at(3, 7, 13), _at(23, 59, 59)),
    ],
)
def test_buckets_add_up_to_worked_time(office_shift, check_in, check_out):
    r = classify(check_in, check_out, office_shift)

    parts = r.main_hours + r.regular_overtime_hours + r.weekly_overtime_hours + r.uncovered_hours
    assert abs(parts - r.total_hours) <= Decimal("0.02")


def test_long_day_spans_every_window(office_shift):
    r = classify(_at(6, 30), _at(21, 15), office_shift)

    assert r.main_hours == Decimal("7.00")
    assert r.regular_overtime_hours == Decimal("2.00")
    assert r.weekly_overtime_hours == Decimal("3.25")
    # 06:30-08:00 before the shift plus the lunch hour
    assert r.uncovered_hours == Decimal("2.50")


def test_early_check_in_outside_overtime_is_not_paid(office_shift):
    r = classify(_at(7), _at(16), office_shift)

    assert r.main_hours == Decimal("7.00")
    assert r.regular_overtime_hours == Decimal("0.00")
    assert r.uncovered_hours == Decimal("2.00")


@pytest.mark.parametrize("check_out", [_at(8), _at(7, 59)])
def test_check_out_not_after_check_in_is_rejected(office_shift, check_out):
    with pytest.raises(InvalidAttendanceWindow):
        classify(_at(8), check_out, office_shift)


def test_missing_check_out_is_rejected(office_shift):
    with pytest.raises(InvalidAttendanceWindow):
        classify(_at(8), None, office_shift)


def test_invalid_window_is_a_validation_error(office_shift):
    with pytest.raises(ValidationError):
        classify(_at(9), _at(8), office_shift)


def test_night_shift_wraps_past_midnight():
    night = ShiftSchedule(
        shift_id=3,
        shift_name="Night",
        shift_type=ShiftType.SHIFT_B,
        main_work_start=time(22, 0),
        main_work_end=time(6, 0),
        lunch_break_start=time(2, 0),
        lunch_break_end=time(2, 30),
        regular_overtime_start=time(6, 0),
        regular_overtime_end=time(8, 0),
    ).validate()

    r = classify(_at(21, 30), _at(7, day=7), night, attendance_date=date(2025, 1, 6))

    assert r.main_hours == Decimal("7.50")
    assert r.regular_overtime_hours == Decimal("1.00")
    assert r.uncovered_hours == Decimal("1.00")
    assert r.total_hours == Decimal("9.50")


def test_zero_length_window_contributes_nothing():
    shift = ShiftSchedule(
        shift_id=4,
        shift_name="No weekly overtime",
        main_work_start=time(8, 0),
        main_work_end=time(16, 0),
        weekly_overtime_start=time(18, 0),
        weekly_overtime_end=time(18, 0),
    )

    r = classify(_at(8), _at(19), shift)

    assert r.main_hours == Decimal("8.00")
    assert r.weekly_overtime_hours == Decimal("0.00")
    assert r.uncovered_hours == Decimal("3.00")


def test_shared_overtime_time_is_counted_once():
    # stored before overlapping overtime windows were rejected
    shift = ShiftSchedule(
        shift_id=5,
        shift_name="Legacy overlap",
        main_work_start=time(8, 0),
        main_work_end=time(16, 0),
        lunch_break_start=time(12, 0),
        lunch_break_end=time(13, 0),
        regular_overtime_start=time(16, 0),
        regular_overtime_end=time(18, 0),
        weekly_overtime_start=time(17, 0),
        weekly_overtime_end=time(20, 0),
    )

    r = classify(_at(8), _at(20), shift)

    assert r.main_hours == Decimal("7.00")
    assert r.regular_overtime_hours == Decimal("2.00")
    assert r.weekly_overtime_hours == Decimal("2.00")
    assert r.uncovered_hours == Decimal("1.00")
    assert r.main_hours + r.regular_overtime_hours + r.weekly_overtime_hours + r.uncovered_hours == r.total_hours


def test_hours_round_half_up(office_shift):
    # 18 seconds is exactly 0.005 h
    r = classify(_at(8), _at(8, 0, 18), office_shift)

    assert r.main_hours == Decimal("0.01")


def test_has_uncovered_time_flag(office_shift):
    assert classify(_at(8), _at(17), office_shift).has_uncovered_time
    assert not classify(_at(13), _at(16), office_shift).has_uncovered_time
