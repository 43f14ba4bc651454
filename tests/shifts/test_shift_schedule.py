from datetime import time

import pytest

from workforce_payroll.core.exceptions import ShiftNotFound, ValidationError
from workforce_payroll.shifts.model import ShiftSchedule
from workforce_payroll.shifts.service import ShiftService


def _shift(**overrides) -> ShiftSchedule:
    values = dict(
        shift_id=0,
        shift_name="Day",
        main_work_start=time(8, 0),
        main_work_end=time(16, 0),
        lunch_break_start=time(12, 0),
        lunch_break_end=time(13, 0),
        regular_overtime_start=time(16, 0),
        regular_overtime_end=time(18, 0),
    )
    values.update(overrides)
    return ShiftSchedule(**values)


def test_valid_shift_passes():
    shift = _shift()

    assert shift.validate() is shift


def test_zero_length_main_window_is_rejected():
    with pytest.raises(ValidationError) as exc:
        _shift(main_work_end=time(8, 0)).validate()

    assert exc.value.field == "main_work_end"


def test_lunch_outside_main_is_rejected():
    with pytest.raises(ValidationError) as exc:
        _shift(lunch_break_start=time(16, 30), lunch_break_end=time(17, 0)).validate()

    assert exc.value.field == "lunch_break"


def test_overtime_overlapping_main_is_rejected():
    with pytest.raises(ValidationError) as exc:
        _shift(regular_overtime_start=time(15, 0)).validate()

    assert exc.value.field == "regular_overtime"


def test_weekly_overtime_wrapping_into_main_is_rejected():
    with pytest.raises(ValidationError):
        _shift(weekly_overtime_start=time(22, 0), weekly_overtime_end=time(9, 0)).validate()


def test_weekly_overtime_overlapping_regular_is_rejected():
    with pytest.raises(ValidationError) as exc:
        _shift(weekly_overtime_start=time(17, 0), weekly_overtime_end=time(20, 0)).validate()

    assert exc.value.field == "weekly_overtime"


def test_adjacent_overtime_windows_are_accepted():
    shift = _shift(weekly_overtime_start=time(18, 0), weekly_overtime_end=time(22, 0))

    assert shift.validate() is shift


def test_half_defined_window_is_rejected():
    with pytest.raises(ValidationError):
        _shift(regular_overtime_end=None).validate()


def test_overnight_main_with_lunch_after_midnight():
    shift = _shift(
        main_work_start=time(22, 0),
        main_work_end=time(6, 0),
        lunch_break_start=time(2, 0),
        lunch_break_end=time(2, 30),
        regular_overtime_start=time(6, 0),
        regular_overtime_end=time(8, 0),
    )

    assert shift.validate() is shift


def test_service_create_and_update(shifts):
    service = ShiftService(shifts)

    created = service.create(_shift(shift_name="Evening"))
    updated = service.update(_shift(shift_id=created.shift_id, shift_name="Evening (new)"))

    assert created.shift_id == 2
    assert service.get(created.shift_id).shift_name == "Evening (new)"
    assert updated.shift_name == "Evening (new)"


def test_service_refuses_invalid_shift(shifts):
    with pytest.raises(ValidationError):
        ShiftService(shifts).create(_shift(regular_overtime_start=time(10, 0)))
    assert len(shifts.list_all()) == 1


def test_service_update_unknown_shift(shifts):
    with pytest.raises(ShiftNotFound):
        ShiftService(shifts).update(_shift(shift_id=42))
