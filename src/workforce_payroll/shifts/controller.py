from __future__ import annotations

from datetime import datetime, time
from typing import Optional

from flask import Flask

from ..common.responses import api_errors, json_body, ok
from ..common.validators import optional_id, parse_enum_field, require_non_empty
from ..core.enums import ShiftType
from ..core.exceptions import ValidationError
from ..container import Container
from .model import ShiftSchedule

_TIME_FIELDS = {
    "main_work_start": "mainWorkStart",
    "main_work_end": "mainWorkEnd",
    "lunch_break_start": "lunchBreakStart",
    "lunch_break_end": "lunchBreakEnd",
    "regular_overtime_start": "regularOvertimeStart",
    "regular_overtime_end": "regularOvertimeEnd",
    "weekly_overtime_start": "weeklyOvertimeStart",
    "weekly_overtime_end": "weeklyOvertimeEnd",
}


def _parse_time(value, field: str) -> Optional[time]:
    if value in (None, ""):
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(str(value), fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field} must be a time (HH:MM)", field=field)


def shift_from_payload(data: dict, *, shift_id: int = 0) -> ShiftSchedule:
    times = {attr: _parse_time(data.get(key), key) for attr, key in _TIME_FIELDS.items()}
    if times["main_work_start"] is None or times["main_work_end"] is None:
        raise ValidationError("mainWorkStart and mainWorkEnd are required", field="mainWorkStart")

    return ShiftSchedule(
        shift_id=shift_id,
        shift_name=require_non_empty(str(data.get("shiftName") or ""), "shiftName"),
        shift_type=parse_enum_field(ShiftType, data.get("shiftType"), "shiftType") or ShiftType.NON_SHIFT,
        sub_department_id=optional_id(data.get("subDepartmentId"), "subDepartmentId"),
        **times,
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shifts", methods=["GET"], endpoint="api_list_shifts")
    @api_errors
    def api_list_shifts():
        return ok(container.shift_service.list_all())

    @app.route("/api/shifts", methods=["POST"], endpoint="api_create_shift")
    @api_errors
    def api_create_shift():
        shift = container.shift_service.create(shift_from_payload(json_body()))
        return ok(shift, message="Shift created", status=201)

    @app.route("/api/shifts/<int:shift_id>", methods=["PUT"], endpoint="api_update_shift")
    @api_errors
    def api_update_shift(shift_id: int):
        shift = container.shift_service.update(shift_from_payload(json_body(), shift_id=shift_id))
        return ok(shift, message="Shift updated")
