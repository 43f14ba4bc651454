from __future__ import annotations

from flask import Flask, request

from ..common.responses import api_errors, json_body, ok
from ..common.validators import parse_datetime_field, require_positive_id
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _employee_id(data: dict) -> int:
        if data.get("employeeId") in (None, ""):
            raise ValidationError("employeeId is required", field="employeeId")
        return require_positive_id(data["employeeId"], "employeeId")

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="api_check_in")
    @api_errors
    def api_check_in():
        record = container.attendance_service.check_in(_employee_id(json_body()))
        return ok(record, message="Checked in", status=201)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="api_check_out")
    @api_errors
    def api_check_out():
        record = container.attendance_service.check_out(_employee_id(json_body()))
        return ok(record, message="Checked out")

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="api_correct_attendance")
    @api_errors
    def api_correct_attendance(attendance_id: int):
        """Administrative correction; hours are classified again from the new times."""
        data = json_body()
        if data.get("checkInTime") in (None, ""):
            raise ValidationError("checkInTime is required", field="checkInTime")
        check_in = parse_datetime_field(data["checkInTime"], "checkInTime")
        check_out = None
        if data.get("checkOutTime") not in (None, ""):
            check_out = parse_datetime_field(data["checkOutTime"], "checkOutTime")

        record = container.attendance_service.correct_record(
            attendance_id,
            check_in_time=check_in,
            check_out_time=check_out,
            note=data.get("note"),
        )
        return ok(record, message="Attendance updated")

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_history")
    @api_errors
    def api_attendance_history():
        employee_id = _employee_id(request.args)
        try:
            limit = int(request.args.get("limit") or 30)
        except ValueError:
            raise ValidationError("limit must be an integer", field="limit") from None
        return ok(container.attendance_service.get_history(employee_id, limit=max(1, min(limit, 366))))
