from __future__ import annotations

import csv
import io
from datetime import date

import pandas as pd
from flask import Flask, request, send_file

from ..common.responses import api_errors, fail, json_body, ok
from ..common.validators import optional_date, optional_id, parse_enum_field
from ..core.enums import ContractType, PaymentStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .model import SalaryFilter
from .service import EXPORT_COLUMNS

EXCEL_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _salary_filter_from_args() -> SalaryFilter:
    args = request.args
    return SalaryFilter(
        department_id=optional_id(args.get("departmentId"), "departmentId"),
        contract_type=parse_enum_field(ContractType, args.get("contractType"), "contractType"),
        payment_status=parse_enum_field(PaymentStatus, args.get("paymentStatus"), "paymentStatus"),
        start_date=optional_date(args.get("startDate"), "startDate"),
        end_date=optional_date(args.get("endDate"), "endDate"),
        employee_id=optional_id(args.get("employeeId"), "employeeId"),
    )


def register(app: Flask, container: Container) -> None:
    def _export_csv(rows: list[dict], filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _export_excel(rows: list[dict], filename: str):
        df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
        for column in df.columns:
            if column.endswith("Hours") or column.endswith("Salary"):
                df[column] = df[column].astype(float)

        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name="Salaries")
        output.seek(0)
        return send_file(output, mimetype=EXCEL_MIMETYPE, as_attachment=True, download_name=filename)

    @app.route("/api/salaries/generate", methods=["POST"], endpoint="api_generate_salaries")
    @api_errors
    def api_generate_salaries():
        data = json_body()
        if data.get("year") in (None, "") or data.get("month") in (None, ""):
            raise ValidationError("Year and month are required", field="year")
        try:
            year = int(data["year"])
            month = int(data["month"])
        except (TypeError, ValueError):
            raise ValidationError("Year and month must be integers", field="year") from None
        department_id = optional_id(data.get("departmentId"), "departmentId")

        result = container.payroll_runner.generate_for_month(year, month, department_id)
        return ok(
            {
                "periodStart": result.period_start,
                "periodEnd": result.period_end,
                "created": result.created,
                "updated": result.updated,
                "salaries": result.salaries,
                "conflicts": result.conflicts,
                "errors": result.errors,
            },
            message=f"Generated {len(result.salaries)} salaries for {month:02d}/{year}",
            status=201,
        )

    @app.route("/api/salaries", methods=["GET"], endpoint="api_list_salaries")
    @api_errors
    def api_list_salaries():
        if request.args.get("stats") == "true":
            start = optional_date(request.args.get("startDate"), "startDate")
            end = optional_date(request.args.get("endDate"), "endDate")
            if start is None or end is None:
                raise ValidationError("startDate and endDate are required for statistics", field="startDate")
            return ok(container.payroll_report_service.statistics(start=start, end=end))

        salary_filter = _salary_filter_from_args()
        export = (request.args.get("export") or "").lower()
        if export:
            rows = container.payroll_report_service.export_rows(salary_filter)
            stamp = date.today().strftime("%Y%m%d")
            if export == "csv":
                return _export_csv(rows, f"salaries_{stamp}.csv")
            if export == "excel":
                return _export_excel(rows, f"salaries_{stamp}.xlsx")
            return fail("export must be csv or excel", 400, field="export")

        return ok(container.payroll_report_service.list_salaries(salary_filter))

    @app.route("/api/salaries/<int:salary_id>", methods=["GET"], endpoint="api_get_salary")
    @api_errors
    def api_get_salary(salary_id: int):
        return ok(container.payroll_report_service.get_salary(salary_id))

    @app.route(
        "/api/salaries/<int:salary_id>/payment-status",
        methods=["PUT"],
        endpoint="api_update_payment_status",
    )
    @api_errors
    def api_update_payment_status(salary_id: int):
        data = json_body()
        status = parse_enum_field(PaymentStatus, data.get("paymentStatus"), "paymentStatus")
        if status is None:
            raise ValidationError("paymentStatus is required", field="paymentStatus")
        payment_date = optional_date(data.get("paymentDate"), "paymentDate")

        salary = container.payment_processor.update_status(salary_id, status, payment_date)
        return ok(salary, message="Payment status updated")

    @app.route("/api/salaries/process-payments", methods=["POST"], endpoint="api_process_payments")
    @api_errors
    def api_process_payments():
        data = json_body()
        salary_ids = data.get("salaryIds")
        if not isinstance(salary_ids, list) or not salary_ids:
            raise ValidationError("salaryIds must be a non-empty list", field="salaryIds")
        payment_date = optional_date(data.get("paymentDate"), "paymentDate")

        result = container.payment_processor.mark_paid(salary_ids, payment_date)
        return ok(
            {"updatedCount": result.updated_count, "paymentDate": result.payment_date},
            message=f"Processed payments for {result.updated_count} salaries",
        )

    @app.route("/api/salary-rates", methods=["GET"], endpoint="api_list_salary_rates")
    @api_errors
    def api_list_salary_rates():
        department_id = optional_id(request.args.get("departmentId"), "departmentId")
        return ok(container.salary_rate_service.list_rates(department_id=department_id))

    @app.route("/api/salary-rates", methods=["POST"], endpoint="api_create_salary_rate")
    @api_errors
    def api_create_salary_rate():
        data = json_body()
        contract_type = parse_enum_field(ContractType, data.get("contractType"), "contractType")
        if contract_type is None:
            raise ValidationError("contractType is required", field="contractType")
        for key in ("departmentId", "mainWorkHourRate", "regularOvertimeRate", "weeklyOvertimeRate"):
            if data.get(key) in (None, ""):
                raise ValidationError(f"{key} is required", field=key)

        rate = container.salary_rate_service.create(
            department_id=data["departmentId"],
            contract_type=contract_type,
            main_work_hour_rate=data["mainWorkHourRate"],
            regular_overtime_rate=data["regularOvertimeRate"],
            weekly_overtime_rate=data["weeklyOvertimeRate"],
        )
        return ok(rate, message="Salary rate created", status=201)

    @app.route("/api/salary-rates/<int:rate_id>", methods=["PUT"], endpoint="api_update_salary_rate")
    @api_errors
    def api_update_salary_rate(rate_id: int):
        data = json_body()
        rate = container.salary_rate_service.update(
            rate_id,
            department_id=data.get("departmentId"),
            contract_type=parse_enum_field(ContractType, data.get("contractType"), "contractType"),
            main_work_hour_rate=data.get("mainWorkHourRate"),
            regular_overtime_rate=data.get("regularOvertimeRate"),
            weekly_overtime_rate=data.get("weeklyOvertimeRate"),
        )
        return ok(rate, message="Salary rate updated")

    @app.route("/api/salary-rates/<int:rate_id>", methods=["DELETE"], endpoint="api_delete_salary_rate")
    @api_errors
    def api_delete_salary_rate(rate_id: int):
        container.salary_rate_service.delete(rate_id)
        return ok(message="Salary rate deleted")
