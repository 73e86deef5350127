from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_positive_int
from ..container import Container
from ..core.exceptions import ValidationError
from .service import ReportData

CSV_FIELDS = [
    "date",
    "employee_id",
    "unique_id",
    "display_name",
    "check_in",
    "check_out",
    "status",
    "hours_worked",
    "remarks",
]


def _flag(value, default: bool) -> bool:
    if value is None or value == "":
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def register(app: Flask, container: Container) -> None:
    def _build_report() -> ReportData:
        args = request.args
        start_s, end_s = args.get("startDate"), args.get("endDate")
        if not start_s or not end_s:
            raise ValidationError("startDate and endDate are required")

        employee_id = args.get("employeeId")
        department_id = args.get("departmentId")
        return container.report_service.build_attendance_report(
            start=parse_iso_date(start_s),
            end=parse_iso_date(end_s),
            employee_id=require_positive_int(employee_id, "employeeId") if employee_id else None,
            department_id=require_positive_int(department_id, "departmentId") if department_id else None,
            status=args.get("status") or None,
            exclude_weekends=_flag(args.get("excludeWeekends"), True),
            exclude_holidays=_flag(args.get("excludeHolidays"), True),
        )

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="report_attendance")
    def report_attendance():
        return jsonify(_build_report().to_dict())

    @app.route("/api/reports/attendance.csv", methods=["GET"], endpoint="report_attendance_csv")
    def report_attendance_csv():
        data = _build_report()

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        filename = f"attendance_report_{request.args['startDate']}_{request.args['endDate']}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
