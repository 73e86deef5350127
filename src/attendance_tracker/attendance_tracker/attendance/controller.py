from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.guards import admin_required, login_required
from ..common.http import result_response
from ..common.validators import pick
from ..container import Container
from .query import filter_from_args


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service
    default_limit = int(app.config.get("DEFAULT_PAGE_LIMIT", 10))

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        f = filter_from_args(request.args, default_limit=default_limit)
        app.logger.debug("Attendance query: %s", f)
        return jsonify(container.attendance_query.find(f).to_dict())

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="attendance_get")
    def attendance_get(attendance_id: int):
        record = service.get_by_id(attendance_id)
        if not record:
            return jsonify({"success": False, "message": "Attendance record not found"}), 404
        return jsonify({"success": True, "data": record.to_dict()})

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_create")
    @login_required
    def attendance_create():
        return result_response(service.create(request.get_json(silent=True) or {}), success_status=201)

    @app.route("/api/attendance/manual", methods=["POST"], endpoint="attendance_manual")
    @admin_required
    def attendance_manual():
        return result_response(service.create_manual_log(request.get_json(silent=True) or {}), success_status=201)

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="attendance_update")
    @login_required
    def attendance_update(attendance_id: int):
        return result_response(service.update(attendance_id, request.get_json(silent=True) or {}))

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="attendance_delete")
    @login_required
    def attendance_delete(attendance_id: int):
        return result_response(service.delete(attendance_id))

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="attendance_check_in")
    def attendance_check_in():
        data = request.get_json(silent=True) or {}
        employee_id = pick(data, "employeeId", "employee_id")
        if not employee_id:
            return jsonify({"success": False, "message": "Employee ID is required"}), 400
        return result_response(service.check_in(employee_id, data.get("date")), success_status=201)

    @app.route("/api/attendance/check-out/<int:attendance_id>", methods=["PUT"], endpoint="attendance_check_out")
    def attendance_check_out(attendance_id: int):
        return result_response(service.check_out(attendance_id))
