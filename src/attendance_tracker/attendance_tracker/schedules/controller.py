from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.guards import admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    @app.route("/api/work-schedule/<int:employee_id>", methods=["GET"], endpoint="work_schedule_get")
    def work_schedule_get(employee_id: int):
        return jsonify({"success": True, "data": service.get_required(employee_id).to_dict()})

    @app.route("/api/work-schedule", methods=["POST"], endpoint="work_schedule_create")
    @admin_required
    def work_schedule_create():
        schedule = service.create(request.get_json(silent=True) or {})
        return (
            jsonify({"success": True, "data": schedule.to_dict(), "message": "Work schedule created successfully"}),
            201,
        )

    @app.route("/api/work-schedule/<int:employee_id>", methods=["PUT"], endpoint="work_schedule_update")
    @admin_required
    def work_schedule_update(employee_id: int):
        schedule = service.update(employee_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": schedule.to_dict(), "message": "Work schedule updated successfully"})

    @app.route("/api/work-schedule/<int:employee_id>", methods=["DELETE"], endpoint="work_schedule_delete")
    @admin_required
    def work_schedule_delete(employee_id: int):
        service.delete(employee_id)
        return jsonify({"success": True, "message": "Work schedule deleted successfully"})
