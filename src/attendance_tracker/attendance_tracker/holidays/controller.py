from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.guards import admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.holiday_service

    @app.route("/api/holidays", methods=["GET"], endpoint="holidays_list")
    def holidays_list():
        return jsonify({"success": True, "data": [h.to_dict() for h in service.get_all()]})

    @app.route("/api/holidays/<int:holiday_id>", methods=["GET"], endpoint="holidays_get")
    def holidays_get(holiday_id: int):
        return jsonify({"success": True, "data": service.get_by_id(holiday_id).to_dict()})

    @app.route("/api/holidays", methods=["POST"], endpoint="holidays_create")
    @admin_required
    def holidays_create():
        holiday = service.create(request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": holiday.to_dict(), "message": "Holiday created successfully"}), 201

    @app.route("/api/holidays/<int:holiday_id>", methods=["PUT"], endpoint="holidays_update")
    @admin_required
    def holidays_update(holiday_id: int):
        holiday = service.update(holiday_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": holiday.to_dict(), "message": "Holiday updated successfully"})

    @app.route("/api/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="holidays_delete")
    @admin_required
    def holidays_delete(holiday_id: int):
        service.delete(holiday_id)
        return jsonify({"success": True, "message": "Holiday deleted successfully"})
