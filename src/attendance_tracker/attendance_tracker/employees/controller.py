from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    def employees_list():
        return jsonify({"success": True, "data": [e.to_dict() for e in container.employees_repo.list_all()]})

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    def employees_get(employee_id: int):
        employee = container.employees_repo.get_by_id(employee_id)
        if not employee:
            return jsonify({"success": False, "message": "Employee not found"}), 404
        return jsonify({"success": True, "data": employee.to_dict()})
