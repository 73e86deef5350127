from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.guards import admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.backup_service

    @app.route("/api/backups", methods=["GET"], endpoint="backups_list")
    @admin_required
    def backups_list():
        return jsonify({"success": True, "data": [b.to_dict() for b in service.list_backups()]})

    @app.route("/api/backups", methods=["POST"], endpoint="backups_create")
    @admin_required
    def backups_create():
        data = request.get_json(silent=True) or {}
        info = service.create_backup(str(data.get("name") or ""))
        return jsonify({"success": True, "data": info.to_dict(), "message": "Backup created successfully"}), 201

    @app.route("/api/backups/<filename>", methods=["DELETE"], endpoint="backups_delete")
    @admin_required
    def backups_delete(filename: str):
        service.delete_backup(filename)
        return jsonify({"success": True, "message": "Backup deleted successfully"})

    @app.route("/api/backups/restore/<filename>", methods=["POST"], endpoint="backups_restore")
    @admin_required
    def backups_restore(filename: str):
        service.restore_backup(filename)
        return jsonify({"success": True, "message": "Database restored successfully"})

    @app.route("/api/backups/download/<filename>", methods=["GET"], endpoint="backups_download")
    @admin_required
    def backups_download(filename: str):
        path = service.backup_path(filename)
        return send_file(path, mimetype="application/zip", as_attachment=True, download_name=path.name)

    @app.route("/api/backups/scheduled/status", methods=["GET"], endpoint="backups_schedule_status")
    @admin_required
    def backups_schedule_status():
        return jsonify({"success": True, "data": container.backup_scheduler.status()})

    @app.route("/api/backups/scheduled/start", methods=["POST"], endpoint="backups_schedule_start")
    @admin_required
    def backups_schedule_start():
        data = request.get_json(silent=True) or {}
        container.backup_scheduler.start(data.get("schedule") or None)
        return jsonify(
            {
                "success": True,
                "data": container.backup_scheduler.status(),
                "message": "Scheduled backups started successfully",
            }
        )

    @app.route("/api/backups/scheduled/stop", methods=["POST"], endpoint="backups_schedule_stop")
    @admin_required
    def backups_schedule_stop():
        stopped = container.backup_scheduler.stop()
        message = "Scheduled backups stopped successfully" if stopped else "Scheduled backups were not running"
        return jsonify({"success": True, "message": message})
