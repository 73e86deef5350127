from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.guards import admin_required, login_required
from ..container import Container
from ..core.enums import Role
from .service import parse_role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def auth_login():
        data = request.get_json(silent=True) or {}
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember"))
        app.permanent_session_lifetime = timedelta(days=7)
        session["user_id"] = s_user.user_id
        session["name"] = s_user.display_name
        session["role"] = s_user.role.value

        app.logger.info("User %s logged in", s_user.username)
        return jsonify({"success": True, "data": s_user.to_dict(), "message": "Login successful"})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    def auth_logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="auth_me")
    @login_required
    def auth_me():
        return jsonify(
            {
                "success": True,
                "data": {"user_id": session["user_id"], "display_name": session.get("name"), "role": session.get("role")},
            }
        )

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @admin_required
    def users_create():
        data = request.get_json(silent=True) or {}
        user_id = container.user_service.create_account(
            username=data.get("username", ""),
            password=data.get("password", ""),
            display_name=data.get("display_name") or data.get("displayName") or "",
            role=parse_role(data.get("role")),
        )
        return jsonify({"success": True, "data": {"user_id": user_id}, "message": "User created successfully"}), 201

    @app.route("/api/users/<int:user_id>/change-password", methods=["PUT"], endpoint="users_change_password")
    @login_required
    def users_change_password(user_id: int):
        data = request.get_json(silent=True) or {}
        container.auth_service.change_password(
            current_user_id=int(session["user_id"]),
            current_role=Role(session.get("role", Role.USER.value)),
            user_id=user_id,
            current_password=data.get("current_password") or data.get("currentPassword") or "",
            new_password=data.get("new_password") or data.get("newPassword") or "",
        )
        return jsonify({"success": True, "message": "Password changed successfully"})

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @admin_required
    def users_list():
        return jsonify({"success": True, "data": [u.to_dict() for u in container.user_service.list_users()]})

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="users_get")
    @admin_required
    def users_get(user_id: int):
        return jsonify({"success": True, "data": container.user_service.get_user(user_id).to_dict()})

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="users_update")
    @admin_required
    def users_update(user_id: int):
        user = container.user_service.update_account(user_id, request.get_json(silent=True) or {})
        return jsonify({"success": True, "data": user.to_dict(), "message": "User updated successfully"})

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="users_delete")
    @admin_required
    def users_delete(user_id: int):
        container.user_service.delete_account(user_id, current_user_id=int(session["user_id"]))
        return jsonify({"success": True, "message": "User deleted successfully"})
