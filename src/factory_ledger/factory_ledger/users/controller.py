from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.web import request_data, session_required
from ..container import Container
from .model import identity_to_row


def register(app: Flask, container: Container) -> None:
    login_required = session_required(container)
    owner_required = session_required(container, owner=True)

    @app.route("/auth/owner-login", methods=["POST"], endpoint="owner_login")
    def owner_login():
        data = request_data()
        current = container.auth_service.authenticate_owner(data.get("email", ""), data.get("password", ""))
        return jsonify({"success": True, "session": current.to_dict()})

    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = request_data()
        current = container.auth_service.authenticate_manager(data.get("email", ""), data.get("password", ""))
        return jsonify({"success": True, "session": current.to_dict()})

    @app.route("/auth/register", methods=["POST"], endpoint="register")
    def register_manager():
        data = request_data()
        identity = container.auth_service.register_manager(
            data.get("email", ""),
            data.get("password", ""),
            data.get("name", ""),
            confirm_password=data.get("confirm_password", ""),
        )
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Account created. Please wait for owner approval before signing in.",
                    "user": identity_to_row(identity),
                }
            ),
            201,
        )

    @app.route("/auth/session", methods=["GET"], endpoint="current_session")
    def current_session():
        current = container.auth_service.current_session()
        return jsonify({"session": current.to_dict() if current else None})

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.auth_service.logout()
        return jsonify({"success": True})

    @app.route("/owner/pending-managers", methods=["GET"], endpoint="pending_managers")
    @owner_required
    def pending_managers():
        managers = container.user_service.list_pending_managers(g.session.scope)
        return jsonify({"managers": [identity_to_row(m) for m in managers]})

    @app.route("/owner/managers/<user_id>/approve", methods=["POST"], endpoint="approve_manager")
    @owner_required
    def approve_manager(user_id: str):
        data = request_data()
        identity = container.user_service.approve_manager(
            g.session.scope,
            identity_id=user_id,
            factory_id=data.get("factory_id", ""),
        )
        return jsonify({"success": True, "user": identity_to_row(identity)})

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify({"session": g.session.to_dict()})
