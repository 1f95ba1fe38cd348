from __future__ import annotations

from flask import Flask, g, jsonify

from ..common.web import request_data, session_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    login_required = session_required(container)

    @app.route("/logs", methods=["POST"], endpoint="submit_log")
    @login_required
    def submit_log():
        data = request_data()
        log = container.ledger_service.submit_log(
            g.session.scope,
            worker_id=data.get("worker_id", ""),
            nature_of_work=data.get("nature_of_work", ""),
            amount=data.get("amount"),
            work_date=data.get("date") or None,
        )
        return jsonify({"success": True, "message": "Daily log submitted for approval", "log": log.to_dict()}), 201
