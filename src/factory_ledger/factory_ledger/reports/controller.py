from __future__ import annotations

from datetime import date

from flask import Flask, g, jsonify, request

from ..common.web import session_required
from ..container import Container
from ..core.enums import TimeWindow
from .windows import end_of_month


def register(app: Flask, container: Container) -> None:
    login_required = session_required(container)

    def _build_report():
        today = date.today()
        window = request.args.get("window") or TimeWindow.DAILY.value
        # Custom period defaults to the current month.
        start = request.args.get("start") or today.replace(day=1).isoformat()
        end = request.args.get("end") or end_of_month(today).isoformat()
        return container.report_service.build_report(
            g.session.scope,
            window=window,
            start=start,
            end=end,
            factory_id=request.args.get("factory_id") or None,
            today=today,
        )

    @app.route("/reports", methods=["GET"], endpoint="reports")
    @login_required
    def reports():
        return jsonify(_build_report().to_dict())

    @app.route("/reports/export.csv", methods=["GET"], endpoint="reports_export")
    @login_required
    def reports_export():
        artifact = container.report_service.export(_build_report())
        return app.response_class(
            artifact.content,
            mimetype=artifact.mimetype,
            headers={"Content-Disposition": f"attachment; filename={artifact.filename}"},
        )
