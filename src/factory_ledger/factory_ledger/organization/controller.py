from __future__ import annotations

from flask import Flask, g, jsonify, request, send_from_directory

from ..common.web import request_data, session_required
from ..container import Container
from ..users.model import identity_to_row


def register(app: Flask, container: Container) -> None:
    login_required = session_required(container)
    owner_required = session_required(container, owner=True)

    @app.route("/factories", methods=["GET"], endpoint="list_factories")
    @owner_required
    def list_factories():
        factories = container.organization_service.list_factories(g.session.scope)
        return jsonify({"factories": [f.to_dict() for f in factories]})

    @app.route("/factories", methods=["POST"], endpoint="create_factory")
    @owner_required
    def create_factory():
        data = request_data()
        factory = container.organization_service.create_factory(
            g.session.scope,
            name=data.get("name", ""),
            location=data.get("location", ""),
        )
        return jsonify({"success": True, "factory": factory.to_dict()}), 201

    @app.route("/workers", methods=["GET"], endpoint="list_workers")
    @login_required
    def list_workers():
        workers = container.organization_service.list_workers(
            g.session.scope,
            factory_id=request.args.get("factory_id") or None,
        )
        return jsonify({"workers": [w.to_dict() for w in workers]})

    @app.route("/workers", methods=["POST"], endpoint="create_worker")
    @login_required
    def create_worker():
        data = request_data()
        upload = request.files.get("photo")
        photo = upload.read() if upload else None

        worker = container.organization_service.create_worker(
            g.session.scope,
            name=data.get("name", ""),
            designation=data.get("designation", ""),
            photo=photo,
            factory_id=data.get("factory_id") or None,
        )
        return jsonify({"success": True, "worker": worker.to_dict()}), 201

    @app.route("/media/<path:key>", methods=["GET"], endpoint="media")
    @login_required
    def media(key: str):
        return send_from_directory(container.blobs.root, key)

    @app.route("/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required
    def dashboard():
        scope = g.session.scope
        if scope.is_owner:
            pending = container.user_service.list_pending_managers(scope)
            factories = container.organization_service.list_factories(scope)
            return jsonify(
                {
                    "session": g.session.to_dict(),
                    "pending_managers": [identity_to_row(m) for m in pending],
                    "factories": [f.to_dict() for f in factories],
                }
            )

        workers = container.organization_service.list_workers(scope)
        return jsonify({"session": g.session.to_dict(), "workers": [w.to_dict() for w in workers]})
