"""Shared helpers for the Flask controllers."""

from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    PendingApproval,
    PersistenceError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first.
_STATUS_BY_ERROR = (
    (PendingApproval, 403),
    (AuthError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ValidationError, 400),
    (PersistenceError, 503),
)


def request_data() -> dict:
    """JSON body if present, otherwise form fields."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def error_response(message: str, status: int, *, code: str):
    return jsonify({"success": False, "error": code, "message": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                if isinstance(e, PersistenceError):
                    logger.error("Store failure on %s %s: %s", request.method, request.path, e.__cause__ or e)
                return error_response(str(e), status, code=type(e).__name__)
        return error_response(str(e), 400, code=type(e).__name__)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        message = str(e) if app.config.get("DEBUG") else "Internal server error"
        return error_response(message, 500, code="InternalError")


def session_required(container, *, owner: bool = False):
    """Resolve the active session into g.session, refusing anonymous (or non-owner) callers."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            current = container.auth_service.current_session()
            if current is None:
                return error_response("Please sign in to continue", 401, code="NotSignedIn")
            if owner and not current.scope.is_owner:
                return error_response("Owner access required", 403, code="AuthorizationError")
            g.session = current
            return view(*args, **kwargs)

        return wrapper

    return decorator
