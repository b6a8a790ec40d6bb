from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .datetime_utils import parse_iso_date, parse_iso_datetime

logger = logging.getLogger(__name__)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Authentication required"}), 401
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int:
    if "user_id" not in session:
        raise AuthorizationError("Authentication required")
    return int(session["user_id"])


def json_body() -> dict[str, Any]:
    return request.get_json(silent=True) or {}


def optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value[:10])
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD") from None


def optional_datetime(value: Optional[str], field_name: str):
    if not value:
        return None
    try:
        return parse_iso_datetime(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO-8601 datetime") from None


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(AuthenticationError)
    @app.errorhandler(AuthorizationError)
    def _auth(e):
        return jsonify({"error": str(e)}), 401

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        # Routing errors (404, 405, ...) keep their own status.
        if isinstance(e, HTTPException):
            return jsonify({"error": e.description}), e.code
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Server error"}), 500
