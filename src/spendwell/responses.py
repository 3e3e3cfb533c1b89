"""JSON envelope, caller identity and error mapping for the API blueprints."""

from __future__ import annotations

from typing import Any, Optional

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from .errors import AuthenticationRequired, InternalFailure, LedgerError, ValidationError
from .logging_config import get_logger

logger = get_logger("responses")


def current_user_id() -> int:
    """Authenticated user id, as forwarded by the auth gateway."""

    header = current_app.config.get("USER_HEADER", "X-User-Id")
    raw = request.headers.get(header, "").strip()
    if not raw.isdigit() or int(raw) <= 0:
        raise AuthenticationRequired("Authentication required")
    return int(raw)


def json_body() -> dict[str, Any]:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def respond(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    """Success envelope: ``{success, message?, data?}``."""

    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return jsonify(body), status


def _failure(message: str, status: int, errors: Optional[dict[str, list[str]]] = None):
    body: dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    return jsonify(body), status


def register_error_handlers(app: Flask) -> None:
    """Map typed failures onto the JSON error envelope."""

    @app.errorhandler(LedgerError)
    def _ledger_error(exc: LedgerError):
        return _failure(exc.message, exc.status_code, getattr(exc, "errors", None))

    @app.errorhandler(InternalFailure)
    def _internal_failure(exc: InternalFailure):
        return _failure(exc.message, exc.status_code)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return _failure(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        logger.exception("Unhandled error", extra={"path": request.path, "method": request.method})
        return _failure("Internal server error", 500)
