"""Shared helpers for route blueprints."""

from __future__ import annotations

from typing import Any

from flask import jsonify, request

from services.errors import ServiceError

__all__ = ["json_success", "request_payload", "service_error_response"]


def request_payload() -> Any:
    """Return the decoded JSON body, or None when it is missing or malformed."""
    return request.get_json(silent=True)


def json_success(data: Any, *, status: int = 200, message: str | None = None):
    """Return a JSON success envelope."""
    payload: dict[str, Any] = {"success": True, "data": data}
    if message:
        payload["message"] = message
    return jsonify(payload), status


def service_error_response(error: ServiceError):
    """Translate a service failure into a JSON error response."""
    return jsonify(error.to_dict()), error.status_code
