"""Dashboard summary blueprint."""
from __future__ import annotations

from flask import Blueprint

from routes import json_success, service_error_response
from services.dashboard_service import build_dashboard_summary
from services.errors import ServiceError

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


@dashboard_bp.route("", methods=["GET"])
def summary():
    """Return headline counts and the most recent projects and tasks."""

    try:
        data = build_dashboard_summary()
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data)
