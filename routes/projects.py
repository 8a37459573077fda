"""Project API blueprint."""
from __future__ import annotations

from flask import Blueprint

from routes import json_success, request_payload, service_error_response
from services import project_service
from services.errors import ServiceError
from services.hydration import hydrate, hydrate_all

projects_bp = Blueprint("projects", __name__, url_prefix="/api/projects")

PROJECT_RELATIONS = ("client", "tasks.assigned_team_member")


@projects_bp.route("/", methods=["GET"])
def list_projects():
    try:
        projects = project_service.list_projects()
        data = hydrate_all(projects, PROJECT_RELATIONS)
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data)


@projects_bp.route("/", methods=["POST"])
def create_project():
    try:
        project = project_service.create_project(request_payload())
    except ServiceError as error:
        return service_error_response(error)
    return json_success(project.to_dict(), status=201, message="Project created successfully")


@projects_bp.route("/<int:project_id>", methods=["GET"])
def get_project(project_id: int):
    try:
        project = project_service.get_project(project_id)
        data = hydrate(project, PROJECT_RELATIONS)
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data)


@projects_bp.route("/<int:project_id>", methods=["PUT", "PATCH"])
def update_project(project_id: int):
    try:
        project = project_service.update_project(project_id, request_payload())
        data = hydrate(project, ("client", "tasks"))
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data, message="Project updated successfully")


@projects_bp.route("/<int:project_id>/recalculate-progress", methods=["POST"])
def recalculate_progress(project_id: int):
    try:
        project = project_service.recalculate_progress(project_id)
        data = hydrate(project, ("client", "tasks"))
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data, message="Progress recalculated successfully")


@projects_bp.route("/<int:project_id>", methods=["DELETE"])
def delete_project(project_id: int):
    try:
        result = project_service.delete_project(project_id)
    except ServiceError as error:
        return service_error_response(error)
    return json_success(result, message="Project and associated tasks deleted successfully")
