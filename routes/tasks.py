"""Task API blueprint."""
from __future__ import annotations

from flask import Blueprint, request

from routes import json_success, request_payload, service_error_response
from services import task_service
from services.errors import ServiceError
from services.hydration import hydrate, hydrate_all

tasks_bp = Blueprint("tasks", __name__, url_prefix="/api/tasks")

TASK_RELATIONS = ("assigned_team_member", "project")


@tasks_bp.route("/", methods=["GET"])
def list_tasks():
    project_id = request.args.get("project_id", type=int)
    try:
        tasks = task_service.list_tasks(project_id=project_id)
        data = hydrate_all(tasks, TASK_RELATIONS)
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data)


@tasks_bp.route("/", methods=["POST"])
def create_task():
    try:
        task = task_service.create_task(request_payload())
        data = hydrate(task, TASK_RELATIONS)
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data, status=201, message="Task created successfully")


@tasks_bp.route("/<int:task_id>", methods=["GET"])
def get_task(task_id: int):
    try:
        task = task_service.get_task(task_id)
        data = hydrate(task, TASK_RELATIONS + ("todos",))
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data)


@tasks_bp.route("/<int:task_id>", methods=["PUT", "PATCH"])
def update_task(task_id: int):
    try:
        task = task_service.update_task(task_id, request_payload())
        data = hydrate(task, TASK_RELATIONS)
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data, message="Task updated successfully")


@tasks_bp.route("/<int:task_id>", methods=["DELETE"])
def delete_task(task_id: int):
    try:
        result = task_service.delete_task(task_id)
    except ServiceError as error:
        return service_error_response(error)
    return json_success(result, message="Task deleted successfully")
