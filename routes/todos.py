"""Todo API blueprint."""
from __future__ import annotations

from flask import Blueprint, request

from routes import json_success, request_payload, service_error_response
from services import todo_service
from services.errors import ServiceError
from services.hydration import hydrate, hydrate_all

todos_bp = Blueprint("todos", __name__, url_prefix="/api/todos")


@todos_bp.route("/", methods=["GET"])
def list_todos():
    task_id = request.args.get("task_id", type=int)
    try:
        todos = todo_service.list_todos(task_id=task_id)
        data = hydrate_all(todos, ("task",))
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data)


@todos_bp.route("/", methods=["POST"])
def create_todo():
    try:
        todo = todo_service.create_todo(request_payload())
        data = hydrate(todo, ("task",))
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data, status=201, message="Todo created successfully")


@todos_bp.route("/<int:todo_id>", methods=["GET"])
def get_todo(todo_id: int):
    try:
        todo = todo_service.get_todo(todo_id)
        data = hydrate(todo, ("task",))
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data)


@todos_bp.route("/<int:todo_id>", methods=["PUT", "PATCH"])
def update_todo(todo_id: int):
    try:
        todo = todo_service.update_todo(todo_id, request_payload())
        data = hydrate(todo, ("task",))
    except ServiceError as error:
        return service_error_response(error)
    return json_success(data, message="Todo updated successfully")


@todos_bp.route("/<int:todo_id>", methods=["DELETE"])
def delete_todo(todo_id: int):
    try:
        result = todo_service.delete_todo(todo_id)
    except ServiceError as error:
        return service_error_response(error)
    return json_success(result, message="Todo deleted successfully")
