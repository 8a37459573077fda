"""Client API blueprint."""
from __future__ import annotations

from flask import Blueprint

from routes import json_success, request_payload, service_error_response
from services import client_service
from services.errors import ServiceError

clients_bp = Blueprint("clients", __name__, url_prefix="/api/clients")


@clients_bp.route("/", methods=["GET"])
def list_clients():
    try:
        clients = client_service.list_clients()
    except ServiceError as error:
        return service_error_response(error)
    return json_success([client.to_dict() for client in clients])


@clients_bp.route("/", methods=["POST"])
def create_client():
    try:
        client = client_service.create_client(request_payload())
    except ServiceError as error:
        return service_error_response(error)
    return json_success(client.to_dict(), status=201, message="Client created successfully")


@clients_bp.route("/<int:client_id>", methods=["GET"])
def get_client(client_id: int):
    try:
        client = client_service.get_client(client_id)
    except ServiceError as error:
        return service_error_response(error)
    return json_success(client.to_dict())


@clients_bp.route("/<int:client_id>", methods=["PUT", "PATCH"])
def update_client(client_id: int):
    try:
        client = client_service.update_client(client_id, request_payload())
    except ServiceError as error:
        return service_error_response(error)
    return json_success(client.to_dict(), message="Client updated successfully")


@clients_bp.route("/<int:client_id>", methods=["DELETE"])
def delete_client(client_id: int):
    try:
        result = client_service.delete_client(client_id)
    except ServiceError as error:
        return service_error_response(error)
    return json_success(result, message="Client deleted successfully")
