"""Team member API blueprint."""
from __future__ import annotations

from flask import Blueprint

from routes import json_success, request_payload, service_error_response
from services import team_member_service
from services.errors import ServiceError

team_members_bp = Blueprint("team_members", __name__, url_prefix="/api/team-members")


@team_members_bp.route("/", methods=["GET"])
def list_team_members():
    try:
        members = team_member_service.list_team_members()
    except ServiceError as error:
        return service_error_response(error)
    return json_success([member.to_dict() for member in members])


@team_members_bp.route("/", methods=["POST"])
def create_team_member():
    try:
        member = team_member_service.create_team_member(request_payload())
    except ServiceError as error:
        return service_error_response(error)
    return json_success(member.to_dict(), status=201, message="Team member created successfully")


@team_members_bp.route("/<int:member_id>", methods=["GET"])
def get_team_member(member_id: int):
    try:
        member = team_member_service.get_team_member(member_id)
    except ServiceError as error:
        return service_error_response(error)
    return json_success(member.to_dict())


@team_members_bp.route("/<int:member_id>", methods=["PUT", "PATCH"])
def update_team_member(member_id: int):
    try:
        member = team_member_service.update_team_member(member_id, request_payload())
    except ServiceError as error:
        return service_error_response(error)
    return json_success(member.to_dict(), message="Team member updated successfully")


@team_members_bp.route("/<int:member_id>", methods=["DELETE"])
def delete_team_member(member_id: int):
    try:
        result = team_member_service.delete_team_member(member_id)
    except ServiceError as error:
        return service_error_response(error)
    return json_success(result, message="Team member deleted successfully")
