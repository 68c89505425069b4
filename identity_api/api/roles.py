"""Role endpoints: custom role CRUD and permission listing.

System roles can be read but never updated or deleted (409).
"""
from __future__ import annotations

from flask import Blueprint

from identity_api.core.models import CreateRoleRequest, UpdateRoleRequest
from .helpers import get_directory, json_body
from .responses import respond_success

bp = Blueprint("roles", __name__)


@bp.route("/roles", methods=["GET"])
def list_roles():
    roles = get_directory().list_roles()
    return respond_success("Roles retrieved successfully", [role.to_dict() for role in roles])


@bp.route("/roles", methods=["POST"])
def create_role():
    create_request = CreateRoleRequest.from_dict(json_body())
    role = get_directory().create_role(create_request)
    return respond_success("Role created successfully", role.to_dict(), 201)


@bp.route("/roles/<role_id>", methods=["GET"])
def get_role(role_id: str):
    role = get_directory().get_role(role_id)
    return respond_success("Role retrieved successfully", role.to_dict())


@bp.route("/roles/<role_id>", methods=["PUT"])
def update_role(role_id: str):
    update_request = UpdateRoleRequest.from_dict(json_body())
    role = get_directory().update_role(role_id, update_request)
    return respond_success("Role updated successfully", role.to_dict())


@bp.route("/roles/<role_id>", methods=["DELETE"])
def delete_role(role_id: str):
    get_directory().delete_role(role_id)
    return respond_success("Role deleted successfully", {"roleId": role_id})


@bp.route("/roles/<role_id>/permissions", methods=["GET"])
def list_role_permissions(role_id: str):
    permissions = get_directory().list_role_permissions(role_id)
    return respond_success(
        "Role permissions retrieved successfully",
        [permission.to_dict() for permission in permissions],
    )
