"""User endpoints: CRUD, lifecycle transitions and role assignments.

Architecture:
    /api/v1/users/* -> identity_api/core/directory.py -> Okta
"""
from __future__ import annotations

from flask import Blueprint

from identity_api.core.models import CreateUserRequest, PrincipalKind, UpdateUserRequest, UserRoleAssignment
from .helpers import get_directory, json_body
from .responses import respond_success

bp = Blueprint("users", __name__)


# ─────────────────────────────────────────────────────────────────────────────
# CRUD
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/users", methods=["GET"])
def list_users():
    users = get_directory().list_users()
    return respond_success("Users retrieved successfully", [user.to_dict() for user in users])


@bp.route("/users", methods=["POST"])
def create_user():
    """Create a user (optionally activated).

    Body (camelCase):
        email, login, firstName, lastName, password, profile, activate

    Returns:
        201 Created with the user as stored by the IdP
    """
    create_request = CreateUserRequest.from_dict(json_body())
    user = get_directory().create_user(create_request)
    return respond_success("User created successfully", user.to_dict(), 201)


@bp.route("/users/<user_id>", methods=["GET"])
def get_user(user_id: str):
    user = get_directory().get_user(user_id)
    return respond_success("User retrieved successfully", user.to_dict())


@bp.route("/users/<user_id>", methods=["PUT"])
def update_user(user_id: str):
    """Partial update: only non-empty fields are sent to the IdP."""
    update_request = UpdateUserRequest.from_dict(json_body())
    user = get_directory().update_user(user_id, update_request)
    return respond_success("User updated successfully", user.to_dict())


@bp.route("/users/<user_id>", methods=["DELETE"])
def delete_user(user_id: str):
    get_directory().delete_user(user_id)
    return respond_success("User deleted successfully", {"userId": user_id})


# ─────────────────────────────────────────────────────────────────────────────
# Lifecycle
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/users/<user_id>/activate", methods=["POST"])
def activate_user(user_id: str):
    get_directory().activate_user(user_id)
    return respond_success("User activated successfully", {"userId": user_id})


@bp.route("/users/<user_id>/deactivate", methods=["POST"])
def deactivate_user(user_id: str):
    get_directory().deactivate_user(user_id)
    return respond_success("User deactivated successfully", {"userId": user_id})


@bp.route("/users/<user_id>/suspend", methods=["POST"])
def suspend_user(user_id: str):
    get_directory().suspend_user(user_id)
    return respond_success("User suspended successfully", {"userId": user_id})


@bp.route("/users/<user_id>/unsuspend", methods=["POST"])
def unsuspend_user(user_id: str):
    get_directory().unsuspend_user(user_id)
    return respond_success("User unsuspended successfully", {"userId": user_id})


# ─────────────────────────────────────────────────────────────────────────────
# Role assignments
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/users/<user_id>/roles", methods=["GET"])
def list_user_roles(user_id: str):
    roles = get_directory().list_assigned_roles(PrincipalKind.USER, user_id)
    return respond_success("User roles retrieved successfully", [role.to_dict() for role in roles])


@bp.route("/users/<user_id>/roles/<role_id>", methods=["PUT"])
def assign_role_to_user(user_id: str, role_id: str):
    outcome = get_directory().assign_role(PrincipalKind.USER, user_id, role_id)
    return respond_success(
        "Role assigned to user successfully",
        {**UserRoleAssignment(user_id, role_id).to_dict(), "outcome": outcome.value},
    )


@bp.route("/users/<user_id>/roles/<role_id>", methods=["DELETE"])
def unassign_role_from_user(user_id: str, role_id: str):
    outcome = get_directory().unassign_role(PrincipalKind.USER, user_id, role_id)
    return respond_success(
        "Role unassigned from user successfully",
        {**UserRoleAssignment(user_id, role_id).to_dict(), "outcome": outcome.value},
    )
