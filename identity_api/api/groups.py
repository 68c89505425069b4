"""Group endpoints: CRUD, membership and role assignments."""
from __future__ import annotations

from flask import Blueprint, request

from identity_api.core.models import (
    CreateGroupRequest,
    GroupRoleAssignment,
    PrincipalKind,
    UpdateGroupRequest,
    UserGroupAssignment,
)
from .helpers import get_directory, json_body
from .responses import respond_success

bp = Blueprint("groups", __name__)

EXPAND_MEMBERS = "members"


@bp.route("/groups", methods=["GET"])
def list_groups():
    groups = get_directory().list_groups()
    return respond_success("Groups retrieved successfully", [group.to_dict() for group in groups])


@bp.route("/groups", methods=["POST"])
def create_group():
    create_request = CreateGroupRequest.from_dict(json_body())
    group = get_directory().create_group(create_request)
    return respond_success("Group created successfully", group.to_dict(), 201)


@bp.route("/groups/<group_id>", methods=["GET"])
def get_group(group_id: str):
    """Read a group.

    Query parameters:
        - expand=members: also list the group's members (second IdP call)
    """
    expand = {part.strip() for part in request.args.get("expand", "").split(",")}
    group = get_directory().get_group(group_id, include_members=EXPAND_MEMBERS in expand)
    return respond_success("Group retrieved successfully", group.to_dict())


@bp.route("/groups/<group_id>", methods=["PUT"])
def update_group(group_id: str):
    update_request = UpdateGroupRequest.from_dict(json_body())
    group = get_directory().update_group(group_id, update_request)
    return respond_success("Group updated successfully", group.to_dict())


@bp.route("/groups/<group_id>", methods=["DELETE"])
def delete_group(group_id: str):
    get_directory().delete_group(group_id)
    return respond_success("Group deleted successfully", {"groupId": group_id})


# ─────────────────────────────────────────────────────────────────────────────
# Membership
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/groups/<group_id>/members", methods=["GET"])
def list_group_members(group_id: str):
    members = get_directory().list_group_members(group_id)
    return respond_success("Group members retrieved successfully", [user.to_dict() for user in members])


@bp.route("/groups/<group_id>/users/<user_id>", methods=["PUT"])
@bp.route("/groups/<group_id>/members/<user_id>", methods=["PUT"])
def add_group_member(group_id: str, user_id: str):
    outcome = get_directory().add_group_member(group_id, user_id)
    return respond_success(
        "User added to group successfully",
        {**UserGroupAssignment(user_id, group_id).to_dict(), "outcome": outcome.value},
    )


@bp.route("/groups/<group_id>/users/<user_id>", methods=["DELETE"])
@bp.route("/groups/<group_id>/members/<user_id>", methods=["DELETE"])
def remove_group_member(group_id: str, user_id: str):
    outcome = get_directory().remove_group_member(group_id, user_id)
    return respond_success(
        "User removed from group successfully",
        {**UserGroupAssignment(user_id, group_id).to_dict(), "outcome": outcome.value},
    )


# ─────────────────────────────────────────────────────────────────────────────
# Role assignments
# ─────────────────────────────────────────────────────────────────────────────

@bp.route("/groups/<group_id>/roles", methods=["GET"])
def list_group_roles(group_id: str):
    roles = get_directory().list_assigned_roles(PrincipalKind.GROUP, group_id)
    return respond_success("Group roles retrieved successfully", [role.to_dict() for role in roles])


@bp.route("/groups/<group_id>/roles/<role_id>", methods=["PUT"])
def assign_role_to_group(group_id: str, role_id: str):
    outcome = get_directory().assign_role(PrincipalKind.GROUP, group_id, role_id)
    return respond_success(
        "Role assigned to group successfully",
        {**GroupRoleAssignment(group_id, role_id).to_dict(), "outcome": outcome.value},
    )


@bp.route("/groups/<group_id>/roles/<role_id>", methods=["DELETE"])
def unassign_role_from_group(group_id: str, role_id: str):
    outcome = get_directory().unassign_role(PrincipalKind.GROUP, group_id, role_id)
    return respond_success(
        "Role unassigned from group successfully",
        {**GroupRoleAssignment(group_id, role_id).to_dict(), "outcome": outcome.value},
    )
