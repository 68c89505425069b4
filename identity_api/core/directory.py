"""Directory Service Layer: the only surface the HTTP layer calls.

Composes the Okta services, the adapter, the partial-update merger and the
assignment orchestrator. Every error leaving this module is a taxonomy
error from ``identity_api.core.exceptions``.

Architecture:
    HTTP API (/api/v1/*) ──> DirectoryService ──┬──> merger
                                                ├──> AssignmentOrchestrator
                                                └──> okta.* ──> IdP

User lifecycle (status is owned by the IdP; transitions are only requested):
    PROVISIONED ──activate──> ACTIVE ⇄ SUSPENDED
    ACTIVE ──deactivate──> DEPROVISIONED
    any ──delete (deactivate, then delete)──> removed
"""
from __future__ import annotations
import logging
from typing import List

from .adapter import IdpAdapter
from .assignments import AssignmentOrchestrator, AssignmentOutcome
from .exceptions import CanceledError, ImmutableEntityError, PartialFailureError, ValidationError
from .merger import NO_CHANGES, merge_group_update, merge_role_update, merge_user_update
from .models import (
    CreateGroupRequest,
    CreateRoleRequest,
    CreateUserRequest,
    Group,
    Permission,
    PrincipalKind,
    Role,
    UpdateGroupRequest,
    UpdateRoleRequest,
    UpdateUserRequest,
    User,
)
from .okta.client import OktaClient
from .okta.exceptions import OktaAPIError, OktaTransportError
from .okta.groups import GroupService
from .okta.roles import RoleService, is_standard_role
from .okta.users import UserService
from .remote import remote_call

logger = logging.getLogger(__name__)

DEPROVISIONED_STATE = "Deprovisioned"


def _require_id(name: str, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{name} is required", {"fields": [name]})


class DirectoryService:
    """Public identity operations.

    Usage:
        directory = DirectoryService(OktaClient(base_url, token))
        user = directory.create_user(CreateUserRequest(email="a@b.com", login="a"))
    """

    def __init__(self, client: OktaClient):
        """Initialize the facade.

        Args:
            client: Shared Okta client (one connection pool per process)
        """
        self.client = client
        self.users = UserService(client)
        self.groups = GroupService(client)
        self.roles = RoleService(client)
        self.assignments = AssignmentOrchestrator(client)

    def check_connection(self) -> None:
        """Probe the IdP (org settings) for readiness checks."""
        with remote_call("reach identity provider"):
            self.client.test_connection()

    # ─────────────────────────────────────────────────────────────────────
    # Users
    # ─────────────────────────────────────────────────────────────────────

    def create_user(self, request: CreateUserRequest) -> User:
        """Create a user with one remote call.

        The returned status is whatever the IdP reports (ACTIVE only if it
        activated the user); it is never inferred locally.
        """
        logger.info(f"Creating user in Okta (login={request.login}, activate={request.activate})")
        payload = IdpAdapter.denormalize_user(request)

        with remote_call("create user", login=request.login or ""):
            raw = self.users.create_user(payload, activate=request.activate)

        user = IdpAdapter.normalize_user(raw)
        logger.info(f"User created in Okta (id={user.id}, status={user.status})")
        return user

    def get_user(self, user_id: str) -> User:
        _require_id("userId", user_id)
        with remote_call("get user", userId=user_id):
            raw = self.users.get_user(user_id)
        return IdpAdapter.normalize_user(raw)

    def list_users(self) -> List[User]:
        with remote_call("list users"):
            raw_users = self.users.list_users()
        users = [IdpAdapter.normalize_user(raw) for raw in raw_users]
        logger.info(f"Users retrieved from Okta (count={len(users)})")
        return users

    def update_user(self, user_id: str, request: UpdateUserRequest) -> User:
        """Apply a partial update; an empty request becomes a plain read."""
        _require_id("userId", user_id)
        plan = merge_user_update(user_id, request)
        if plan is NO_CHANGES:
            logger.info(f"No user changes requested (id={user_id}); reading instead")
            return self.get_user(user_id)

        with remote_call("update user", userId=user_id):
            raw = self.users.update_user(user_id, plan.payload)
        logger.info(f"User updated in Okta (id={user_id}, fields={sorted(plan.payload['profile'])})")
        return IdpAdapter.normalize_user(raw)

    def delete_user(self, user_id: str) -> None:
        """Deactivate, then delete.

        Not atomic: when deactivation succeeds and deletion fails the user
        is left deprovisioned and ``PartialFailureError`` is raised.
        """
        _require_id("userId", user_id)
        logger.info(f"Deleting user in Okta (id={user_id})")

        with remote_call("deactivate user", userId=user_id):
            self.users.deactivate_user(user_id)

        try:
            self.users.delete_user(user_id)
        except (OktaAPIError, OktaTransportError, CanceledError) as exc:
            logger.warning(f"User deactivated but delete failed (id={user_id}): {type(exc).__name__}")
            raise PartialFailureError(
                f"User '{user_id}' was deactivated but could not be deleted",
                step="delete",
                entity_state=DEPROVISIONED_STATE,
                details={"userId": user_id, "cause": type(exc).__name__},
            ) from exc

        logger.info(f"User deleted in Okta (id={user_id})")

    def activate_user(self, user_id: str) -> None:
        self._transition(user_id, "activate", self.users.activate_user)

    def deactivate_user(self, user_id: str) -> None:
        self._transition(user_id, "deactivate", self.users.deactivate_user)

    def suspend_user(self, user_id: str) -> None:
        self._transition(user_id, "suspend", self.users.suspend_user)

    def unsuspend_user(self, user_id: str) -> None:
        self._transition(user_id, "unsuspend", self.users.unsuspend_user)

    def _transition(self, user_id: str, action: str, call) -> None:
        _require_id("userId", user_id)
        logger.info(f"Requesting '{action}' for user {user_id}")
        with remote_call(f"{action} user", userId=user_id):
            call(user_id)
        logger.info(f"'{action}' accepted for user {user_id}")

    # ─────────────────────────────────────────────────────────────────────
    # Groups
    # ─────────────────────────────────────────────────────────────────────

    def create_group(self, request: CreateGroupRequest) -> Group:
        """Create a group. Name validation is left to the IdP."""
        logger.info(f"Creating group in Okta (name={request.name})")
        with remote_call("create group", name=request.name or ""):
            raw = self.groups.create_group(IdpAdapter.denormalize_group(request))
        return IdpAdapter.normalize_group(raw)

    def get_group(self, group_id: str, include_members: bool = False) -> Group:
        """Read a group; with ``include_members`` a second, sequential call fills members."""
        _require_id("groupId", group_id)
        with remote_call("get group", groupId=group_id):
            raw = self.groups.get_group(group_id)
        group = IdpAdapter.normalize_group(raw)

        if include_members:
            group.members = self.assignments.list_group_members(group_id)
        return group

    def list_groups(self) -> List[Group]:
        with remote_call("list groups"):
            raw_groups = self.groups.list_groups()
        groups = [IdpAdapter.normalize_group(raw) for raw in raw_groups]
        logger.info(f"Groups retrieved from Okta (count={len(groups)})")
        return groups

    def update_group(self, group_id: str, request: UpdateGroupRequest) -> Group:
        _require_id("groupId", group_id)
        plan = merge_group_update(group_id, request)
        if plan is NO_CHANGES:
            return self.get_group(group_id)

        self._ensure_group_mutable(group_id)
        with remote_call("update group", groupId=group_id):
            raw = self.groups.replace_group(group_id, plan.payload)
        logger.info(f"Group updated in Okta (id={group_id})")
        return IdpAdapter.normalize_group(raw)

    def delete_group(self, group_id: str) -> None:
        _require_id("groupId", group_id)
        self._ensure_group_mutable(group_id)
        with remote_call("delete group", groupId=group_id):
            self.groups.delete_group(group_id)
        logger.info(f"Group deleted from Okta (id={group_id})")

    def list_group_members(self, group_id: str) -> List[User]:
        return self.assignments.list_group_members(group_id)

    def add_group_member(self, group_id: str, user_id: str) -> AssignmentOutcome:
        return self.assignments.add_member(group_id, user_id)

    def remove_group_member(self, group_id: str, user_id: str) -> AssignmentOutcome:
        return self.assignments.remove_member(group_id, user_id)

    def _ensure_group_mutable(self, group_id: str) -> None:
        group = self.get_group(group_id)
        if not group.is_mutable:
            group_type = group.type.value if group.type else "UNKNOWN"
            raise ImmutableEntityError(
                f"Group '{group_id}' is not managed by the identity provider and cannot be changed",
                {"groupId": group_id, "groupType": group_type},
            )

    # ─────────────────────────────────────────────────────────────────────
    # Roles
    # ─────────────────────────────────────────────────────────────────────

    def create_role(self, request: CreateRoleRequest) -> Role:
        logger.info(f"Creating role in Okta (name={request.name})")
        with remote_call("create role", name=request.name or ""):
            raw = self.roles.create_role(IdpAdapter.denormalize_role(request))
        return IdpAdapter.normalize_role(raw)

    def get_role(self, role_id: str) -> Role:
        _require_id("roleId", role_id)
        with remote_call("get role", roleId=role_id):
            raw = self.roles.get_role(role_id)
        return IdpAdapter.normalize_role(raw)

    def list_roles(self) -> List[Role]:
        with remote_call("list roles"):
            raw_roles = self.roles.list_roles()
        return [IdpAdapter.normalize_role(raw) for raw in raw_roles]

    def update_role(self, role_id: str, request: UpdateRoleRequest) -> Role:
        _require_id("roleId", role_id)
        self._ensure_role_mutable(role_id)
        plan = merge_role_update(role_id, request)
        if plan is NO_CHANGES:
            return self.get_role(role_id)

        with remote_call("update role", roleId=role_id):
            raw = self.roles.replace_role(role_id, plan.payload)
        logger.info(f"Role updated in Okta (id={role_id})")
        return IdpAdapter.normalize_role(raw)

    def delete_role(self, role_id: str) -> None:
        """Delete a custom role; System roles fail before any remote call."""
        _require_id("roleId", role_id)
        self._ensure_role_mutable(role_id)
        with remote_call("delete role", roleId=role_id):
            self.roles.delete_role(role_id)
        logger.info(f"Role deleted from Okta (id={role_id})")

    def list_role_permissions(self, role_id: str) -> List[Permission]:
        _require_id("roleId", role_id)
        with remote_call("list role permissions", roleId=role_id):
            raw_permissions = self.roles.list_role_permissions(role_id)
        return [IdpAdapter.normalize_permission(raw) for raw in raw_permissions]

    @staticmethod
    def _ensure_role_mutable(role_id: str) -> None:
        if is_standard_role(role_id):
            raise ImmutableEntityError(
                f"Role '{role_id}' is a System role and cannot be changed",
                {"roleId": role_id, "roleType": "SYSTEM"},
            )

    # ─────────────────────────────────────────────────────────────────────
    # Role assignments
    # ─────────────────────────────────────────────────────────────────────

    def assign_role(self, kind: PrincipalKind, principal_id: str, role_id: str) -> AssignmentOutcome:
        return self.assignments.assign(kind, principal_id, role_id)

    def unassign_role(self, kind: PrincipalKind, principal_id: str, role_id: str) -> AssignmentOutcome:
        return self.assignments.unassign(kind, principal_id, role_id)

    def list_assigned_roles(self, kind: PrincipalKind, principal_id: str) -> List[Role]:
        return self.assignments.list_assigned_roles(kind, principal_id)


__all__ = ["DirectoryService", "AssignmentOutcome"]
