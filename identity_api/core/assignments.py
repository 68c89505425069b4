"""Assignment orchestration: User/Group ↔ Role and Group membership.

Each call validates its ids, performs exactly one remote call and
translates the outcome. There is no retry and no reconciliation loop.

Idempotency:
    - Assigning an already-assigned pair succeeds with
      ``AssignmentOutcome.ALREADY_ASSIGNED`` (the IdP answers 409).
    - Unassigning a pair the IdP does not have raises ``NotAssignedError``
      (the IdP answers 404), never a silent success.
"""
from __future__ import annotations
import logging
from enum import Enum
from typing import List

from .adapter import IdpAdapter
from .exceptions import NotAssignedError, ValidationError
from .models import PrincipalKind, Role, User
from .okta.client import OktaClient
from .okta.exceptions import OktaAPIError
from .okta.groups import GroupService
from .okta.roles import RoleService
from .remote import remote_call

logger = logging.getLogger(__name__)


class AssignmentOutcome(str, Enum):
    ASSIGNED = "ASSIGNED"
    ALREADY_ASSIGNED = "ALREADY_ASSIGNED"
    REMOVED = "REMOVED"


def _require_ids(**ids: str) -> None:
    missing = [name for name, value in ids.items() if not isinstance(value, str) or not value.strip()]
    if missing:
        raise ValidationError(f"Missing required id(s): {', '.join(missing)}", {"fields": missing})


def _principal(kind: PrincipalKind) -> str:
    if not isinstance(kind, PrincipalKind):
        raise ValidationError(f"Unsupported principal kind: {kind!r}")
    return kind.value


class AssignmentOrchestrator:
    """Thin, fail-fast pass-through for relationship changes."""

    def __init__(self, client: OktaClient):
        """Initialize the orchestrator.

        Args:
            client: Shared Okta client
        """
        self.roles = RoleService(client)
        self.groups = GroupService(client)

    def assign(self, kind: PrincipalKind, principal_id: str, role_id: str) -> AssignmentOutcome:
        """Assign a role to a user or group.

        Returns:
            ASSIGNED for a new assignment, ALREADY_ASSIGNED if it existed
        """
        principal = _principal(kind)
        _require_ids(principalId=principal_id, roleId=role_id)
        logger.info(f"Assigning role '{role_id}' to {principal} '{principal_id}'")

        with remote_call(f"assign role to {principal}", principalId=principal_id, roleId=role_id):
            try:
                self.roles.assign_role(principal, principal_id, role_id)
            except OktaAPIError as exc:
                if exc.status_code != 409:
                    raise
                logger.info(f"Role '{role_id}' already assigned to {principal} '{principal_id}'")
                return AssignmentOutcome.ALREADY_ASSIGNED

        return AssignmentOutcome.ASSIGNED

    def unassign(self, kind: PrincipalKind, principal_id: str, role_id: str) -> AssignmentOutcome:
        """Remove a role from a user or group.

        ``role_id`` is the assignment id listed by ``list_assigned_roles``.

        Raises:
            NotAssignedError: If the role is not assigned to the principal
        """
        principal = _principal(kind)
        _require_ids(principalId=principal_id, roleId=role_id)
        logger.info(f"Unassigning role '{role_id}' from {principal} '{principal_id}'")

        with remote_call(f"unassign role from {principal}", principalId=principal_id, roleId=role_id):
            try:
                self.roles.unassign_role(principal, principal_id, role_id)
            except OktaAPIError as exc:
                if exc.status_code != 404:
                    raise
                raise NotAssignedError(
                    f"Role '{role_id}' is not assigned to {principal} '{principal_id}'",
                    {"principalId": principal_id, "roleId": role_id},
                ) from exc

        return AssignmentOutcome.REMOVED

    def add_member(self, group_id: str, user_id: str) -> AssignmentOutcome:
        """Add a user to a group.

        Okta answers 204 for new and existing memberships alike; a 409 is
        still read as ALREADY_ASSIGNED.
        """
        _require_ids(groupId=group_id, userId=user_id)
        logger.info(f"Adding user '{user_id}' to group '{group_id}'")

        with remote_call("add user to group", groupId=group_id, userId=user_id):
            try:
                self.groups.add_user_to_group(group_id, user_id)
            except OktaAPIError as exc:
                if exc.status_code != 409:
                    raise
                return AssignmentOutcome.ALREADY_ASSIGNED

        return AssignmentOutcome.ASSIGNED

    def remove_member(self, group_id: str, user_id: str) -> AssignmentOutcome:
        _require_ids(groupId=group_id, userId=user_id)
        logger.info(f"Removing user '{user_id}' from group '{group_id}'")

        with remote_call("remove user from group", groupId=group_id, userId=user_id):
            try:
                self.groups.remove_user_from_group(group_id, user_id)
            except OktaAPIError as exc:
                if exc.status_code != 404:
                    raise
                raise NotAssignedError(
                    f"User '{user_id}' is not a member of group '{group_id}'",
                    {"groupId": group_id, "userId": user_id},
                ) from exc

        return AssignmentOutcome.REMOVED

    def list_assigned_roles(self, kind: PrincipalKind, principal_id: str) -> List[Role]:
        """Roles assigned to a user or group, in the order the IdP returns them."""
        principal = _principal(kind)
        _require_ids(principalId=principal_id)

        with remote_call(f"list roles of {principal}", principalId=principal_id):
            raw_roles = self.roles.list_assigned_roles(principal, principal_id)
        return [IdpAdapter.normalize_role(raw) for raw in raw_roles]

    def list_group_members(self, group_id: str) -> List[User]:
        _require_ids(groupId=group_id)

        with remote_call("list group members", groupId=group_id):
            raw_users = self.groups.get_group_members(group_id)
        return [IdpAdapter.normalize_user(raw) for raw in raw_users]
