"""Okta role management operations.

Custom roles live under ``/api/v1/iam/roles``; assignments of both custom
and standard (administrator) roles live under the principal
(``/api/v1/users/{id}/roles`` or ``/api/v1/groups/{id}/roles``).
"""
from __future__ import annotations
from typing import Any, Dict, List

from .client import OktaClient

ROLES_PATH = "/api/v1/iam/roles"

# Okta's built-in administrator roles, addressed by their type name
STANDARD_ROLE_TYPES = frozenset({
    "SUPER_ADMIN",
    "ORG_ADMIN",
    "APP_ADMIN",
    "USER_ADMIN",
    "HELP_DESK_ADMIN",
    "READ_ONLY_ADMIN",
    "MOBILE_ADMIN",
    "API_ACCESS_MANAGEMENT_ADMIN",
    "REPORT_ADMIN",
    "GROUP_MEMBERSHIP_ADMIN",
})

# Principal collection paths keyed by principal kind value
PRINCIPAL_PATHS = {
    "user": "/api/v1/users",
    "group": "/api/v1/groups",
}


def is_standard_role(role_id: str) -> bool:
    return role_id in STANDARD_ROLE_TYPES


class RoleService:
    """Service for managing Okta roles and role assignments."""

    def __init__(self, client: OktaClient):
        """Initialize role service.

        Args:
            client: Shared Okta client
        """
        self.client = client

    def create_role(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        resp = self.client.post(ROLES_PATH, json=payload)
        return self.client.json_body(resp)

    def get_role(self, role_id: str) -> Dict[str, Any]:
        resp = self.client.get(f"{ROLES_PATH}/{role_id}")
        return self.client.json_body(resp)

    def list_roles(self) -> List[Dict[str, Any]]:
        """List custom roles (Okta wraps them in a ``roles`` array)."""
        resp = self.client.get(ROLES_PATH)
        body = self.client.json_body(resp) or {}
        return body.get("roles") or []

    def replace_role(self, role_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        resp = self.client.put(f"{ROLES_PATH}/{role_id}", json=payload)
        return self.client.json_body(resp)

    def delete_role(self, role_id: str) -> None:
        self.client.delete(f"{ROLES_PATH}/{role_id}")

    def list_role_permissions(self, role_id: str) -> List[Dict[str, Any]]:
        resp = self.client.get(f"{ROLES_PATH}/{role_id}/permissions")
        body = self.client.json_body(resp) or {}
        return body.get("permissions") or []

    def assign_role(self, principal: str, principal_id: str, role_id: str) -> int:
        """Assign a role to a user or group.

        Args:
            principal: "user" or "group"
            principal_id: User or group ID
            role_id: Custom role ID or standard role type

        Returns:
            HTTP status of the call
        """
        if is_standard_role(role_id):
            payload = {"type": role_id}
        else:
            payload = {"type": "CUSTOM", "role": role_id}
        resp = self.client.post(f"{PRINCIPAL_PATHS[principal]}/{principal_id}/roles", json=payload)
        return resp.status_code

    def unassign_role(self, principal: str, principal_id: str, role_id: str) -> int:
        """Remove a role assignment from a user or group.

        Okta keys this call by the role-assignment id (the ``id`` returned
        by ``list_assigned_roles``), not by the custom role id or standard
        type that ``assign_role`` takes. Callers unassign with the id they
        read from the principal's role list.

        Args:
            principal: "user" or "group"
            principal_id: User or group ID
            role_id: Role-assignment ID

        Returns:
            HTTP status of the call
        """
        resp = self.client.delete(f"{PRINCIPAL_PATHS[principal]}/{principal_id}/roles/{role_id}")
        return resp.status_code

    def list_assigned_roles(self, principal: str, principal_id: str) -> List[Dict[str, Any]]:
        resp = self.client.get(f"{PRINCIPAL_PATHS[principal]}/{principal_id}/roles")
        return self.client.json_body(resp) or []
