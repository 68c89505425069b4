"""Okta group management operations."""
from __future__ import annotations
from typing import Any, Dict, List

from .client import OktaClient

GROUPS_PATH = "/api/v1/groups"


class GroupService:
    """Service for managing Okta groups and group membership."""

    def __init__(self, client: OktaClient):
        """Initialize group service.

        Args:
            client: Shared Okta client
        """
        self.client = client

    def create_group(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        resp = self.client.post(GROUPS_PATH, json=payload)
        return self.client.json_body(resp)

    def get_group(self, group_id: str) -> Dict[str, Any]:
        resp = self.client.get(f"{GROUPS_PATH}/{group_id}")
        return self.client.json_body(resp)

    def list_groups(self) -> List[Dict[str, Any]]:
        resp = self.client.get(GROUPS_PATH)
        return self.client.json_body(resp) or []

    def replace_group(self, group_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        resp = self.client.put(f"{GROUPS_PATH}/{group_id}", json=payload)
        return self.client.json_body(resp)

    def delete_group(self, group_id: str) -> None:
        self.client.delete(f"{GROUPS_PATH}/{group_id}")

    def add_user_to_group(self, group_id: str, user_id: str) -> int:
        """Add a user to a group.

        Returns:
            HTTP status of the call (Okta answers 204 whether or not the
            user was already a member)
        """
        resp = self.client.put(f"{GROUPS_PATH}/{group_id}/users/{user_id}")
        return resp.status_code

    def remove_user_from_group(self, group_id: str, user_id: str) -> int:
        resp = self.client.delete(f"{GROUPS_PATH}/{group_id}/users/{user_id}")
        return resp.status_code

    def get_group_members(self, group_id: str) -> List[Dict[str, Any]]:
        """Retrieve all members of a group, in the order Okta returns them."""
        resp = self.client.get(f"{GROUPS_PATH}/{group_id}/users")
        return self.client.json_body(resp) or []
