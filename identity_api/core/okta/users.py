"""Okta user management operations."""
from __future__ import annotations
from typing import Any, Dict, List

from .client import OktaClient

USERS_PATH = "/api/v1/users"


class UserService:
    """Remote user operations. Each method is exactly one API call."""

    def __init__(self, client: OktaClient):
        """Initialize user service.

        Args:
            client: Shared Okta client
        """
        self.client = client

    def create_user(self, payload: Dict[str, Any], activate: bool = False) -> Dict[str, Any]:
        """Create a user; ``activate`` asks Okta to activate it in the same call.

        Args:
            payload: Okta user representation ({"profile": ..., "credentials": ...})
            activate: Activate the user immediately

        Returns:
            Created user representation
        """
        params = {"activate": "true" if activate else "false"}
        resp = self.client.post(USERS_PATH, json=payload, params=params)
        return self.client.json_body(resp)

    def get_user(self, user_id: str) -> Dict[str, Any]:
        resp = self.client.get(f"{USERS_PATH}/{user_id}")
        return self.client.json_body(resp)

    def list_users(self) -> List[Dict[str, Any]]:
        resp = self.client.get(USERS_PATH)
        return self.client.json_body(resp) or []

    def update_user(self, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Partial profile update (POST keeps attributes missing from the payload)."""
        resp = self.client.post(f"{USERS_PATH}/{user_id}", json=payload)
        return self.client.json_body(resp)

    def activate_user(self, user_id: str) -> None:
        self.client.post(f"{USERS_PATH}/{user_id}/lifecycle/activate", params={"sendEmail": "false"})

    def deactivate_user(self, user_id: str) -> None:
        self.client.post(f"{USERS_PATH}/{user_id}/lifecycle/deactivate")

    def suspend_user(self, user_id: str) -> None:
        self.client.post(f"{USERS_PATH}/{user_id}/lifecycle/suspend")

    def unsuspend_user(self, user_id: str) -> None:
        self.client.post(f"{USERS_PATH}/{user_id}/lifecycle/unsuspend")

    def delete_user(self, user_id: str) -> None:
        """Permanently delete a user (Okta only allows this once deprovisioned)."""
        self.client.delete(f"{USERS_PATH}/{user_id}")
