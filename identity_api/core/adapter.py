"""Okta ↔ domain model transformations.

This module converts Okta user, group, role and permission representations
into the domain model, and builds the Okta create payloads from domain
requests.

Usage:
    # Okta → domain
    user = IdpAdapter.normalize_user(okta_user)

    # domain → Okta
    payload = IdpAdapter.denormalize_group(CreateGroupRequest(name="eng"))
"""
from __future__ import annotations
import copy
import logging
from typing import Any, Dict, Optional

from .exceptions import AdapterError
from .models import (
    CreateGroupRequest,
    CreateRoleRequest,
    CreateUserRequest,
    Group,
    GroupType,
    Permission,
    Profile,
    Role,
    RoleType,
    User,
    UserStatus,
)
from .okta.roles import is_standard_role

logger = logging.getLogger(__name__)

# Profile keys lifted into first-class fields; everything else stays in the bag
USER_PROFILE_FIELDS = ("email", "login", "firstName", "lastName")
GROUP_PROFILE_FIELDS = ("name", "description")


def _identity(external: Any, entity: str) -> str:
    if not isinstance(external, dict):
        raise AdapterError(f"Identity provider returned a malformed {entity}")
    entity_id = external.get("id")
    if not isinstance(entity_id, str) or not entity_id:
        raise AdapterError(f"Identity provider returned a {entity} without an id")
    return entity_id


def _section(external: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = external.get(key)
    return value if isinstance(value, dict) else {}


def _text(section: Dict[str, Any], key: str) -> str:
    value = section.get(key)
    return value if isinstance(value, str) else ""


def _extra_attributes(profile: Dict[str, Any], lifted: tuple) -> Profile:
    return {key: copy.deepcopy(value) for key, value in profile.items() if key not in lifted}


def _status(raw: Any) -> Optional[UserStatus]:
    if raw is None:
        return None
    try:
        return UserStatus(raw)
    except ValueError:
        logger.warning(f"Unknown user status from identity provider: {raw!r}")
        return None


def _group_type(raw: Any) -> Optional[GroupType]:
    if raw is None:
        return None
    try:
        return GroupType(raw)
    except ValueError:
        logger.warning(f"Unknown group type from identity provider: {raw!r}")
        return None


class IdpAdapter:
    """Bidirectional transformer for Okta/domain representations."""

    @staticmethod
    def normalize_user(external: Dict[str, Any]) -> User:
        """Convert an Okta user to a domain User.

        Args:
            external: Okta user representation

        Returns:
            User snapshot

        Raises:
            AdapterError: If the representation has no id

        Example:
            >>> user = IdpAdapter.normalize_user({
            ...     "id": "00u1",
            ...     "status": "ACTIVE",
            ...     "created": "2024-01-01T00:00:00.000Z",
            ...     "profile": {"login": "alice@example.com", "department": "eng"},
            ... })
            >>> user.login, user.profile
            ('alice@example.com', {'department': 'eng'})
        """
        user_id = _identity(external, "user")
        profile = _section(external, "profile")

        return User(
            id=user_id,
            email=_text(profile, "email"),
            login=_text(profile, "login"),
            first_name=_text(profile, "firstName"),
            last_name=_text(profile, "lastName"),
            status=_status(external.get("status")),
            created=external.get("created"),
            activated=external.get("activated"),
            last_login=external.get("lastLogin"),
            last_updated=external.get("lastUpdated"),
            profile=_extra_attributes(profile, USER_PROFILE_FIELDS),
        )

    @staticmethod
    def normalize_group(external: Dict[str, Any]) -> Group:
        """Convert an Okta group to a domain Group.

        A group without a ``profile`` object keeps an empty name, description
        and profile instead of failing.
        """
        group_id = _identity(external, "group")
        profile = _section(external, "profile")

        return Group(
            id=group_id,
            name=_text(profile, "name"),
            description=_text(profile, "description"),
            type=_group_type(external.get("type")),
            created=external.get("created"),
            last_updated=external.get("lastUpdated"),
            profile=_extra_attributes(profile, GROUP_PROFILE_FIELDS),
        )

    @staticmethod
    def normalize_role(external: Dict[str, Any]) -> Role:
        """Convert an Okta role (custom role or role assignment) to a domain Role.

        Custom roles from ``/iam/roles`` carry no ``type``; assignments carry
        ``CUSTOM`` or the standard administrator type name.
        """
        role_id = _identity(external, "role")
        raw_type = external.get("type")
        if raw_type is None:
            role_type = RoleType.SYSTEM if is_standard_role(role_id) else RoleType.CUSTOM
        elif raw_type == RoleType.CUSTOM.value:
            role_type = RoleType.CUSTOM
        else:
            role_type = RoleType.SYSTEM

        return Role(
            id=role_id,
            name=_text(external, "label"),
            description=_text(external, "description"),
            type=role_type,
            created=external.get("created"),
            last_updated=external.get("lastUpdated"),
        )

    @staticmethod
    def normalize_permission(external: Dict[str, Any]) -> Permission:
        """Convert an Okta permission (e.g. label ``okta.users.read``).

        The label is split on its last dot into resource and action.
        Permissions are identified by their label, so the label doubles as id.
        """
        if not isinstance(external, dict):
            raise AdapterError("Identity provider returned a malformed permission")
        label = _text(external, "label")
        if not label:
            raise AdapterError("Identity provider returned a permission without a label")

        resource, _, action = label.rpartition(".")
        if not resource:
            resource, action = label, ""

        conditions = external.get("conditions")
        return Permission(
            id=label,
            name=label,
            resource=resource,
            action=action,
            scope=_text(conditions, "scope") if isinstance(conditions, dict) else "",
            created=external.get("created"),
            last_updated=external.get("lastUpdated"),
        )

    @staticmethod
    def denormalize_user(request: CreateUserRequest) -> Dict[str, Any]:
        """Build the Okta create-user payload.

        Custom profile attributes go first so the first-class fields always win.
        The ``activate`` flag is a query parameter, not part of the body.
        """
        profile: Dict[str, Any] = copy.deepcopy(request.profile) if request.profile else {}
        profile["email"] = request.email or ""
        profile["login"] = request.login or ""
        profile["firstName"] = request.first_name or ""
        profile["lastName"] = request.last_name or ""

        payload: Dict[str, Any] = {"profile": profile}
        if request.password:
            payload["credentials"] = {"password": {"value": request.password}}
        return payload

    @staticmethod
    def denormalize_group(request: CreateGroupRequest) -> Dict[str, Any]:
        profile: Dict[str, Any] = copy.deepcopy(request.profile) if request.profile else {}
        profile["name"] = request.name or ""
        profile["description"] = request.description or ""
        return {"profile": profile}

    @staticmethod
    def denormalize_role(request: CreateRoleRequest) -> Dict[str, Any]:
        return {
            "label": request.name or "",
            "description": request.description or "",
            "permissions": list(request.permissions),
        }
