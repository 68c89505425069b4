"""Identity/access domain model.

Entities are request-scoped snapshots: every operation builds fresh
instances from an IdP response and nothing is kept across requests.
Timestamps are the IdP's wire strings, passed through untouched.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .exceptions import ValidationError

# Open JSON map used for provider-defined profile attributes
ProfileValue = Union[None, bool, int, float, str, List["ProfileValue"], Dict[str, "ProfileValue"]]
Profile = Dict[str, ProfileValue]


class UserStatus(str, Enum):
    """Lifecycle status owned by the IdP."""

    PROVISIONED = "PROVISIONED"
    ACTIVE = "ACTIVE"
    RECOVERY = "RECOVERY"
    PASSWORD_EXPIRED = "PASSWORD_EXPIRED"
    LOCKED_OUT = "LOCKED_OUT"
    SUSPENDED = "SUSPENDED"
    DEPROVISIONED = "DEPROVISIONED"


class GroupType(str, Enum):
    BUILT_IN = "BUILT_IN"
    APP_MANAGED = "APP_GROUP"
    IDP_MANAGED = "OKTA_GROUP"


class RoleType(str, Enum):
    SYSTEM = "SYSTEM"
    CUSTOM = "CUSTOM"


class PrincipalKind(str, Enum):
    """Anything a Role can be assigned to."""

    USER = "user"
    GROUP = "group"


def _enum_value(value: Optional[Enum]) -> Optional[str]:
    return value.value if value is not None else None


@dataclass
class Permission:
    """Atomic capability, identified by (resource, action) and optional scope."""

    resource: str
    action: str
    scope: str = ""
    id: str = ""
    name: str = ""
    description: str = ""
    created: Optional[str] = None
    last_updated: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "resource": self.resource,
            "action": self.action,
            "created": self.created,
            "lastUpdated": self.last_updated,
        }
        if self.scope:
            data["scope"] = self.scope
        return data


@dataclass
class Role:
    id: str
    name: str = ""
    description: str = ""
    type: RoleType = RoleType.CUSTOM
    created: Optional[str] = None
    last_updated: Optional[str] = None
    permissions: List[Permission] = field(default_factory=list)

    @property
    def is_mutable(self) -> bool:
        return self.type is RoleType.CUSTOM

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type.value,
            "created": self.created,
            "lastUpdated": self.last_updated,
        }
        if self.permissions:
            data["permissions"] = [p.to_dict() for p in self.permissions]
        return data


@dataclass
class User:
    """Identity principal.

    ``groups`` and ``roles`` are back-references filled only when a single
    response asks for them; the user owns neither.
    """

    id: str
    email: str = ""
    login: str = ""
    first_name: str = ""
    last_name: str = ""
    status: Optional[UserStatus] = None
    created: Optional[str] = None
    activated: Optional[str] = None
    last_login: Optional[str] = None
    last_updated: Optional[str] = None
    profile: Profile = field(default_factory=dict)
    groups: List["Group"] = field(default_factory=list)
    roles: List[Role] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "login": self.login,
            "status": _enum_value(self.status),
            "created": self.created,
        }
        # Optional timestamps are omitted rather than null
        if self.activated:
            data["activated"] = self.activated
        if self.last_login:
            data["lastLogin"] = self.last_login
        if self.last_updated:
            data["lastUpdated"] = self.last_updated
        if self.profile:
            data["profile"] = self.profile
        if self.groups:
            data["groups"] = [g.to_dict() for g in self.groups]
        if self.roles:
            data["roles"] = [r.to_dict() for r in self.roles]
        return data


@dataclass
class Group:
    id: str
    name: str = ""
    description: str = ""
    type: Optional[GroupType] = None
    created: Optional[str] = None
    last_updated: Optional[str] = None
    profile: Profile = field(default_factory=dict)
    members: List[User] = field(default_factory=list)
    roles: List[Role] = field(default_factory=list)

    @property
    def is_mutable(self) -> bool:
        """Only groups managed by the IdP itself can be changed here."""
        return self.type is GroupType.IDP_MANAGED

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": _enum_value(self.type),
            "created": self.created,
            "lastUpdated": self.last_updated,
        }
        if self.profile:
            data["profile"] = self.profile
        if self.members:
            data["members"] = [m.to_dict() for m in self.members]
        if self.roles:
            data["roles"] = [r.to_dict() for r in self.roles]
        return data


# ─────────────────────────────────────────────────────────────────────────────
# Assignment relations (tuples without identity)
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserGroupAssignment:
    user_id: str
    group_id: str

    def to_dict(self) -> Dict[str, str]:
        return {"userId": self.user_id, "groupId": self.group_id}


@dataclass(frozen=True)
class UserRoleAssignment:
    user_id: str
    role_id: str

    def to_dict(self) -> Dict[str, str]:
        return {"userId": self.user_id, "roleId": self.role_id}


@dataclass(frozen=True)
class GroupRoleAssignment:
    group_id: str
    role_id: str

    def to_dict(self) -> Dict[str, str]:
        return {"groupId": self.group_id, "roleId": self.role_id}


# ─────────────────────────────────────────────────────────────────────────────
# Request types
# ─────────────────────────────────────────────────────────────────────────────

def _get_str(payload: Dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"'{key}' must be a string", {"field": key})
    return value


def _get_profile(payload: Dict[str, Any], key: str = "profile") -> Optional[Profile]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValidationError(f"'{key}' must be an object", {"field": key})
    return value


def _require_object(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


@dataclass
class CreateUserRequest:
    email: Optional[str] = None
    login: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    password: Optional[str] = None
    profile: Optional[Profile] = None
    activate: bool = False

    @classmethod
    def from_dict(cls, payload: Any) -> "CreateUserRequest":
        payload = _require_object(payload)
        activate = payload.get("activate", False)
        if not isinstance(activate, bool):
            raise ValidationError("'activate' must be a boolean", {"field": "activate"})
        return cls(
            email=_get_str(payload, "email"),
            login=_get_str(payload, "login"),
            first_name=_get_str(payload, "firstName"),
            last_name=_get_str(payload, "lastName"),
            password=_get_str(payload, "password"),
            profile=_get_profile(payload),
            activate=activate,
        )


@dataclass
class UpdateUserRequest:
    """Every field is optional; None or empty means leave unchanged."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile: Optional[Profile] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "UpdateUserRequest":
        payload = _require_object(payload)
        return cls(
            first_name=_get_str(payload, "firstName"),
            last_name=_get_str(payload, "lastName"),
            profile=_get_profile(payload),
        )


@dataclass
class CreateGroupRequest:
    name: Optional[str] = None
    description: Optional[str] = None
    profile: Optional[Profile] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "CreateGroupRequest":
        payload = _require_object(payload)
        return cls(
            name=_get_str(payload, "name"),
            description=_get_str(payload, "description"),
            profile=_get_profile(payload),
        )


@dataclass
class UpdateGroupRequest:
    name: Optional[str] = None
    description: Optional[str] = None
    profile: Optional[Profile] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "UpdateGroupRequest":
        payload = _require_object(payload)
        return cls(
            name=_get_str(payload, "name"),
            description=_get_str(payload, "description"),
            profile=_get_profile(payload),
        )


@dataclass
class CreateRoleRequest:
    name: Optional[str] = None
    description: Optional[str] = None
    permissions: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> "CreateRoleRequest":
        payload = _require_object(payload)
        permissions = payload.get("permissions") or []
        if not isinstance(permissions, list) or not all(isinstance(p, str) for p in permissions):
            raise ValidationError("'permissions' must be a list of strings", {"field": "permissions"})
        return cls(
            name=_get_str(payload, "name"),
            description=_get_str(payload, "description"),
            permissions=list(permissions),
        )


@dataclass
class UpdateRoleRequest:
    name: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "UpdateRoleRequest":
        payload = _require_object(payload)
        return cls(
            name=_get_str(payload, "name"),
            description=_get_str(payload, "description"),
        )
