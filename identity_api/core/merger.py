"""Partial-update payload builder.

Update requests name only the fields to change. A field counts as supplied
when it holds a non-empty string or a non-empty mapping: ``None`` (field
omitted) and ``""``/``{}`` (field sent empty) both mean "leave unchanged".
Request objects keep the two cases apart, but this module treats them
alike, so an update can never blank out an attribute.

When nothing is supplied the result is ``NO_CHANGES`` and the caller reads
the entity instead of writing it. The payload only ever contains supplied
fields; no defaults are filled in.
"""
from __future__ import annotations
import copy
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .models import Profile, UpdateGroupRequest, UpdateRoleRequest, UpdateUserRequest


class _NoChanges:
    """Sentinel type: the update request supplied nothing."""

    _instance: Optional["_NoChanges"] = None

    def __new__(cls) -> "_NoChanges":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_CHANGES"

    def __bool__(self) -> bool:
        return False


NO_CHANGES = _NoChanges()


@dataclass(frozen=True)
class UpdatePlan:
    """Minimal Okta update payload for one entity."""

    entity_id: str
    payload: Dict[str, Any]


MergeResult = Union[UpdatePlan, _NoChanges]


def _supplied_text(value: Optional[str]) -> bool:
    return isinstance(value, str) and value != ""


def _supplied_profile(value: Optional[Profile]) -> bool:
    return isinstance(value, dict) and len(value) > 0


def merge_user_update(user_id: str, request: UpdateUserRequest) -> MergeResult:
    """Build the partial profile update for a user.

    Custom attributes and first-class name fields share Okta's ``profile``
    object; explicit name fields are written last so they take precedence
    over same-named keys in the custom attributes.
    """
    profile: Dict[str, Any] = {}
    if _supplied_profile(request.profile):
        profile.update(copy.deepcopy(request.profile))
    if _supplied_text(request.first_name):
        profile["firstName"] = request.first_name
    if _supplied_text(request.last_name):
        profile["lastName"] = request.last_name

    if not profile:
        return NO_CHANGES
    return UpdatePlan(user_id, {"profile": profile})


def merge_group_update(group_id: str, request: UpdateGroupRequest) -> MergeResult:
    profile: Dict[str, Any] = {}
    if _supplied_profile(request.profile):
        profile.update(copy.deepcopy(request.profile))
    if _supplied_text(request.name):
        profile["name"] = request.name
    if _supplied_text(request.description):
        profile["description"] = request.description

    if not profile:
        return NO_CHANGES
    return UpdatePlan(group_id, {"profile": profile})


def merge_role_update(role_id: str, request: UpdateRoleRequest) -> MergeResult:
    payload: Dict[str, Any] = {}
    if _supplied_text(request.name):
        payload["label"] = request.name
    if _supplied_text(request.description):
        payload["description"] = request.description

    if not payload:
        return NO_CHANGES
    return UpdatePlan(role_id, payload)
