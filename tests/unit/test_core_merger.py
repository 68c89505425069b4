import pytest

from identity_api.core.merger import (
    NO_CHANGES,
    UpdatePlan,
    merge_group_update,
    merge_role_update,
    merge_user_update,
)
from identity_api.core.models import UpdateGroupRequest, UpdateRoleRequest, UpdateUserRequest


@pytest.mark.parametrize(
    "request_obj",
    [
        UpdateUserRequest(),
        UpdateUserRequest(first_name="", last_name="", profile={}),
        UpdateUserRequest(first_name=None, last_name="", profile=None),
    ],
)
def test_empty_user_update_is_no_changes(request_obj):
    assert merge_user_update("00u1", request_obj) is NO_CHANGES


def test_no_changes_sentinel_is_falsy():
    assert not NO_CHANGES
    assert repr(NO_CHANGES) == "NO_CHANGES"


def test_single_user_field_produces_single_field_payload():
    plan = merge_user_update("00u1", UpdateUserRequest(last_name="Smith"))
    assert plan == UpdatePlan("00u1", {"profile": {"lastName": "Smith"}})


def test_user_name_fields_override_custom_profile_keys():
    plan = merge_user_update(
        "00u1",
        UpdateUserRequest(first_name="Ann", profile={"firstName": "Old", "title": "CTO"}),
    )
    assert plan.payload == {"profile": {"firstName": "Ann", "title": "CTO"}}


def test_user_update_copies_profile():
    profile = {"address": {"city": "Lyon"}}
    plan = merge_user_update("00u1", UpdateUserRequest(profile=profile))
    plan.payload["profile"]["address"]["city"] = "Paris"
    assert profile == {"address": {"city": "Lyon"}}


def test_group_update_with_description_only():
    plan = merge_group_update("00g1", UpdateGroupRequest(name="", description="New description"))
    assert plan == UpdatePlan("00g1", {"profile": {"description": "New description"}})


def test_empty_group_update_is_no_changes():
    assert merge_group_update("00g1", UpdateGroupRequest(name="", description=None)) is NO_CHANGES


def test_role_update_maps_name_to_label():
    plan = merge_role_update("cr0abc", UpdateRoleRequest(name="Auditor"))
    assert plan == UpdatePlan("cr0abc", {"label": "Auditor"})


def test_empty_role_update_is_no_changes():
    assert merge_role_update("cr0abc", UpdateRoleRequest(name="", description="")) is NO_CHANGES
