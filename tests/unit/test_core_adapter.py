import pytest

from identity_api.core.adapter import IdpAdapter
from identity_api.core.exceptions import AdapterError
from identity_api.core.models import (
    CreateGroupRequest,
    CreateRoleRequest,
    CreateUserRequest,
    GroupType,
    RoleType,
    UserStatus,
)


def test_normalize_user_lifts_profile_fields():
    user = IdpAdapter.normalize_user(
        {
            "id": "00u1",
            "status": "ACTIVE",
            "created": "2024-01-01T00:00:00.000Z",
            "activated": "2024-01-02T00:00:00.000Z",
            "lastLogin": None,
            "lastUpdated": "2024-01-03T00:00:00.000Z",
            "profile": {
                "email": "alice@example.com",
                "login": "alice@example.com",
                "firstName": "Alice",
                "lastName": "Smith",
                "department": "eng",
            },
        }
    )
    assert user.id == "00u1"
    assert user.email == "alice@example.com"
    assert user.first_name == "Alice"
    assert user.last_name == "Smith"
    assert user.status is UserStatus.ACTIVE
    assert user.created == "2024-01-01T00:00:00.000Z"
    assert user.last_login is None
    assert user.profile == {"department": "eng"}


def test_normalize_user_unknown_status_is_none():
    user = IdpAdapter.normalize_user({"id": "00u1", "status": "SOMETHING_NEW"})
    assert user.status is None
    assert user.email == ""
    assert user.profile == {}


@pytest.mark.parametrize("external", [{}, {"id": ""}, {"id": None, "profile": {}}, "not-a-dict"])
def test_normalize_user_without_id_fails(external):
    with pytest.raises(AdapterError):
        IdpAdapter.normalize_user(external)


def test_normalize_group_without_profile_keeps_empty_fields():
    group = IdpAdapter.normalize_group({"id": "00g1", "type": "OKTA_GROUP"})
    assert group.id == "00g1"
    assert group.name == ""
    assert group.description == ""
    assert group.profile == {}
    assert group.type is GroupType.IDP_MANAGED
    assert group.is_mutable


def test_normalize_group_app_managed_is_not_mutable():
    group = IdpAdapter.normalize_group(
        {"id": "00g2", "type": "APP_GROUP", "profile": {"name": "Salesforce", "windowsDomainQualifiedName": "x"}}
    )
    assert group.type is GroupType.APP_MANAGED
    assert group.profile == {"windowsDomainQualifiedName": "x"}
    assert not group.is_mutable


def test_normalize_role_types():
    custom = IdpAdapter.normalize_role({"id": "cr0abc", "label": "Helpdesk", "description": "Reset passwords"})
    assigned_custom = IdpAdapter.normalize_role({"id": "irb1", "label": "Helpdesk", "type": "CUSTOM"})
    standard = IdpAdapter.normalize_role({"id": "ra1", "label": "Super Administrator", "type": "SUPER_ADMIN"})

    assert custom.type is RoleType.CUSTOM
    assert custom.name == "Helpdesk"
    assert custom.description == "Reset passwords"
    assert assigned_custom.type is RoleType.CUSTOM
    assert standard.type is RoleType.SYSTEM
    assert not standard.is_mutable


def test_normalize_role_standard_id_without_type_is_system():
    role = IdpAdapter.normalize_role({"id": "ORG_ADMIN", "label": "Organization Administrator"})
    assert role.type is RoleType.SYSTEM


def test_normalize_permission_splits_label():
    permission = IdpAdapter.normalize_permission(
        {"label": "okta.users.read", "created": "2024-01-01T00:00:00.000Z"}
    )
    assert permission.id == "okta.users.read"
    assert permission.resource == "okta.users"
    assert permission.action == "read"
    assert permission.scope == ""


def test_normalize_permission_without_label_fails():
    with pytest.raises(AdapterError):
        IdpAdapter.normalize_permission({"created": "2024-01-01T00:00:00.000Z"})


def test_denormalize_user_first_class_fields_win_over_profile():
    payload = IdpAdapter.denormalize_user(
        CreateUserRequest(
            email="a@b.com",
            login="a",
            first_name="Ann",
            profile={"firstName": "Ignored", "costCenter": "42"},
            password="S3cret!pass",
        )
    )
    assert payload["profile"] == {
        "firstName": "Ann",
        "costCenter": "42",
        "email": "a@b.com",
        "login": "a",
        "lastName": "",
    }
    assert payload["credentials"] == {"password": {"value": "S3cret!pass"}}


def test_denormalize_user_without_password_has_no_credentials():
    payload = IdpAdapter.denormalize_user(CreateUserRequest(email="a@b.com", login="a"))
    assert "credentials" not in payload


def test_denormalize_user_does_not_mutate_request_profile():
    request = CreateUserRequest(email="a@b.com", login="a", profile={"team": "blue"})
    IdpAdapter.denormalize_user(request)
    assert request.profile == {"team": "blue"}


def test_group_round_trip_keeps_name_and_description():
    payload = IdpAdapter.denormalize_group(CreateGroupRequest(name="engineering", description="All engineers"))
    echoed = {"id": "00g9", "type": "OKTA_GROUP", **payload}

    group = IdpAdapter.normalize_group(echoed)

    assert group.name == "engineering"
    assert group.description == "All engineers"


def test_role_round_trip_keeps_name_and_description():
    payload = IdpAdapter.denormalize_role(
        CreateRoleRequest(name="Helpdesk", description="Reset passwords", permissions=["okta.users.read"])
    )
    assert payload == {
        "label": "Helpdesk",
        "description": "Reset passwords",
        "permissions": ["okta.users.read"],
    }

    role = IdpAdapter.normalize_role({"id": "cr0new", **payload})

    assert role.name == "Helpdesk"
    assert role.description == "Reset passwords"
