"""HTTP layer tests: routes, status codes and the JSON envelope."""
import pytest
import requests

from identity_api.api.helpers import DIRECTORY_SERVICE_KEY


def assert_success(response, status=200):
    assert response.status_code == status
    body = response.get_json()
    assert body["status"] == "success"
    assert set(body) == {"status", "message", "data"}
    return body["data"]


def assert_error(response, status, kind):
    assert response.status_code == status
    body = response.get_json()
    assert set(body) == {"status", "code", "message", "details"}
    assert body["status"] == "error"
    assert body["code"] == "API_ERROR"
    assert body["details"]["error"] == kind
    return body


# ─────────────────────────────────────────────────────────────────────────────
# Users
# ─────────────────────────────────────────────────────────────────────────────
def test_list_users(http_client, okta_session, stub_response):
    okta_session.request.return_value = stub_response(
        200, [{"id": "00u1", "status": "ACTIVE", "profile": {"login": "alice", "email": "alice@example.com"}}]
    )

    data = assert_success(http_client.get("/api/v1/users"))

    assert data[0]["id"] == "00u1"
    assert data[0]["login"] == "alice"
    assert data[0]["status"] == "ACTIVE"


def test_create_user_returns_201(http_client, okta_session, stub_response):
    okta_session.request.return_value = stub_response(
        200, {"id": "00u9", "status": "STAGED", "profile": {"login": "bob", "email": "bob@example.com"}}
    )

    response = http_client.post("/api/v1/users", json={"email": "bob@example.com", "login": "bob"})

    data = assert_success(response, 201)
    assert data["id"] == "00u9"
    assert okta_session.request.call_args.kwargs["params"] == {"activate": "false"}


def test_create_user_malformed_json(http_client, okta_session):
    response = http_client.post("/api/v1/users", data="{not json", content_type="application/json")

    assert_error(response, 400, "ValidationError")
    okta_session.request.assert_not_called()


def test_create_user_wrong_field_type(http_client, okta_session):
    response = http_client.post("/api/v1/users", json={"login": "bob", "activate": "yes"})

    body = assert_error(response, 400, "ValidationError")
    assert body["details"]["field"] == "activate"
    okta_session.request.assert_not_called()


def test_get_user_not_found_envelope(http_client, okta_session, stub_response):
    okta_session.request.return_value = stub_response(
        404, {"errorCode": "E0000007", "errorSummary": "Not found: Resource not found: 00u404 (User)"}
    )

    body = assert_error(http_client.get("/api/v1/users/00u404"), 404, "NotFoundError")

    assert body["details"]["userId"] == "00u404"
    assert "Resource not found" not in body["message"]


def test_delete_user_partial_failure_envelope(http_client, okta_session, stub_response):
    okta_session.request.side_effect = [stub_response(200, {}), stub_response(500)]

    body = assert_error(http_client.delete("/api/v1/users/00u1"), 502, "PartialFailureError")

    assert body["details"]["step"] == "delete"
    assert body["details"]["entityState"] == "Deprovisioned"


def test_delete_user_canceled_delete_step_envelope(http_client, okta_session, stub_response):
    okta_session.request.side_effect = [stub_response(200, {}), requests.Timeout()]

    body = assert_error(http_client.delete("/api/v1/users/00u1"), 502, "PartialFailureError")

    assert body["details"]["entityState"] == "Deprovisioned"
    assert body["details"]["cause"] == "CanceledError"


def test_suspend_user(http_client, okta_session):
    data = assert_success(http_client.post("/api/v1/users/00u1/suspend"))

    assert data == {"userId": "00u1"}
    assert okta_session.request.call_args.args[1].endswith("/api/v1/users/00u1/lifecycle/suspend")


def test_assign_role_to_user_twice(http_client, okta_session, stub_response):
    okta_session.request.side_effect = [stub_response(201, {}), stub_response(409)]

    first = assert_success(http_client.put("/api/v1/users/00u1/roles/cr0a"))
    second = assert_success(http_client.put("/api/v1/users/00u1/roles/cr0a"))

    assert first == {"userId": "00u1", "roleId": "cr0a", "outcome": "ASSIGNED"}
    assert second["outcome"] == "ALREADY_ASSIGNED"


def test_unassign_role_not_assigned(http_client, okta_session, stub_response):
    okta_session.request.return_value = stub_response(404)

    assert_error(http_client.delete("/api/v1/users/00u1/roles/cr0a"), 404, "NotAssignedError")


# ─────────────────────────────────────────────────────────────────────────────
# Groups
# ─────────────────────────────────────────────────────────────────────────────
def test_get_group_expand_members(http_client, okta_session, stub_response):
    okta_session.request.side_effect = [
        stub_response(200, {"id": "00g1", "type": "OKTA_GROUP", "profile": {"name": "eng"}}),
        stub_response(200, [{"id": "00u1", "profile": {"login": "alice"}}]),
    ]

    data = assert_success(http_client.get("/api/v1/groups/00g1?expand=members"))

    assert data["name"] == "eng"
    assert [member["id"] for member in data["members"]] == ["00u1"]


@pytest.mark.parametrize("segment", ["users", "members"])
def test_add_group_member_aliases(http_client, okta_session, stub_response, segment):
    okta_session.request.return_value = stub_response(204)

    data = assert_success(http_client.put(f"/api/v1/groups/00g1/{segment}/00u1"))

    assert data == {"userId": "00u1", "groupId": "00g1", "outcome": "ASSIGNED"}
    assert okta_session.request.call_args.args[0] == "PUT"


def test_delete_built_in_group_conflict(http_client, okta_session, stub_response):
    okta_session.request.return_value = stub_response(200, {"id": "00g0", "type": "BUILT_IN", "profile": {"name": "Everyone"}})

    assert_error(http_client.delete("/api/v1/groups/00g0"), 409, "ImmutableEntityError")
    assert okta_session.request.call_count == 1


def test_create_group_malformed_idp_response(http_client, okta_session, stub_response):
    okta_session.request.return_value = stub_response(200)

    assert_error(http_client.post("/api/v1/groups", json={"name": "eng"}), 500, "AdapterError")


# ─────────────────────────────────────────────────────────────────────────────
# Roles
# ─────────────────────────────────────────────────────────────────────────────
def test_delete_system_role_conflict(http_client, okta_session):
    assert_error(http_client.delete("/api/v1/roles/SUPER_ADMIN"), 409, "ImmutableEntityError")
    okta_session.request.assert_not_called()


def test_list_role_permissions(http_client, okta_session, stub_response):
    okta_session.request.return_value = stub_response(200, {"permissions": [{"label": "okta.groups.read"}]})

    data = assert_success(http_client.get("/api/v1/roles/cr0a/permissions"))

    assert data[0]["resource"] == "okta.groups"
    assert data[0]["action"] == "read"


def test_create_role_invalid_permissions(http_client, okta_session):
    response = http_client.post("/api/v1/roles", json={"name": "Helpdesk", "permissions": "okta.users.read"})

    assert_error(response, 400, "ValidationError")
    okta_session.request.assert_not_called()


# ─────────────────────────────────────────────────────────────────────────────
# Framework-level errors and middleware
# ─────────────────────────────────────────────────────────────────────────────
def test_unknown_route_uses_envelope(http_client):
    assert_error(http_client.get("/api/v1/nope"), 404, "Not Found")


def test_wrong_method_uses_envelope(http_client):
    assert_error(http_client.patch("/api/v1/users/00u1"), 405, "Method Not Allowed")


def test_unhandled_exception_uses_envelope(app, http_client, monkeypatch):
    directory = app.config[DIRECTORY_SERVICE_KEY]

    def boom():
        raise RuntimeError("boom")

    monkeypatch.setattr(directory, "list_users", boom)

    body = assert_error(http_client.get("/api/v1/users"), 500, "InternalError")
    assert "boom" not in body["message"]


def test_request_id_is_echoed(http_client):
    response = http_client.get("/health", headers={"X-Request-Id": "req-123"})
    assert response.headers["X-Request-Id"] == "req-123"


def test_request_id_is_generated(http_client):
    response = http_client.get("/health")
    assert response.headers["X-Request-Id"]


def test_health_makes_no_remote_call(http_client, okta_session):
    assert_success(http_client.get("/health"))
    okta_session.request.assert_not_called()


def test_ready_probes_org(http_client, okta_session):
    assert_success(http_client.get("/ready"))
    assert okta_session.request.call_args.args[1].endswith("/api/v1/org")


def test_ready_reports_unreachable_idp(http_client, okta_session, stub_response):
    okta_session.request.return_value = stub_response(503)

    assert_error(http_client.get("/ready"), 502, "RemoteUnavailableError")


def test_requests_are_bound_by_write_timeout(http_client, okta_session):
    http_client.get("/api/v1/users")

    timeout = okta_session.request.call_args.kwargs["timeout"]
    assert 0 < timeout <= 10.0
