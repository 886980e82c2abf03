"""End-to-end API tests against in-memory repos."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from task_manager_service.domain.errors import AppError, ErrorKind
from task_manager_service.rest.errors import STATUS_BY_KIND, describe_errors, status_for

FUTURE = "2026-01-20T12:00:00Z"
PAST = "2026-01-10T12:00:00Z"


def _register(client, username="alice", password="secret123"):
    return client.post("/register", json={"username": username, "password": password})


def _login_headers(client, username="alice", password="secret123") -> dict[str, str]:
    resp = client.post("/login", json={"username": username, "password": password})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def _task(title="Write report", due_date=FUTURE, status="pending") -> dict[str, str]:
    return {"title": title, "due_date": due_date, "status": status}


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


def test_register_returns_201(client, user_repo):
    resp = _register(client)
    assert resp.status_code == 201
    assert resp.json() == {"message": "User registered successfully"}
    assert user_repo.get("alice").role == "admin"


def test_register_empty_password_returns_400(client):
    resp = _register(client, password="")
    assert resp.status_code == 400
    assert resp.json() == {"error": "username and password are required"}


def test_register_missing_field_returns_400(client):
    resp = client.post("/register", json={"username": "alice"})
    assert resp.status_code == 400
    assert "password" in resp.json()["error"]


def test_register_duplicate_returns_400(client):
    _register(client)
    resp = _register(client)
    assert resp.status_code == 400
    assert resp.json() == {"error": "username already exists"}


def test_login_returns_token(client, token_service):
    _register(client)
    resp = client.post("/login", json={"username": "alice", "password": "secret123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Logged in successfully"
    claims = token_service.validate_token(body["token"])
    assert (claims.username, claims.role) == ("alice", "admin")


@pytest.mark.parametrize(("username", "password"), [("alice", "wrong"), ("nobody", "secret123")])
def test_login_failure_does_not_reveal_which_factor(client, username, password):
    _register(client)
    resp = client.post("/login", json={"username": username, "password": password})
    assert resp.status_code == 400
    assert resp.json() == {"error": "invalid username or password"}


def test_bootstrap_admin_can_promote_second_user(client, user_repo):
    _register(client, "alice")
    _register(client, "bob")
    assert user_repo.get("bob").role == "user"

    admin = _login_headers(client, "alice")
    resp = client.post("/promote", json={"username": "bob"}, headers=admin)
    assert resp.status_code == 200
    assert resp.json() == {"message": "User promoted successfully"}
    assert user_repo.get("bob").role == "admin"

    # bob's new token carries the admin role
    bob = _login_headers(client, "bob")
    assert client.post("/tasks", json=_task(), headers=bob).status_code == 201


def test_promote_existing_admin_returns_400(client, user_repo):
    _register(client)
    admin = _login_headers(client)
    resp = client.post("/promote", json={"username": "alice"}, headers=admin)
    assert resp.status_code == 400
    assert resp.json() == {"error": "user is already an admin"}
    assert user_repo.updates == []


def test_promote_unknown_user_returns_404(client, admin_headers):
    resp = client.post("/promote", json={"username": "ghost"}, headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


def test_regular_user_cannot_promote(client, user_repo):
    _register(client, "alice")
    _register(client, "bob")
    bob = _login_headers(client, "bob")
    resp = client.post("/promote", json={"username": "bob"}, headers=bob)
    assert resp.status_code == 403
    assert user_repo.get("bob").role == "user"


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


def test_task_lifecycle(client, admin_headers, user_headers):
    created = client.post("/tasks", json=_task(), headers=admin_headers)
    assert created.status_code == 201
    body = created.json()
    assert body["message"] == "Task created successfully"
    task_id = body["task"]["id"]

    listed = client.get("/tasks", headers=user_headers)
    assert listed.status_code == 200
    assert [t["title"] for t in listed.json()] == ["Write report"]

    fetched = client.get(f"/tasks/{task_id}", headers=user_headers)
    assert fetched.status_code == 200
    assert fetched.json()["status"] == "pending"
    assert fetched.json()["due_date"].startswith("2026-01-20T12:00:00")

    updated = client.put(
        f"/tasks/{task_id}", json=_task(due_date=PAST, status="completed"), headers=admin_headers
    )
    assert updated.status_code == 200
    assert updated.json() == {"message": "Task updated successfully"}
    assert client.get(f"/tasks/{task_id}", headers=user_headers).json()["status"] == "completed"

    deleted = client.delete(f"/tasks/{task_id}", headers=admin_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Task deleted successfully"}
    assert client.get(f"/tasks/{task_id}", headers=user_headers).status_code == 404


def test_list_tasks_empty(client, user_headers):
    resp = client.get("/tasks", headers=user_headers)
    assert resp.status_code == 200
    assert resp.json() == []


def test_create_duplicate_title_returns_400(client, admin_headers, task_repo):
    client.post("/tasks", json=_task(), headers=admin_headers)
    resp = client.post("/tasks", json=_task(), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Task already exists"}
    assert task_repo.create_calls == 1


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        (_task(title=""), "title is required"),
        (_task(status=""), "status is required"),
        (_task(status="other"), "status must be either pending or completed"),
        (_task(status="completed"), "due date must be in the past"),
        (_task(due_date=PAST), "due date must be in the future"),
        (_task(due_date="0001-01-01T00:00:00Z"), "due date is required"),
    ],
)
def test_create_invalid_task_returns_400(client, admin_headers, payload, message):
    resp = client.post("/tasks", json=payload, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": message}


def test_create_task_missing_fields_returns_400(client, admin_headers):
    resp = client.post("/tasks", json={"title": "x"}, headers=admin_headers)
    assert resp.status_code == 400
    assert "due_date" in resp.json()["error"]


@pytest.mark.parametrize("due_date", [1900000000, "2026-01-20T12:00:00", "2026-01-20"])
def test_create_task_rejects_non_rfc3339_due_date(client, admin_headers, task_repo, due_date):
    resp = client.post("/tasks", json=_task(due_date=due_date), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("due_date: ")
    assert task_repo.create_calls == 0


def test_update_task_rejects_epoch_due_date(client, admin_headers):
    created = client.post("/tasks", json=_task(), headers=admin_headers).json()["task"]
    resp = client.put(
        f"/tasks/{created['id']}", json=_task(due_date=1900000000), headers=admin_headers
    )
    assert resp.status_code == 400


def test_update_missing_task_returns_404(client, admin_headers):
    resp = client.put("/tasks/nope", json=_task(), headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Task not found"}


def test_delete_missing_task_returns_404(client, admin_headers):
    resp = client.delete("/tasks/nope", headers=admin_headers)
    assert resp.status_code == 404


def test_store_failure_returns_500(client, admin_headers, task_repo):
    task_repo.get_tasks = AsyncMock(side_effect=AppError.internal("Error retrieving tasks"))
    resp = client.get("/tasks", headers=admin_headers)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Error retrieving tasks"}


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


def test_every_error_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)
    assert status_for(ErrorKind.BAD_REQUEST) == 400
    assert status_for(ErrorKind.NOT_FOUND) == 404
    assert status_for(ErrorKind.UNAUTHORIZED) == 401
    assert status_for(ErrorKind.FORBIDDEN) == 403
    assert status_for(ErrorKind.INTERNAL) == 500


def test_openapi_documents_error_body_and_gated_request_bodies(app):
    schema = app.openapi()
    assert "ErrorResponse" in schema["components"]["schemas"]

    create = schema["paths"]["/tasks"]["post"]
    assert create["responses"]["403"]["content"]["application/json"]["schema"] == {
        "$ref": "#/components/schemas/ErrorResponse"
    }
    body = create["requestBody"]["content"]["application/json"]["schema"]
    assert set(body["required"]) == {"title", "due_date", "status"}
    assert "requestBody" in schema["paths"]["/promote"]["post"]


def test_json_decode_error_has_no_position_prefix(client):
    resp = client.post("/register", content=b"{oops", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "JSON decode error"}


def test_describe_errors_keeps_field_names_only():
    errors = [{"loc": ("body", "tasks", 0, "title"), "msg": "Field required"}]
    assert describe_errors(errors) == "tasks.title: Field required"
    assert describe_errors([{"loc": ("body", 7), "msg": "JSON decode error"}]) == "JSON decode error"
