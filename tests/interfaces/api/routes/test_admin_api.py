"""Administrative user and role management endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import login, make_user
from expense_tracker.infrastructure.repositories import RoleRepository, UserRepository


def _role_id(session, name: str) -> int:
    return RoleRepository(session).get_by_name(name).id


def test_admin_routes_require_permission(client: TestClient, session) -> None:
    make_user(session, "plain")
    headers = login(client, "plain")

    response = client.get("/api/admin/users", headers=headers)

    assert response.status_code == 403
    assert response.json()["detail"] == "Forbidden: Insufficient permissions"


def test_list_users_hides_deleted_accounts(
    client: TestClient, session, admin_headers: dict[str, str]
) -> None:
    victim = make_user(session, "victim")

    deleted = client.delete(f"/api/admin/users/{victim.id}", headers=admin_headers)
    assert deleted.status_code == 200
    assert deleted.json()["status"] == "deleted"

    listed = client.get("/api/admin/users", headers=admin_headers).json()
    assert "victim" not in [user["username"] for user in listed["users"]]
    only_deleted = client.get(
        "/api/admin/users", params={"status": "deleted"}, headers=admin_headers
    ).json()
    assert [user["username"] for user in only_deleted["users"]] == ["victim"]


def test_admin_cannot_suspend_themselves(
    client: TestClient, session, admin_headers: dict[str, str]
) -> None:
    me = client.get("/api/user", headers=admin_headers).json()

    response = client.patch(f"/api/admin/users/{me['id']}/suspend", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "You cannot suspend your own account"


def test_reactivate_restores_login(
    client: TestClient, session, admin_headers: dict[str, str]
) -> None:
    user = make_user(session, "sleeper")
    client.patch(f"/api/admin/users/{user.id}/suspend", headers=admin_headers)

    response = client.patch(f"/api/admin/users/{user.id}/reactivate", headers=admin_headers)

    assert response.json()["status"] == "active"
    login(client, "sleeper")


def test_generated_password_is_returned_once(
    client: TestClient, session, admin_headers: dict[str, str]
) -> None:
    user = make_user(session, "forgetful")

    response = client.patch(f"/api/admin/users/{user.id}/reset-password", headers=admin_headers)

    temporary = response.json()["temporary_password"]
    assert temporary
    login(client, "forgetful", temporary)


def test_replace_user_roles(client: TestClient, session, admin_headers: dict[str, str]) -> None:
    user = make_user(session, "promoted")
    moderator_id = _role_id(session, "moderator")

    response = client.post(
        f"/api/admin/users/{user.id}/roles",
        json={"role_ids": [_role_id(session, "user"), moderator_id]},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert [role["name"] for role in response.json()] == ["moderator", "user"]
    permissions = client.get(
        f"/api/admin/users/{user.id}/permissions", headers=admin_headers
    ).json()
    assert "reports:write" in {p["id"] for p in permissions["permissions"]}


def test_unknown_role_ids_leave_assignment_untouched(
    client: TestClient, session, admin_headers: dict[str, str]
) -> None:
    user = make_user(session, "stable")

    response = client.post(
        f"/api/admin/users/{user.id}/roles",
        json={"role_ids": [_role_id(session, "moderator"), 9999]},
        headers=admin_headers,
    )

    assert response.status_code == 400
    roles = client.get(f"/api/admin/users/{user.id}/roles", headers=admin_headers).json()
    assert [role["name"] for role in roles] == ["user"]


def test_role_lifecycle(client: TestClient, session, admin_headers: dict[str, str]) -> None:
    created = client.post(
        "/api/admin/roles",
        json={
            "name": "auditor",
            "description": "Reads activity",
            "permission_ids": ["admin:read"],
        },
        headers=admin_headers,
    )
    assert created.status_code == 201, created.text
    role_id = created.json()["id"]
    assert [p["id"] for p in created.json()["permissions"]] == ["admin:read"]

    duplicate = client.post("/api/admin/roles", json={"name": "auditor"}, headers=admin_headers)
    assert duplicate.status_code == 409

    renamed = client.put(
        f"/api/admin/roles/{role_id}", json={"name": "reviewer"}, headers=admin_headers
    )
    assert renamed.json()["name"] == "reviewer"

    regranted = client.put(
        f"/api/admin/roles/{role_id}/permissions",
        json={"permission_ids": ["reports:read", "users:read"]},
        headers=admin_headers,
    )
    assert sorted(p["id"] for p in regranted.json()["permissions"]) == [
        "reports:read",
        "users:read",
    ]

    removed = client.delete(f"/api/admin/roles/{role_id}", headers=admin_headers)
    assert removed.status_code == 204
    assert client.get(f"/api/admin/roles/{role_id}", headers=admin_headers).status_code == 404


def test_system_roles_are_protected(
    client: TestClient, session, admin_headers: dict[str, str]
) -> None:
    admin_role = _role_id(session, "admin")

    renamed = client.put(
        f"/api/admin/roles/{admin_role}", json={"name": "root"}, headers=admin_headers
    )
    removed = client.delete(f"/api/admin/roles/{admin_role}", headers=admin_headers)

    assert renamed.status_code == 400
    assert removed.status_code == 400
    assert renamed.json()["detail"] == "System roles cannot be modified"


def test_assigned_role_cannot_be_deleted(
    client: TestClient, session, admin_headers: dict[str, str]
) -> None:
    make_user(session, "modded", roles=("moderator",))

    response = client.delete(
        f"/api/admin/roles/{_role_id(session, 'moderator')}", headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete a role that is assigned to users"


def test_permission_catalogue_is_listed(
    client: TestClient, admin_headers: dict[str, str]
) -> None:
    response = client.get("/api/admin/permissions", headers=admin_headers)

    ids = {permission["id"] for permission in response.json()}
    assert {"users:read", "roles:write", "reports:write", "settings:read"} <= ids


def test_username_race_is_reported_as_conflict(
    client: TestClient, session, admin_headers: dict[str, str], monkeypatch
) -> None:
    make_user(session, "racer")
    monkeypatch.setattr(UserRepository, "get_by_username", lambda self, username: None)

    response = client.post(
        "/api/admin/users",
        json={
            "username": "racer",
            "password": "secret123",
            "name": "Racer",
            "email": "racer2@example.com",
        },
        headers=admin_headers,
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Username already exists"
