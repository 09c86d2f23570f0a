"""Notification inbox endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import login, make_user
from expense_tracker.domain.entities import NotificationType, UserNotification
from expense_tracker.infrastructure.repositories import NotificationRepository


def _notify(session, user_id: int, title: str) -> UserNotification:
    return NotificationRepository(session).create(
        UserNotification(
            id=None,
            user_id=user_id,
            title=title,
            message=f"{title} body",
            type=NotificationType.INFO,
        )
    )


def test_mark_read_is_idempotent(client: TestClient, session) -> None:
    user = make_user(session, "reader")
    notification = _notify(session, user.id, "Hello")
    headers = login(client, "reader")

    first = client.post(f"/api/user/notifications/{notification.id}/read", headers=headers)
    second = client.post(f"/api/user/notifications/{notification.id}/read", headers=headers)

    assert first.status_code == second.status_code == 200
    assert first.json()["read_at"] is not None
    assert first.json()["read_at"] == second.json()["read_at"]
    inbox = client.get("/api/user/notifications", headers=headers).json()
    assert inbox["unread_count"] == 0


def test_mark_all_read_and_unread_filter(client: TestClient, session) -> None:
    user = make_user(session, "busy")
    for title in ("One", "Two", "Three"):
        _notify(session, user.id, title)
    headers = login(client, "busy")

    unread = client.get(
        "/api/user/notifications", params={"unread_only": True}, headers=headers
    ).json()
    assert unread["unread_count"] == 3
    assert [n["title"] for n in unread["notifications"]] == ["Three", "Two", "One"]

    marked = client.post("/api/user/notifications/read-all", headers=headers)
    assert marked.json()["updated"] == 3
    again = client.post("/api/user/notifications/read-all", headers=headers)
    assert again.json()["updated"] == 0

    after = client.get(
        "/api/user/notifications", params={"unread_only": True}, headers=headers
    ).json()
    assert after["notifications"] == []
    assert after["unread_count"] == 0


def test_notifications_of_other_users_are_invisible(client: TestClient, session) -> None:
    owner = make_user(session, "owner")
    make_user(session, "snoop")
    notification = _notify(session, owner.id, "Private")
    headers = login(client, "snoop")

    response = client.post(f"/api/user/notifications/{notification.id}/read", headers=headers)

    assert response.status_code == 404
    assert client.get("/api/user/notifications", headers=headers).json()["notifications"] == []


def test_deleted_notifications_disappear(client: TestClient, session) -> None:
    user = make_user(session, "tidy")
    notification = _notify(session, user.id, "Old news")
    headers = login(client, "tidy")

    deleted = client.delete(f"/api/user/notifications/{notification.id}", headers=headers)

    assert deleted.status_code == 204
    inbox = client.get("/api/user/notifications", headers=headers).json()
    assert inbox["notifications"] == []
    assert inbox["unread_count"] == 0
    again = client.delete(f"/api/user/notifications/{notification.id}", headers=headers)
    assert again.status_code == 404
