"""Reporting and moderation endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import login, make_user


def _report_payload(reported_user_id: int, content_id: int = 5) -> dict:
    return {
        "reported_user_id": reported_user_id,
        "content_type": "expense",
        "content_id": content_id,
        "reason": "inappropriate",
        "description": "Offensive expense title",
    }


def test_report_and_resolve_flow(client: TestClient, session) -> None:
    make_user(session, "reporter")
    offender = make_user(session, "offender")
    make_user(session, "mod", roles=("moderator",))
    reporter_headers = login(client, "reporter")
    mod_headers = login(client, "mod")
    offender_headers = login(client, "offender")

    created = client.post(
        "/api/moderation/report", json=_report_payload(offender.id), headers=reporter_headers
    )
    assert created.status_code == 201, created.text
    report_id = created.json()["id"]

    duplicate = client.post(
        "/api/moderation/report", json=_report_payload(offender.id), headers=reporter_headers
    )
    assert duplicate.status_code == 409

    queue = client.get("/api/admin/moderation/queue", headers=mod_headers).json()
    assert [report["id"] for report in queue["reports"]] == [report_id]

    acted = client.post(
        f"/api/admin/moderation/{report_id}/action",
        json={"action_type": "resolve", "user_feedback": "Title edited"},
        headers=mod_headers,
    )
    assert acted.status_code == 200, acted.text
    assert acted.json()["report"]["status"] == "resolved"
    assert acted.json()["action"]["action_type"] == "resolve"

    assert client.get("/api/admin/moderation/queue", headers=mod_headers).json()["reports"] == []
    for headers, title in (
        (reporter_headers, "Report Update: Issue Resolved"),
        (offender_headers, "Content Report Resolution"),
    ):
        inbox = client.get("/api/user/notifications", headers=headers).json()
        assert inbox["unread_count"] == 1
        assert inbox["notifications"][0]["title"] == title


def test_self_report_is_rejected(client: TestClient, session) -> None:
    me = make_user(session, "narcissus")
    headers = login(client, "narcissus")

    response = client.post("/api/moderation/report", json=_report_payload(me.id), headers=headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot report your own content"


def test_queue_requires_report_permission(client: TestClient, session) -> None:
    make_user(session, "curious")
    headers = login(client, "curious")

    assert client.get("/api/admin/moderation/queue", headers=headers).status_code == 403
    assert client.get("/api/admin/moderation/stats", headers=headers).status_code == 403


def test_stats_and_report_deletion(
    client: TestClient, session, admin_headers: dict[str, str]
) -> None:
    make_user(session, "reporter")
    offender = make_user(session, "offender")
    reporter_headers = login(client, "reporter")
    report_id = client.post(
        "/api/moderation/report", json=_report_payload(offender.id), headers=reporter_headers
    ).json()["id"]

    stats = client.get("/api/admin/moderation/stats", headers=admin_headers).json()
    assert stats["pending"] == 1

    removed = client.delete(f"/api/admin/moderation/{report_id}", headers=admin_headers)
    assert removed.status_code == 204
    stats = client.get("/api/admin/moderation/stats", headers=admin_headers).json()
    assert stats["pending"] == 0


def test_suspension_through_moderation_blocks_the_offender(
    client: TestClient, session, admin_headers: dict[str, str]
) -> None:
    make_user(session, "reporter")
    offender = make_user(session, "offender")
    reporter_headers = login(client, "reporter")
    offender_headers = login(client, "offender")
    report_id = client.post(
        "/api/moderation/report", json=_report_payload(offender.id), headers=reporter_headers
    ).json()["id"]

    acted = client.post(
        f"/api/admin/moderation/{report_id}/action",
        json={"action_type": "suspend_user", "reason": "Abuse"},
        headers=admin_headers,
    )

    assert acted.status_code == 200
    assert client.get("/api/user", headers=offender_headers).status_code == 401
    actions = client.get(f"/api/admin/moderation/{report_id}/actions", headers=admin_headers)
    assert [action["action_type"] for action in actions.json()] == ["suspend_user"]


def test_moderator_can_warn_a_user_without_a_report(client: TestClient, session) -> None:
    offender = make_user(session, "offender")
    make_user(session, "mod", roles=("moderator",))
    mod_headers = login(client, "mod")

    response = client.post(
        "/api/admin/moderation/action",
        json={"action_type": "warn_user", "target_user_id": offender.id, "reason": "Spam"},
        headers=mod_headers,
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["report"] is None
    assert body["action"]["report_id"] is None
    assert body["action"]["target_user_id"] == offender.id
    assert body["action"]["feedback_sent_at"] is not None
    inbox = client.get("/api/user/notifications", headers=login(client, "offender")).json()
    assert [note["type"] for note in inbox["notifications"]] == ["warning"]


def test_standalone_delete_content_needs_the_content(client: TestClient, session) -> None:
    make_user(session, "mod", roles=("moderator",))
    mod_headers = login(client, "mod")

    missing = client.post(
        "/api/admin/moderation/action",
        json={"action_type": "delete_content"},
        headers=mod_headers,
    )
    deleted = client.post(
        "/api/admin/moderation/action",
        json={"action_type": "delete_content", "content_type": "budget", "content_id": 4},
        headers=mod_headers,
    )

    assert missing.status_code == 400
    assert deleted.status_code == 200, deleted.text
    assert deleted.json()["action"]["content_type"] == "budget"
    assert deleted.json()["action"]["content_id"] == 4


def test_standalone_actions_require_report_write(client: TestClient, session) -> None:
    offender = make_user(session, "offender")
    make_user(session, "someone")

    response = client.post(
        "/api/admin/moderation/action",
        json={"action_type": "warn_user", "target_user_id": offender.id},
        headers=login(client, "someone"),
    )

    assert response.status_code == 403
