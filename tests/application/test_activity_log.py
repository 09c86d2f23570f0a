"""Recording and browsing activity."""

from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy import select

from conftest import make_user
from expense_tracker.application.context import RequestContext
from expense_tracker.application.errors import ValidationError
from expense_tracker.application.use_cases.activity import (
    list_activity_logs,
    log_activity,
    log_request_activity,
    record_client_activity,
)
from expense_tracker.domain.entities import ActionType, ActivityLogFilters, ResourceType
from expense_tracker.infrastructure.models import ActivityLogModel
from expense_tracker.utils import now_in_app_timezone


def test_log_activity_stores_the_entry(session) -> None:
    user = make_user(session, "logger")

    entry = log_activity(
        session,
        user_id=user.id,
        action_type=ActionType.CREATE,
        resource_type=ResourceType.EXPENSE,
        resource_id=7,
        description="Created expense",
        metadata={"amount": 1500},
        ip_address="10.0.0.1",
    )

    assert entry is not None
    assert entry.id is not None
    assert entry.metadata == {"amount": 1500}
    assert entry.username == "logger"


def test_log_activity_never_raises(session, caplog) -> None:
    # No such user: the foreign key rejects the row.
    entry = log_activity(
        session,
        user_id=999,
        action_type=ActionType.VIEW,
        resource_type=ResourceType.BUDGET,
        description="Viewed budget",
    )

    assert entry is None
    assert "Could not record" in caplog.text
    assert session.scalars(select(ActivityLogModel)).all() == []


def test_log_request_activity_uses_context(session) -> None:
    user = make_user(session, "ctx")
    context = RequestContext(user=user, ip_address="192.168.1.2", user_agent="pytest")

    entry = log_request_activity(
        session,
        context,
        action_type=ActionType.UPDATE,
        resource_type=ResourceType.CATEGORY,
        description="Renamed category",
    )

    assert entry.user_id == user.id
    assert entry.ip_address == "192.168.1.2"
    assert entry.user_agent == "pytest"


def test_record_client_activity_requires_description(session) -> None:
    user = make_user(session, "client")

    with pytest.raises(ValidationError):
        record_client_activity(
            session,
            RequestContext(user=user),
            action_type=ActionType.VIEW,
            resource_type=ResourceType.EXPENSE,
            description="   ",
        )


def test_regular_users_only_see_their_own_activity(session) -> None:
    alice = make_user(session, "alice")
    bob = make_user(session, "bob")
    for user in (alice, bob):
        log_activity(
            session,
            user_id=user.id,
            action_type=ActionType.LOGIN,
            resource_type=ResourceType.USER,
            description=f"User {user.username} logged in successfully",
        )

    page = list_activity_logs(
        session, current_user=alice, filters=ActivityLogFilters(user_id=bob.id)
    )

    assert not page.is_admin
    assert page.total_count == 1
    assert [entry.user_id for entry in page.logs] == [alice.id]


def test_admins_see_everyone_and_can_filter(session) -> None:
    admin = make_user(session, "root", roles=("admin",))
    alice = make_user(session, "alice")
    for user, action in ((admin, ActionType.LOGIN), (alice, ActionType.CREATE)):
        log_activity(
            session,
            user_id=user.id,
            action_type=action,
            resource_type=ResourceType.USER,
            description=f"{user.username} did {action.value}",
        )

    everything = list_activity_logs(session, current_user=admin)
    only_alice = list_activity_logs(
        session, current_user=admin, filters=ActivityLogFilters(user_id=alice.id)
    )
    only_creates = list_activity_logs(
        session,
        current_user=admin,
        filters=ActivityLogFilters(action_type=ActionType.CREATE),
    )

    assert everything.is_admin
    assert everything.total_count == 2
    assert [entry.user_id for entry in only_alice.logs] == [alice.id]
    assert only_creates.total_count == 1


def test_listing_is_newest_first_and_paginated(session) -> None:
    user = make_user(session, "pager")
    for index in range(5):
        log_activity(
            session,
            user_id=user.id,
            action_type=ActionType.VIEW,
            resource_type=ResourceType.EXPENSE,
            resource_id=index,
            description=f"Viewed expense {index}",
        )

    page = list_activity_logs(session, current_user=user, page=2, limit=2)

    assert page.total_count == 5
    assert page.total_pages == 3
    assert [entry.resource_id for entry in page.logs] == [2, 1]


def test_search_matches_description(session) -> None:
    user = make_user(session, "finder")
    for text in ("Created grocery expense", "Deleted budget"):
        log_activity(
            session,
            user_id=user.id,
            action_type=ActionType.CREATE,
            resource_type=ResourceType.EXPENSE,
            description=text,
        )

    page = list_activity_logs(
        session, current_user=user, filters=ActivityLogFilters(search="grocery")
    )

    assert [entry.description for entry in page.logs] == ["Created grocery expense"]


def test_inverted_date_range_is_rejected(session) -> None:
    user = make_user(session, "dates")
    now = now_in_app_timezone()

    with pytest.raises(ValidationError, match="from_date must be before to_date"):
        list_activity_logs(
            session,
            current_user=user,
            filters=ActivityLogFilters(from_date=now, to_date=now - timedelta(days=1)),
        )
