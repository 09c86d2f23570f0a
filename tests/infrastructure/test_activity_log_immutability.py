"""The activity log table refuses changes to existing rows."""

from __future__ import annotations

import pytest
from sqlalchemy import text
from sqlalchemy.exc import DatabaseError

from conftest import make_user
from expense_tracker.application.use_cases.activity import log_activity
from expense_tracker.domain.entities import ActionType, ResourceType
from expense_tracker.infrastructure.models.activity_log import PROTECTION_MESSAGE


@pytest.fixture()
def entry(session):
    user = make_user(session, "audited")
    return log_activity(
        session,
        user_id=user.id,
        action_type=ActionType.CREATE,
        resource_type=ResourceType.EXPENSE,
        description="Created expense",
    )


def test_delete_is_rejected_by_the_database(session, entry) -> None:
    with pytest.raises(DatabaseError) as error:
        session.execute(text("DELETE FROM activity_log WHERE id = :id"), {"id": entry.id})
    session.rollback()

    assert PROTECTION_MESSAGE in str(error.value)
    assert "Operation: DELETE" in str(error.value)
    count = session.execute(text("SELECT COUNT(*) FROM activity_log")).scalar_one()
    assert count == 1


def test_bulk_delete_is_rejected(session, entry) -> None:
    with pytest.raises(DatabaseError):
        session.execute(text("DELETE FROM activity_log"))
    session.rollback()

    count = session.execute(text("SELECT COUNT(*) FROM activity_log")).scalar_one()
    assert count == 1


def test_update_is_rejected_by_the_database(session, entry) -> None:
    with pytest.raises(DatabaseError) as error:
        session.execute(
            text("UPDATE activity_log SET description = 'tampered' WHERE id = :id"),
            {"id": entry.id},
        )
    session.rollback()

    assert "Operation: UPDATE" in str(error.value)
    description = session.execute(
        text("SELECT description FROM activity_log WHERE id = :id"), {"id": entry.id}
    ).scalar_one()
    assert description == "Created expense"
