"""Use cases for recording and browsing user activity."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from expense_tracker.application.context import RequestContext
from expense_tracker.application.errors import ValidationError
from expense_tracker.application.use_cases.authorization import has_permission
from expense_tracker.domain.entities import (
    ActionType,
    ActivityLog,
    ActivityLogFilters,
    ActivityLogPage,
    ResourceType,
    User,
)
from expense_tracker.infrastructure.repositories import ActivityLogRepository
from expense_tracker.utils import ensure_app_timezone

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
VIEW_ALL_ACTIVITY_PERMISSION = "admin:read"


def describe_login(username: str) -> str:
    return f"User {username} logged in successfully"


def describe_logout(username: str) -> str:
    return f"User {username} logged out"


def log_activity(
    session: Session,
    *,
    user_id: int,
    action_type: ActionType,
    resource_type: ResourceType,
    description: str,
    resource_id: int | None = None,
    metadata: dict[str, Any] | None = None,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> ActivityLog | None:
    """Append an entry to the activity log without ever failing the caller.

    Any error is rolled back and written to the application log; ``None`` is
    returned in that case.
    """

    entry = ActivityLog(
        id=None,
        user_id=user_id,
        action_type=action_type,
        resource_type=resource_type,
        resource_id=resource_id,
        description=description,
        ip_address=ip_address,
        user_agent=user_agent,
        metadata=metadata,
    )
    try:
        return ActivityLogRepository(session).create(entry)
    except Exception:
        session.rollback()
        logger.exception(
            "Could not record %s %s activity for user %s",
            action_type.value,
            resource_type.value,
            user_id,
        )
        return None


def log_request_activity(
    session: Session,
    context: RequestContext,
    *,
    action_type: ActionType,
    resource_type: ResourceType,
    description: str,
    resource_id: int | None = None,
    metadata: dict[str, Any] | None = None,
) -> ActivityLog | None:
    """Shortcut for :func:`log_activity` using the caller described by ``context``."""

    if context.user_id is None:
        logger.warning("Skipping %s activity without an authenticated user", action_type.value)
        return None
    return log_activity(
        session,
        user_id=context.user_id,
        action_type=action_type,
        resource_type=resource_type,
        resource_id=resource_id,
        description=description,
        metadata=metadata,
        ip_address=context.ip_address,
        user_agent=context.user_agent,
    )


def record_client_activity(
    session: Session,
    context: RequestContext,
    *,
    action_type: ActionType,
    resource_type: ResourceType,
    description: str,
    resource_id: int | None = None,
    metadata: dict[str, Any] | None = None,
) -> ActivityLog:
    """Store an entry reported by the client. Unlike :func:`log_activity` errors propagate."""

    if context.user_id is None:
        raise ValidationError("An authenticated user is required")
    if not description.strip():
        raise ValidationError("description must not be empty")
    entry = ActivityLog(
        id=None,
        user_id=context.user_id,
        action_type=action_type,
        resource_type=resource_type,
        resource_id=resource_id,
        description=description.strip(),
        ip_address=context.ip_address,
        user_agent=context.user_agent,
        metadata=metadata,
    )
    return ActivityLogRepository(session).create(entry)


def list_activity_logs(
    session: Session,
    *,
    current_user: User,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    filters: ActivityLogFilters | None = None,
) -> ActivityLogPage:
    """Return a page of activity scoped to what ``current_user`` may see.

    Holders of ``admin:read`` see everyone's activity and may narrow it with
    ``filters.user_id``; other users only ever see their own entries.
    """

    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    filters = filters or ActivityLogFilters()

    is_admin = has_permission(session, current_user.id, VIEW_ALL_ACTIVITY_PERMISSION)
    if not is_admin:
        filters.user_id = current_user.id

    if filters.from_date is not None:
        filters.from_date = ensure_app_timezone(filters.from_date)
    if filters.to_date is not None:
        filters.to_date = ensure_app_timezone(filters.to_date)
    if filters.from_date and filters.to_date and filters.from_date > filters.to_date:
        raise ValidationError("from_date must be before to_date")

    logs, total = ActivityLogRepository(session).list(
        filters, offset=(page - 1) * limit, limit=limit
    )
    return ActivityLogPage(
        logs=logs,
        page=page,
        limit=limit,
        total_count=total,
        is_admin=is_admin,
        current_user_id=current_user.id,
    )


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "VIEW_ALL_ACTIVITY_PERMISSION",
    "describe_login",
    "describe_logout",
    "list_activity_logs",
    "log_activity",
    "log_request_activity",
    "record_client_activity",
]
