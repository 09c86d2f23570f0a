"""Use cases for a user reading and dismissing their notifications."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from expense_tracker.application.errors import NotFoundError
from expense_tracker.domain.entities import UserNotification
from expense_tracker.infrastructure.repositories import NotificationRepository

MAX_PAGE_SIZE = 100


@dataclass
class NotificationPage:
    notifications: list[UserNotification]
    unread_count: int
    page: int
    limit: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return (self.total_count + self.limit - 1) // self.limit if self.limit else 0


def list_notifications(
    session: Session,
    *,
    user_id: int,
    page: int = 1,
    limit: int = 20,
    unread_only: bool = False,
) -> NotificationPage:
    """Return the user's notifications, newest first, with the unread count.

    The unread count is always recomputed from the table.
    """

    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    repository = NotificationRepository(session)
    notifications, total = repository.list_for_user(
        user_id, unread_only=unread_only, offset=(page - 1) * limit, limit=limit
    )
    return NotificationPage(
        notifications=notifications,
        unread_count=repository.count_unread(user_id),
        page=page,
        limit=limit,
        total_count=total,
    )


def count_unread_notifications(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).count_unread(user_id)


def mark_notification_read(
    session: Session, *, user_id: int, notification_id: int
) -> UserNotification:
    """Set ``read_at`` the first time; later calls leave it unchanged."""

    repository = NotificationRepository(session)
    if repository.get_for_user(notification_id, user_id=user_id) is None:
        raise NotFoundError("Notification not found")
    repository.mark_as_read(notification_id, user_id=user_id)
    return repository.get_for_user(notification_id, user_id=user_id)


def mark_all_notifications_read(session: Session, *, user_id: int) -> int:
    """Mark every unread notification of the user as read; return how many changed."""

    return NotificationRepository(session).mark_all_as_read(user_id)


def delete_notification(session: Session, *, user_id: int, notification_id: int) -> None:
    if not NotificationRepository(session).soft_delete(notification_id, user_id=user_id):
        raise NotFoundError("Notification not found")


__all__ = [
    "NotificationPage",
    "count_unread_notifications",
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
