"""Notifications produced by moderation events."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from expense_tracker.domain.entities import (
    ContentReport,
    ContentType,
    NotificationType,
    UserNotification,
)
from expense_tracker.infrastructure.repositories import NotificationRepository
from expense_tracker.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

REPORTER_RESOLUTION_TITLE = "Report Update: Issue Resolved"
REPORTED_RESOLUTION_TITLE = "Content Report Resolution"
WARNING_TITLE = "Content Warning"
SUSPENSION_TITLE = "Account Suspended"


def _persist_notification(
    session: Session,
    *,
    user_id: int,
    title: str,
    message: str,
    notification_type: NotificationType,
    related_report_id: int | None = None,
) -> UserNotification:
    notification = UserNotification(
        id=None,
        user_id=user_id,
        title=title,
        message=message,
        type=notification_type,
        related_report_id=related_report_id,
        created_at=now_in_app_timezone(),
    )
    return NotificationRepository(session).create(notification)


def _try_persist(session: Session, **kwargs) -> UserNotification | None:
    try:
        return _persist_notification(session, **kwargs)
    except Exception:
        session.rollback()
        logger.exception(
            "Could not create '%s' notification for user %s",
            kwargs.get("title"),
            kwargs.get("user_id"),
        )
        return None


def _label(content_type: ContentType) -> str:
    return content_type.value.replace("_", " ")


def _content_label(report: ContentReport) -> str:
    return _label(report.content_type)


def notify_report_resolution(
    session: Session, report: ContentReport, feedback: str | None = None
) -> list[UserNotification]:
    """Tell the reporter, and the reported user when different, that a report was resolved.

    Each notification is stored on its own; a failure on one does not undo the
    other.
    """

    feedback = (feedback or "").strip() or None
    label = _content_label(report)
    created: list[UserNotification] = []

    if feedback:
        reporter_message = (
            f"Your report about {label} content has been reviewed and resolved. "
            f"Moderator feedback: {feedback}"
        )
    else:
        reporter_message = (
            f"Your report about {label} content has been reviewed and resolved. "
            "Thank you for helping maintain our community standards."
        )
    reporter_notification = _try_persist(
        session,
        user_id=report.reporter_id,
        title=REPORTER_RESOLUTION_TITLE,
        message=reporter_message,
        notification_type=NotificationType.SUCCESS,
        related_report_id=report.id,
    )
    if reporter_notification is not None:
        created.append(reporter_notification)

    if report.reported_user_id != report.reporter_id:
        if feedback:
            reported_message = (
                f"A report about your {label} content has been resolved. "
                f"Moderator note: {feedback}"
            )
        else:
            reported_message = (
                f"A report about your {label} content has been resolved. "
                "Thank you for your cooperation."
            )
        reported_notification = _try_persist(
            session,
            user_id=report.reported_user_id,
            title=REPORTED_RESOLUTION_TITLE,
            message=reported_message,
            notification_type=NotificationType.INFO,
            related_report_id=report.id,
        )
        if reported_notification is not None:
            created.append(reported_notification)

    return created


def notify_user_warned(
    session: Session,
    *,
    user_id: int,
    reason: str | None = None,
    content_type: ContentType | None = None,
    related_report_id: int | None = None,
    feedback: str | None = None,
) -> UserNotification | None:
    """Send a warning to ``user_id``; moderator feedback replaces the default text."""

    if feedback:
        message = feedback
    else:
        subject = f"Your {_label(content_type)} content" if content_type else "Your content"
        message = (
            f"{subject} was reported and reviewed by a moderator. "
            "Please follow the community guidelines."
        )
        if reason:
            message = f"{message} Reason: {reason}"
    return _try_persist(
        session,
        user_id=user_id,
        title=WARNING_TITLE,
        message=message,
        notification_type=NotificationType.WARNING,
        related_report_id=related_report_id,
    )


def notify_user_suspended(
    session: Session,
    *,
    user_id: int,
    reason: str | None = None,
    related_report_id: int | None = None,
    feedback: str | None = None,
) -> UserNotification | None:
    if feedback:
        message = feedback
    else:
        message = "Your account has been suspended following a moderation review."
        if reason:
            message = f"{message} Reason: {reason}"
    return _try_persist(
        session,
        user_id=user_id,
        title=SUSPENSION_TITLE,
        message=message,
        notification_type=NotificationType.ERROR,
        related_report_id=related_report_id,
    )


__all__ = [
    "REPORTED_RESOLUTION_TITLE",
    "REPORTER_RESOLUTION_TITLE",
    "SUSPENSION_TITLE",
    "WARNING_TITLE",
    "notify_report_resolution",
    "notify_user_suspended",
    "notify_user_warned",
]
