"""Use cases for user notifications."""

from .events import (
    notify_report_resolution,
    notify_user_suspended,
    notify_user_warned,
)
from .inbox import (
    NotificationPage,
    count_unread_notifications,
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    "NotificationPage",
    "count_unread_notifications",
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_report_resolution",
    "notify_user_suspended",
    "notify_user_warned",
]
