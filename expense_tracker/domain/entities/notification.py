"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .soft_delete import SoftDeletable


class NotificationType(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class UserNotification(SoftDeletable):
    """Information message delivered to a specific user."""

    id: int | None
    user_id: int
    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    related_report_id: int | None = None
    read_at: datetime | None = None
    created_at: datetime | None = None
    deleted_at: datetime | None = None

    def is_read(self) -> bool:
        return self.read_at is not None


__all__ = ["NotificationType", "UserNotification"]
