"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from expense_tracker.domain.entities import NotificationType

from .common import PaginationRead


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: int
    title: str
    message: str
    type: NotificationType
    related_report_id: int | None = None
    read_at: datetime | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NotificationListResponse(BaseModel):
    notifications: list[NotificationRead]
    unread_count: int
    pagination: PaginationRead


class MarkAllReadResponse(BaseModel):
    message: str
    updated: int


__all__ = ["MarkAllReadResponse", "NotificationListResponse", "NotificationRead"]
