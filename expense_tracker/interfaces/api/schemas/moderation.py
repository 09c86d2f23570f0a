"""Schemas for content reports and moderation."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from expense_tracker.domain.entities import (
    ContentType,
    ModerationActionType,
    ReportPriority,
    ReportReason,
    ReportStatus,
)

from .common import PaginationRead


class ReportCreate(BaseModel):
    reported_user_id: int = Field(..., ge=1)
    content_type: ContentType
    content_id: int = Field(..., ge=1)
    reason: ReportReason
    description: str | None = Field(default=None, max_length=2000)


class ReportRead(BaseModel):
    id: int
    reporter_id: int
    reporter_username: str | None = None
    reported_user_id: int
    reported_username: str | None = None
    content_type: ContentType
    content_id: int
    reason: ReportReason
    description: str | None = None
    status: ReportStatus
    priority: ReportPriority
    moderator_feedback: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ReportQueueResponse(BaseModel):
    reports: list[ReportRead]
    pagination: PaginationRead


class ModerationActionCreate(BaseModel):
    action_type: ModerationActionType
    reason: str | None = Field(default=None, max_length=1000)
    details: str | None = Field(default=None, max_length=2000)
    user_feedback: str | None = Field(default=None, max_length=2000)


class StandaloneModerationActionCreate(ModerationActionCreate):
    """An action aimed directly at a user or a piece of content, optionally tied to a report."""

    report_id: int | None = Field(default=None, ge=1)
    target_user_id: int | None = Field(default=None, ge=1)
    content_type: ContentType | None = None
    content_id: int | None = Field(default=None, ge=1)


class ModerationActionRead(BaseModel):
    id: int
    report_id: int | None
    moderator_id: int
    action_type: ModerationActionType
    target_user_id: int | None = None
    content_type: ContentType | None = None
    content_id: int | None = None
    reason: str | None = None
    details: str | None = None
    user_feedback: str | None = None
    feedback_sent_at: datetime | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ModerationActionResponse(BaseModel):
    report: ReportRead | None = None
    action: ModerationActionRead


class ModerationStatsRead(BaseModel):
    pending: int
    reviewing: int
    resolved: int
    dismissed: int
    reports_last_24h: int
    reports_last_7d: int
    suspended_users: int

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "ModerationActionCreate",
    "ModerationActionRead",
    "ModerationActionResponse",
    "ModerationStatsRead",
    "ReportCreate",
    "ReportQueueResponse",
    "ReportRead",
    "StandaloneModerationActionCreate",
]
