"""Domain entities for content reports and the moderation actions taken on them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .soft_delete import SoftDeletable


class ContentType(str, Enum):
    EXPENSE = "expense"
    INCOME = "income"
    BUDGET = "budget"
    ANNOUNCEMENT = "announcement"
    USER_PROFILE = "user_profile"
    CATEGORY = "category"


class ReportReason(str, Enum):
    SPAM = "spam"
    INAPPROPRIATE = "inappropriate"
    HARASSMENT = "harassment"
    FRAUD = "fraud"
    OFFENSIVE = "offensive"
    OTHER = "other"


class ReportStatus(str, Enum):
    PENDING = "pending"
    REVIEWING = "reviewing"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"

    @property
    def is_open(self) -> bool:
        return self in (ReportStatus.PENDING, ReportStatus.REVIEWING)


class ReportPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Sort key for the moderation queue, most pressing first."""

        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    ReportPriority.URGENT: 0,
    ReportPriority.HIGH: 1,
    ReportPriority.MEDIUM: 2,
    ReportPriority.LOW: 3,
}


class ModerationActionType(str, Enum):
    RESOLVE = "resolve"
    DISMISS = "dismiss"
    WARN_USER = "warn_user"
    HIDE_CONTENT = "hide_content"
    RESTORE_CONTENT = "restore_content"
    SUSPEND_USER = "suspend_user"
    DELETE_CONTENT = "delete_content"
    ESCALATE = "escalate"


@dataclass
class ContentReport(SoftDeletable):
    """A user's complaint about a piece of content owned by another user.

    Status moves ``pending -> reviewing -> resolved | dismissed``. ``deleted_at`` is
    independent of status and only hides the report from the moderation queue.
    """

    id: int | None
    reporter_id: int
    reported_user_id: int
    content_type: ContentType
    content_id: int
    reason: ReportReason
    description: str | None
    status: ReportStatus = ReportStatus.PENDING
    priority: ReportPriority = ReportPriority.MEDIUM
    moderator_feedback: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None
    reporter_username: str | None = None
    reported_username: str | None = None


@dataclass
class ModerationAction:
    """Record of a decision a moderator made about a report."""

    id: int | None
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


@dataclass
class ModerationStats:
    pending: int
    reviewing: int
    resolved: int
    dismissed: int
    reports_last_24h: int
    reports_last_7d: int
    suspended_users: int


__all__ = [
    "ContentReport",
    "ContentType",
    "ModerationAction",
    "ModerationActionType",
    "ModerationStats",
    "ReportPriority",
    "ReportReason",
    "ReportStatus",
]
