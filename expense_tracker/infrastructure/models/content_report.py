"""SQLAlchemy models for content reports and moderation actions."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from expense_tracker.infrastructure.database import Base
from expense_tracker.utils import now_in_app_timezone


class ContentReportModel(Base):
    """Database representation of a user report about content."""

    __tablename__ = "content_reports"
    __table_args__ = (
        CheckConstraint(
            "content_type IN ('expense', 'income', 'budget', 'announcement', "
            "'user_profile', 'category')",
            name="ck_content_reports_content_type",
        ),
        CheckConstraint(
            "reason IN ('spam', 'inappropriate', 'harassment', 'fraud', "
            "'offensive', 'other')",
            name="ck_content_reports_reason",
        ),
        CheckConstraint(
            "status IN ('pending', 'reviewing', 'resolved', 'dismissed')",
            name="ck_content_reports_status",
        ),
        CheckConstraint(
            "priority IN ('low', 'medium', 'high', 'urgent')",
            name="ck_content_reports_priority",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    reporter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    reported_user_id = Column(
        Integer, ForeignKey("users.id"), nullable=False, index=True
    )
    content_type = Column(String(50), nullable=False)
    content_id = Column(Integer, nullable=False)
    reason = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    priority = Column(String(20), nullable=False, default="medium")
    moderator_feedback = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    reporter = relationship("UserModel", foreign_keys=[reporter_id], lazy="joined")
    reported_user = relationship(
        "UserModel", foreign_keys=[reported_user_id], lazy="joined"
    )


class ModerationActionModel(Base):
    """Database representation of a moderator decision."""

    __tablename__ = "moderation_actions"
    __table_args__ = (
        CheckConstraint(
            "action_type IN ('resolve', 'dismiss', 'warn_user', 'hide_content', "
            "'restore_content', 'suspend_user', 'delete_content', 'escalate')",
            name="ck_moderation_actions_action_type",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    report_id = Column(
        Integer,
        ForeignKey("content_reports.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    moderator_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    target_user_id = Column(
        Integer, ForeignKey("users.id"), nullable=True, index=True
    )
    content_type = Column(String(50), nullable=True)
    content_id = Column(Integer, nullable=True)
    action_type = Column(String(50), nullable=False)
    reason = Column(Text, nullable=True)
    details = Column(Text, nullable=True)
    user_feedback = Column(Text, nullable=True)
    feedback_sent_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )


__all__ = ["ContentReportModel", "ModerationActionModel"]
