"""SQLAlchemy model for persisted user notifications."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text

from expense_tracker.infrastructure.database import Base
from expense_tracker.utils import now_in_app_timezone


class UserNotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "user_notifications"
    __table_args__ = (
        CheckConstraint(
            "type IN ('info', 'success', 'warning', 'error')",
            name="ck_user_notifications_type",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default="info")
    related_report_id = Column(
        Integer,
        ForeignKey("content_reports.id", ondelete="SET NULL"),
        nullable=True,
    )
    read_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    deleted_at = Column(DateTime(timezone=True), nullable=True)


__all__ = ["UserNotificationModel"]
