"""SQLAlchemy model for system settings."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import expression

from expense_tracker.infrastructure.database import Base
from expense_tracker.utils import now_in_app_timezone


class SystemSettingModel(Base):
    """Key/value configuration editable by administrators."""

    __tablename__ = "system_settings"
    __table_args__ = (
        CheckConstraint(
            "setting_type IN ('text', 'number', 'boolean', 'json', 'file')",
            name="ck_system_settings_type",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    setting_key = Column(String(100), nullable=False, unique=True)
    setting_value = Column(Text, nullable=True)
    setting_type = Column(String(20), nullable=False, default="text")
    category = Column(String(50), nullable=False, default="general")
    description = Column(Text, nullable=True)
    is_public = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )


__all__ = ["SystemSettingModel"]
