"""SQLAlchemy model for security events."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON

from expense_tracker.infrastructure.database import Base
from expense_tracker.utils import now_in_app_timezone

_security_json_type = JSONB().with_variant(JSON(), "sqlite")


class SecurityLogModel(Base):
    """Authentication outcomes and administrative actions kept server side."""

    __tablename__ = "security_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    event_type = Column(String(50), nullable=False, index=True)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
    details = Column(_security_json_type, nullable=False, default=dict)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )


__all__ = ["SecurityLogModel"]
