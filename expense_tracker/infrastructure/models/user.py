"""SQLAlchemy model for the users table."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from expense_tracker.infrastructure.database import Base
from expense_tracker.utils import now_in_app_timezone

from .role import user_roles_table


class UserModel(Base):
    """Database representation of an application user."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'suspended', 'deleted')", name="ck_users_status"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)
    currency = Column(String(3), nullable=False, default="XAF")
    status = Column(String(20), nullable=False, default="active", index=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    roles = relationship(
        "RoleModel",
        secondary=user_roles_table,
        order_by="RoleModel.name",
        viewonly=True,
    )


__all__ = ["UserModel"]
