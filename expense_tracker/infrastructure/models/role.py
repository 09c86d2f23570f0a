"""SQLAlchemy models for roles, permissions and their join tables."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from expense_tracker.infrastructure.database import Base
from expense_tracker.utils import now_in_app_timezone

user_roles_table = Table(
    "user_roles",
    Base.metadata,
    Column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id", ondelete="RESTRICT"),
        primary_key=True,
        index=True,
    ),
    Column("assigned_at", DateTime(timezone=True), default=now_in_app_timezone),
)

role_permissions_table = Table(
    "role_permissions",
    Base.metadata,
    Column(
        "role_id",
        Integer,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "permission_id",
        String(100),
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class PermissionModel(Base):
    """Database representation of a ``resource:action`` capability."""

    __tablename__ = "permissions"

    id = Column(String(100), primary_key=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    scope = Column(String(50), nullable=True, index=True)


class RoleModel(Base):
    """Database representation of a named permission bundle."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    is_system = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )

    permissions = relationship(
        "PermissionModel",
        secondary=role_permissions_table,
        order_by="PermissionModel.id",
        viewonly=True,
    )


__all__ = [
    "PermissionModel",
    "RoleModel",
    "role_permissions_table",
    "user_roles_table",
]
