"""SQLAlchemy model for the append-only activity log.

Row removal and modification are refused by database triggers created together
with the table, so the log stays intact even for code that bypasses the ORM.
"""

from sqlalchemy import DDL, Column, DateTime, ForeignKey, Integer, String, Text, event
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON

from expense_tracker.infrastructure.database import Base
from expense_tracker.utils import now_in_app_timezone

_activity_json_type = JSONB().with_variant(JSON(), "sqlite")

ACTIVITY_LOG_TABLE = "activity_log"
PROTECTION_MESSAGE = (
    "Activity logs cannot be modified or deleted for security and audit purposes."
)


class ActivityLogModel(Base):
    """Database representation of a recorded user action."""

    __tablename__ = ACTIVITY_LOG_TABLE

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    action_type = Column(String(50), nullable=False, index=True)
    resource_type = Column(String(50), nullable=False, index=True)
    resource_id = Column(Integer, nullable=True)
    description = Column(Text, nullable=False)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)
    # ``metadata`` is reserved on declarative classes.
    metadata_ = Column("metadata", _activity_json_type, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=now_in_app_timezone,
        index=True,
    )

    user = relationship("UserModel", lazy="joined")


def _sqlite_guard(operation: str) -> DDL:
    return DDL(
        f"CREATE TRIGGER IF NOT EXISTS {ACTIVITY_LOG_TABLE}_prevent_{operation.lower()} "
        f"BEFORE {operation} ON {ACTIVITY_LOG_TABLE} "
        "BEGIN "
        f"SELECT RAISE(ABORT, '{PROTECTION_MESSAGE} "
        f"Table: {ACTIVITY_LOG_TABLE}, Operation: {operation}'); "
        "END"
    ).execute_if(dialect="sqlite")


_POSTGRES_GUARD_FUNCTION = DDL(
    "CREATE OR REPLACE FUNCTION prevent_activity_log_modification() "
    "RETURNS trigger AS $$ "
    "BEGIN "
    f"RAISE EXCEPTION USING MESSAGE = '{PROTECTION_MESSAGE} Table: ' "
    "|| TG_TABLE_NAME || ', Operation: ' || TG_OP; "
    "END; "
    "$$ LANGUAGE plpgsql"
).execute_if(dialect="postgresql")


def _postgres_guard(operation: str, level: str) -> DDL:
    return DDL(
        f"CREATE TRIGGER {ACTIVITY_LOG_TABLE}_prevent_{operation.lower()} "
        f"BEFORE {operation} ON {ACTIVITY_LOG_TABLE} "
        f"FOR EACH {level} EXECUTE FUNCTION prevent_activity_log_modification()"
    ).execute_if(dialect="postgresql")


for _ddl in (
    _sqlite_guard("DELETE"),
    _sqlite_guard("UPDATE"),
    _POSTGRES_GUARD_FUNCTION,
    _postgres_guard("DELETE", "ROW"),
    _postgres_guard("UPDATE", "ROW"),
    _postgres_guard("TRUNCATE", "STATEMENT"),
):
    event.listen(ActivityLogModel.__table__, "after_create", _ddl)


__all__ = ["ACTIVITY_LOG_TABLE", "ActivityLogModel", "PROTECTION_MESSAGE"]
