"""Domain entities for the append-only activity log."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class ActionType(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    VIEW = "VIEW"


class ResourceType(str, Enum):
    EXPENSE = "EXPENSE"
    INCOME = "INCOME"
    BUDGET = "BUDGET"
    CATEGORY = "CATEGORY"
    USER = "USER"
    ROLE = "ROLE"
    REPORT = "REPORT"
    NOTIFICATION = "NOTIFICATION"
    SETTINGS = "SETTINGS"


@dataclass
class ActivityLog:
    """A single recorded action. Never updated or removed once stored."""

    id: int | None
    user_id: int
    action_type: ActionType
    resource_type: ResourceType
    description: str
    resource_id: int | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    metadata: dict[str, Any] | None = None
    created_at: datetime | None = None
    username: str | None = None


@dataclass
class ActivityLogFilters:
    """Optional criteria applied when listing activity."""

    user_id: int | None = None
    action_type: ActionType | None = None
    resource_type: ResourceType | None = None
    search: str | None = None
    from_date: datetime | None = None
    to_date: datetime | None = None


@dataclass
class ActivityLogPage:
    logs: list[ActivityLog]
    page: int
    limit: int
    total_count: int
    is_admin: bool
    current_user_id: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return (self.total_count + self.limit - 1) // self.limit


__all__ = [
    "ActionType",
    "ActivityLog",
    "ActivityLogFilters",
    "ActivityLogPage",
    "ResourceType",
]
