"""Domain entity for server-side security events."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class SecurityEventType(str, Enum):
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILURE = "login_failure"
    LOGOUT = "logout"
    PASSWORD_CHANGE = "password_change"
    ADMIN_ACTION = "admin_action"


@dataclass
class SecurityLog:
    """Records the specific cause of authentication outcomes.

    Callers only ever see a uniform 401; this entry keeps the real reason.
    """

    id: int | None
    event_type: SecurityEventType
    user_id: int | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


__all__ = ["SecurityEventType", "SecurityLog"]
