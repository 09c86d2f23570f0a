"""Domain entity representing a user."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .soft_delete import SoftDeletable


class UserStatus(str, Enum):
    """Lifecycle states of an account."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"


@dataclass
class User(SoftDeletable):
    """Core attributes describing an application user."""

    id: int | None
    username: str
    email: str
    password: str
    name: str
    currency: str
    status: UserStatus
    created_at: datetime | None
    updated_at: datetime | None
    deleted_at: datetime | None

    def is_active(self) -> bool:
        return self.status is UserStatus.ACTIVE

    def is_suspended(self) -> bool:
        return self.status is UserStatus.SUSPENDED

    def is_deleted(self) -> bool:
        return self.status is UserStatus.DELETED or super().is_deleted()

    def soft_delete(self, when: datetime | None = None) -> None:
        """Mark the account as deleted while keeping its row."""

        super().soft_delete(when)
        self.status = UserStatus.DELETED


__all__ = ["User", "UserStatus"]
