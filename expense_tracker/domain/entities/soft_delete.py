"""Shared behaviour for entities that are hidden instead of removed."""

from __future__ import annotations

from datetime import datetime

from expense_tracker.utils import now_in_app_timezone


class SoftDeletable:
    """Mixin for dataclasses carrying a ``deleted_at`` timestamp.

    Rows are never removed from storage; a non-null ``deleted_at`` hides them from
    normal reads while keeping them available for audit.
    """

    deleted_at: datetime | None

    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self, when: datetime | None = None) -> None:
        """Stamp ``deleted_at`` unless it is already set."""

        if self.deleted_at is None:
            self.deleted_at = when or now_in_app_timezone()


__all__ = ["SoftDeletable"]
