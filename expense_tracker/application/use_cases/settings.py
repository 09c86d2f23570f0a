"""Use cases for reading and changing system settings."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from expense_tracker.application.errors import NotFoundError, ValidationError
from expense_tracker.domain.entities import SystemSetting, serialize_setting_value
from expense_tracker.infrastructure.repositories import SystemSettingRepository


def list_settings(session: Session, *, public_only: bool = False) -> list[SystemSetting]:
    return list(SystemSettingRepository(session).list(public_only=public_only))


def get_setting(session: Session, key: str) -> SystemSetting:
    setting = SystemSettingRepository(session).get_by_key(key)
    if setting is None:
        raise NotFoundError(f"Setting '{key}' not found")
    return setting


def update_settings(session: Session, values: dict[str, Any]) -> list[SystemSetting]:
    """Validate every value against its declared type, then store them together.

    Nothing is written when any key is unknown or any value is invalid.
    """

    if not values:
        raise ValidationError("No settings provided")

    repository = SystemSettingRepository(session)
    serialized: dict[str, str | None] = {}
    for key, value in values.items():
        setting = repository.get_by_key(key)
        if setting is None:
            raise NotFoundError(f"Setting '{key}' not found")
        try:
            serialized[key] = serialize_setting_value(setting.setting_type, value)
        except ValueError as exc:
            raise ValidationError(f"{key}: {exc}") from exc

    return list(repository.save_values(serialized))


__all__ = ["get_setting", "list_settings", "update_settings"]
