"""Schemas for system settings."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from expense_tracker.domain.entities import SettingType, SystemSetting


class SettingRead(BaseModel):
    key: str
    value: Any = None
    setting_type: SettingType
    category: str
    description: str | None = None
    is_public: bool
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, setting: SystemSetting) -> "SettingRead":
        return cls(
            key=setting.key,
            value=setting.typed_value,
            setting_type=setting.setting_type,
            category=setting.category,
            description=setting.description,
            is_public=setting.is_public,
            updated_at=setting.updated_at,
        )


class SettingsUpdate(BaseModel):
    values: dict[str, Any] = Field(..., min_length=1)


__all__ = ["SettingRead", "SettingsUpdate"]
