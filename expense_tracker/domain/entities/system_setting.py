"""Domain entity for typed system settings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
import json
import math
from typing import Any

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


class SettingType(str, Enum):
    """Closed set of value kinds a setting may hold."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    JSON = "json"
    FILE = "file"


def parse_setting_value(setting_type: SettingType, raw: str | None) -> Any:
    """Convert the stored text of a setting into its typed Python value.

    Raises ``ValueError`` when ``raw`` is not valid for ``setting_type``.
    """

    if raw is None:
        return None

    if setting_type is SettingType.NUMBER:
        try:
            number = float(raw)
        except ValueError as exc:
            raise ValueError(f"'{raw}' is not a valid number") from exc
        if not math.isfinite(number):
            raise ValueError(f"'{raw}' is not a finite number")
        return int(number) if number.is_integer() and "." not in raw else number

    if setting_type is SettingType.BOOLEAN:
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ValueError(f"'{raw}' is not a valid boolean")

    if setting_type is SettingType.JSON:
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError("Value is not valid JSON") from exc

    return raw


def serialize_setting_value(setting_type: SettingType, value: Any) -> str | None:
    """Render ``value`` as the text stored for a setting of ``setting_type``.

    The result always round-trips through :func:`parse_setting_value`.
    """

    if value is None:
        return None

    if setting_type is SettingType.NUMBER:
        if isinstance(value, bool):
            raise ValueError("Boolean values are not numbers")
        text = str(value).strip()
        parse_setting_value(setting_type, text)
        return text

    if setting_type is SettingType.BOOLEAN:
        if isinstance(value, bool):
            return "true" if value else "false"
        return "true" if parse_setting_value(setting_type, str(value)) else "false"

    if setting_type is SettingType.JSON:
        if isinstance(value, str):
            parse_setting_value(setting_type, value)
            return value
        try:
            return json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise ValueError("Value cannot be stored as JSON") from exc

    if not isinstance(value, str):
        raise ValueError(f"{setting_type.value} settings expect a string value")
    return value


@dataclass
class SystemSetting:
    id: int | None
    key: str
    value: str | None
    setting_type: SettingType
    category: str = "general"
    description: str | None = None
    is_public: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def typed_value(self) -> Any:
        return parse_setting_value(self.setting_type, self.value)


__all__ = [
    "SettingType",
    "SystemSetting",
    "parse_setting_value",
    "serialize_setting_value",
]
