"""Domain entities exposed by the application."""

from .activity_log import ActionType, ActivityLog, ActivityLogFilters, ActivityLogPage, ResourceType
from .content_report import (
    ContentReport,
    ContentType,
    ModerationAction,
    ModerationActionType,
    ModerationStats,
    ReportPriority,
    ReportReason,
    ReportStatus,
)
from .notification import NotificationType, UserNotification
from .role import Permission, Role, RoleWithPermissions
from .security_log import SecurityEventType, SecurityLog
from .soft_delete import SoftDeletable
from .system_setting import (
    SettingType,
    SystemSetting,
    parse_setting_value,
    serialize_setting_value,
)
from .user import User, UserStatus

__all__ = [
    "ActionType",
    "ActivityLog",
    "ActivityLogFilters",
    "ActivityLogPage",
    "ContentReport",
    "ContentType",
    "ModerationAction",
    "ModerationActionType",
    "ModerationStats",
    "NotificationType",
    "Permission",
    "ReportPriority",
    "ReportReason",
    "ReportStatus",
    "ResourceType",
    "Role",
    "RoleWithPermissions",
    "SecurityEventType",
    "SecurityLog",
    "SettingType",
    "SoftDeletable",
    "SystemSetting",
    "User",
    "UserNotification",
    "UserStatus",
    "parse_setting_value",
    "serialize_setting_value",
]
