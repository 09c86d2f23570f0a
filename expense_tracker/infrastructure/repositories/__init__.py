"""Repository implementations for infrastructure layer."""

from .activity_log_repository import ActivityLogRepository
from .content_report_repository import ContentReportRepository
from .notification_repository import NotificationRepository
from .role_repository import RoleRepository
from .security_log_repository import SecurityLogRepository
from .system_setting_repository import SystemSettingRepository
from .user_repository import UserRepository

__all__ = [
    "ActivityLogRepository",
    "ContentReportRepository",
    "NotificationRepository",
    "RoleRepository",
    "SecurityLogRepository",
    "SystemSettingRepository",
    "UserRepository",
]
