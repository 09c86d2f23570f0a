"""ORM models used by the application infrastructure."""

from .role import PermissionModel, RoleModel, role_permissions_table, user_roles_table
from .user import UserModel
from .activity_log import ActivityLogModel
from .security_log import SecurityLogModel
from .content_report import ContentReportModel, ModerationActionModel
from .notification import UserNotificationModel
from .system_setting import SystemSettingModel

__all__ = [
    "ActivityLogModel",
    "ContentReportModel",
    "ModerationActionModel",
    "PermissionModel",
    "RoleModel",
    "SecurityLogModel",
    "SystemSettingModel",
    "UserModel",
    "UserNotificationModel",
    "role_permissions_table",
    "user_roles_table",
]
