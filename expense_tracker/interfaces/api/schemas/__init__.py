from .activity_log import ActivityLogCreate, ActivityLogListResponse, ActivityLogRead
from .auth import LoginRequest, RegisterRequest, SessionResponse
from .common import MessageResponse, PaginationRead
from .moderation import (
    ModerationActionCreate,
    ModerationActionRead,
    ModerationActionResponse,
    ModerationStatsRead,
    ReportCreate,
    ReportQueueResponse,
    ReportRead,
    StandaloneModerationActionCreate,
)
from .notification import MarkAllReadResponse, NotificationListResponse, NotificationRead
from .role import (
    PermissionRead,
    RoleCreate,
    RoleDetailRead,
    RolePermissionsUpdate,
    RoleRead,
    RoleUpdate,
)
from .setting import SettingRead, SettingsUpdate
from .user import (
    PasswordResetRequest,
    PasswordResetResponse,
    UserCreate,
    UserListResponse,
    UserPermissionsRead,
    UserRead,
    UserRolesUpdate,
    UserUpdate,
)

__all__ = [
    "ActivityLogCreate",
    "ActivityLogListResponse",
    "ActivityLogRead",
    "LoginRequest",
    "MarkAllReadResponse",
    "MessageResponse",
    "ModerationActionCreate",
    "ModerationActionRead",
    "ModerationActionResponse",
    "ModerationStatsRead",
    "NotificationListResponse",
    "NotificationRead",
    "PaginationRead",
    "PasswordResetRequest",
    "PasswordResetResponse",
    "PermissionRead",
    "RegisterRequest",
    "ReportCreate",
    "ReportQueueResponse",
    "ReportRead",
    "RoleCreate",
    "RoleDetailRead",
    "RolePermissionsUpdate",
    "RoleRead",
    "RoleUpdate",
    "SessionResponse",
    "StandaloneModerationActionCreate",
    "SettingRead",
    "SettingsUpdate",
    "UserCreate",
    "UserListResponse",
    "UserPermissionsRead",
    "UserRead",
    "UserRolesUpdate",
    "UserUpdate",
]
