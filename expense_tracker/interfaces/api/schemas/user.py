"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from expense_tracker.domain.entities import UserStatus

from .role import PermissionRead, RoleRead


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    currency: str | None = Field(default=None, min_length=3, max_length=3)


class UserCreate(UserBase):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)
    role_ids: list[int] | None = None


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)

    model_config = ConfigDict(extra="forbid")


class UserRead(BaseModel):
    """Public representation of an account; the password hash is never included."""

    id: int
    username: str
    email: str
    name: str
    currency: str
    status: UserStatus
    created_at: datetime | None
    updated_at: datetime | None
    deleted_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    users: list[UserRead]
    total: int
    skip: int
    limit: int


class PasswordResetRequest(BaseModel):
    password: str | None = Field(
        default=None,
        min_length=1,
        max_length=128,
        description="New password; a temporary one is generated when omitted",
    )


class PasswordResetResponse(BaseModel):
    user: UserRead
    temporary_password: str | None = None


class UserRolesUpdate(BaseModel):
    role_ids: list[int] = Field(default_factory=list)


class UserPermissionsRead(BaseModel):
    user_id: int
    roles: list[RoleRead]
    permissions: list[PermissionRead]


__all__ = [
    "PasswordResetRequest",
    "PasswordResetResponse",
    "UserCreate",
    "UserListResponse",
    "UserPermissionsRead",
    "UserRead",
    "UserRolesUpdate",
    "UserUpdate",
]
