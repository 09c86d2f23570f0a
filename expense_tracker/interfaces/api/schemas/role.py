"""Role and permission schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PermissionRead(BaseModel):
    id: str
    name: str
    description: str | None = None
    scope: str | None = None

    model_config = ConfigDict(from_attributes=True)


class RoleRead(BaseModel):
    id: int
    name: str
    description: str | None
    is_system: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class RoleDetailRead(RoleRead):
    permissions: list[PermissionRead] = Field(default_factory=list)


class RoleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: str | None = None
    permission_ids: list[str] = Field(default_factory=list)


class RoleUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=50)
    description: str | None = None

    model_config = ConfigDict(extra="forbid")


class RolePermissionsUpdate(BaseModel):
    permission_ids: list[str] = Field(default_factory=list)


__all__ = [
    "PermissionRead",
    "RoleCreate",
    "RoleDetailRead",
    "RolePermissionsUpdate",
    "RoleRead",
    "RoleUpdate",
]
