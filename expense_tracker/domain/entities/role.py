"""Domain entities for roles and the permissions they grant."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Permission:
    """Capability identified by a ``resource:action`` key such as ``users:read``."""

    id: str
    name: str
    description: str | None = None
    scope: str | None = None


@dataclass
class Role:
    """Named bundle of permissions that can be assigned to users."""

    id: int | None
    name: str
    description: str | None
    is_system: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class RoleWithPermissions:
    """A role together with every permission linked to it."""

    role: Role
    permissions: list[Permission] = field(default_factory=list)

    @property
    def permission_ids(self) -> list[str]:
        return [permission.id for permission in self.permissions]


__all__ = ["Permission", "Role", "RoleWithPermissions"]
