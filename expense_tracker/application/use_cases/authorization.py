"""Use cases answering "may this user do that?".

Checks are default-deny: a user without roles, an unknown user and an unknown
permission name all resolve to ``False`` rather than an error.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from expense_tracker.application.errors import NotFoundError
from expense_tracker.domain.entities import Permission, Role, RoleWithPermissions
from expense_tracker.infrastructure.repositories import RoleRepository


def has_permission(session: Session, user_id: int | None, permission: str) -> bool:
    """Return ``True`` when one of the user's roles grants ``permission``."""

    if user_id is None or not permission:
        return False
    return RoleRepository(session).has_permission(user_id, permission)


def has_any_permission(
    session: Session, user_id: int | None, permissions: Iterable[str]
) -> bool:
    if user_id is None:
        return False
    return RoleRepository(session).has_any_permission(user_id, permissions)


def has_all_permissions(
    session: Session, user_id: int | None, permissions: Iterable[str]
) -> bool:
    wanted = set(permissions)
    if user_id is None or not wanted:
        return False
    granted = {permission.id for permission in get_user_permissions(session, user_id)}
    return wanted <= granted


def get_user_permissions(session: Session, user_id: int) -> list[Permission]:
    """Return the deduplicated union of permissions across the user's roles."""

    return list(RoleRepository(session).get_user_permissions(user_id))


def get_user_roles(session: Session, user_id: int) -> list[Role]:
    return list(RoleRepository(session).get_user_roles(user_id))


def get_role_with_permissions(session: Session, role_id: int) -> RoleWithPermissions:
    role = RoleRepository(session).get_role_with_permissions(role_id)
    if role is None:
        raise NotFoundError("Role not found")
    return role


__all__ = [
    "get_role_with_permissions",
    "get_user_permissions",
    "get_user_roles",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
]
