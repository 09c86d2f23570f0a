"""Default permissions, roles and settings inserted when the database is set up."""

from __future__ import annotations

import logging

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from expense_tracker.infrastructure.models import (
    PermissionModel,
    RoleModel,
    SystemSettingModel,
    role_permissions_table,
)

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"
USER_ROLE = "user"
MODERATOR_ROLE = "moderator"

# (id, display name, description)
DEFAULT_PERMISSIONS: tuple[tuple[str, str, str], ...] = (
    ("admin:read", "View all activity", "See activity of every user"),
    ("admin:dashboard", "Admin dashboard", "Access the administration dashboard"),
    ("users:read", "View users", "List and inspect user accounts"),
    ("users:write", "Manage users", "Create, edit, suspend and delete user accounts"),
    ("roles:read", "View roles", "List roles and their permissions"),
    ("roles:write", "Manage roles", "Create roles and change role assignments"),
    ("reports:read", "View reports", "Access the moderation queue"),
    ("reports:write", "Moderate reports", "Take moderation actions on reports"),
    ("settings:read", "View settings", "Read every system setting"),
    ("settings:write", "Manage settings", "Change system settings"),
    ("expenses:read", "View expenses", "Read own expenses"),
    ("expenses:write", "Manage expenses", "Create, edit and delete own expenses"),
    ("budgets:read", "View budgets", "Read own budgets"),
    ("budgets:write", "Manage budgets", "Create, edit and delete own budgets"),
    ("categories:read", "View categories", "Read own categories"),
    ("categories:write", "Manage categories", "Create, edit and delete own categories"),
)

_USER_PERMISSIONS = (
    "expenses:read",
    "expenses:write",
    "budgets:read",
    "budgets:write",
    "categories:read",
    "categories:write",
)

# (name, description, is_system, permission ids or None for every permission)
DEFAULT_ROLES: tuple[tuple[str, str, bool, tuple[str, ...] | None], ...] = (
    (ADMIN_ROLE, "Full access to every feature", True, None),
    (USER_ROLE, "Regular user managing their own finances", True, _USER_PERMISSIONS),
    (
        MODERATOR_ROLE,
        "Reviews reported content",
        False,
        ("users:read", "reports:read", "reports:write") + _USER_PERMISSIONS,
    ),
)

# (key, value, type, category, description, is_public)
DEFAULT_SETTINGS: tuple[tuple[str, str | None, str, str, str, bool], ...] = (
    ("app_name", "Expense Tracker", "text", "general", "Application display name", True),
    ("default_currency", "XAF", "text", "general", "Currency for new accounts", True),
    ("allow_registration", "true", "boolean", "security", "Accept self sign-ups", True),
    ("maintenance_mode", "false", "boolean", "general", "Show the maintenance banner", True),
    ("max_upload_size_mb", "5", "number", "uploads", "Largest accepted receipt upload", False),
    ("logo", None, "file", "branding", "Path of the uploaded logo", True),
    ("feature_flags", "{}", "json", "general", "Toggles for experimental features", False),
)


def _permission_scope(permission_id: str) -> str:
    return permission_id.split(":", 1)[0]


def seed_defaults(session: Session) -> None:
    """Insert the default catalogue; existing rows are left untouched.

    System roles that grant every permission pick up permissions added later.
    """

    existing_permissions = set(session.scalars(select(PermissionModel.id)))
    for permission_id, name, description in DEFAULT_PERMISSIONS:
        if permission_id in existing_permissions:
            continue
        session.add(
            PermissionModel(
                id=permission_id,
                name=name,
                description=description,
                scope=_permission_scope(permission_id),
            )
        )
    session.flush()

    all_permissions = [permission_id for permission_id, _, _ in DEFAULT_PERMISSIONS]
    for name, description, is_system, granted in DEFAULT_ROLES:
        role = session.scalar(select(RoleModel).where(RoleModel.name == name))
        created = role is None
        if created:
            role = RoleModel(name=name, description=description, is_system=is_system)
            session.add(role)
            session.flush()
            logger.info("Seeded role '%s'", name)
        elif granted is not None:
            continue

        wanted = set(all_permissions if granted is None else granted)
        linked = set(
            session.scalars(
                select(role_permissions_table.c.permission_id).where(
                    role_permissions_table.c.role_id == role.id
                )
            )
        )
        missing = sorted(wanted - linked)
        if missing:
            session.execute(
                insert(role_permissions_table),
                [{"role_id": role.id, "permission_id": pid} for pid in missing],
            )

    existing_settings = set(session.scalars(select(SystemSettingModel.setting_key)))
    for key, value, setting_type, category, description, is_public in DEFAULT_SETTINGS:
        if key in existing_settings:
            continue
        session.add(
            SystemSettingModel(
                setting_key=key,
                setting_value=value,
                setting_type=setting_type,
                category=category,
                description=description,
                is_public=is_public,
            )
        )

    session.commit()


__all__ = [
    "ADMIN_ROLE",
    "DEFAULT_PERMISSIONS",
    "DEFAULT_ROLES",
    "DEFAULT_SETTINGS",
    "MODERATOR_ROLE",
    "USER_ROLE",
    "seed_defaults",
]
