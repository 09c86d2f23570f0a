"""Use cases for roles and permission assignment."""

from .assign_roles import set_role_permissions, set_user_roles
from .manage_roles import (
    create_role,
    delete_role,
    list_permissions,
    list_roles,
    update_role,
)

__all__ = [
    "create_role",
    "delete_role",
    "list_permissions",
    "list_roles",
    "set_role_permissions",
    "set_user_roles",
    "update_role",
]
