"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .change_user_status import delete_user, reactivate_user, suspend_user
from .create_user import create_user, register_user
from .get_user import get_user
from .list_users import list_users
from .reset_password import reset_password
from .update_user import update_user

__all__ = [
    "AuthenticationStatus",
    "authenticate_user",
    "create_user",
    "delete_user",
    "get_user",
    "list_users",
    "reactivate_user",
    "register_user",
    "reset_password",
    "suspend_user",
    "update_user",
]
