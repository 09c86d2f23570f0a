"""Use cases for creating users."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from expense_tracker.application.errors import (
    ConflictError,
    PermissionDeniedError,
    ValidationError,
)
from expense_tracker.config import get_settings
from expense_tracker.domain.entities import User, UserStatus
from expense_tracker.infrastructure.repositories import (
    RoleRepository,
    SystemSettingRepository,
    UserRepository,
)
from expense_tracker.infrastructure.security import get_password_hash
from expense_tracker.infrastructure.seed import USER_ROLE

from .validators import (
    conflict_from_integrity_error,
    ensure_password,
    normalize_currency,
    normalize_username,
)


def create_user(
    session: Session,
    *,
    username: str,
    email: str,
    password: str,
    name: str,
    currency: str | None = None,
    role_ids: Sequence[int] | None = None,
) -> User:
    """Create a new user with a freshly salted password hash.

    When ``role_ids`` is ``None`` the default ``user`` role is assigned.
    """

    repository = UserRepository(session)
    role_repository = RoleRepository(session)

    username = normalize_username(username)
    ensure_password(password)
    if repository.get_by_username(username):
        raise ConflictError("Username already exists")
    if repository.get_by_email(email):
        raise ConflictError("Email already exists")

    if role_ids is None:
        default_role = role_repository.get_by_name(USER_ROLE)
        role_ids = [default_role.id] if default_role else []
    else:
        role_ids = list(dict.fromkeys(role_ids))
        found = {role.id for role in role_repository.get_many(role_ids)}
        missing = [role_id for role_id in role_ids if role_id not in found]
        if missing:
            raise ValidationError(f"Unknown role ids: {missing}")

    user = User(
        id=None,
        username=username,
        email=email.strip().lower(),
        password=get_password_hash(password),
        name=name.strip(),
        currency=normalize_currency(currency or get_settings().default_currency),
        status=UserStatus.ACTIVE,
        created_at=None,
        updated_at=None,
        deleted_at=None,
    )
    try:
        created = repository.create(user)
    except IntegrityError as exc:
        session.rollback()
        raise conflict_from_integrity_error(exc) from exc
    if role_ids:
        role_repository.set_user_roles(created.id, role_ids)
    return created


def register_user(
    session: Session,
    *,
    username: str,
    email: str,
    password: str,
    name: str,
    currency: str | None = None,
) -> User:
    """Self sign-up; refused while the ``allow_registration`` setting is off."""

    setting = SystemSettingRepository(session).get_by_key("allow_registration")
    if setting is not None and setting.typed_value is False:
        raise PermissionDeniedError("Registration is currently disabled")
    return create_user(
        session,
        username=username,
        email=email,
        password=password,
        name=name,
        currency=currency,
    )
