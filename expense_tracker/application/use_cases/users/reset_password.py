"""Use case for administrators resetting a user's password."""

from dataclasses import replace

from sqlalchemy.orm import Session

from expense_tracker.application.errors import NotFoundError, ValidationError
from expense_tracker.domain.entities import User
from expense_tracker.infrastructure.repositories import UserRepository
from expense_tracker.infrastructure.security import (
    generate_secure_password,
    get_password_hash,
)

from .validators import ensure_password


def reset_password(
    session: Session, *, user_id: int, new_password: str | None = None
) -> tuple[User, str | None]:
    """Replace the password hash.

    Without ``new_password`` a temporary password is generated and returned so
    the administrator can hand it over; otherwise ``None`` is returned with the
    user.
    """

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    if user.is_deleted():
        raise ValidationError("Deleted users cannot have their password reset")

    temporary_password = None
    if new_password is None:
        temporary_password = generate_secure_password()
        new_password = temporary_password
    else:
        ensure_password(new_password)

    updated = repository.update(replace(user, password=get_password_hash(new_password)))
    return updated, temporary_password
