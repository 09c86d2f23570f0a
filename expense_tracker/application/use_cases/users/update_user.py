"""Use case for updating user information."""

from dataclasses import replace

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from expense_tracker.application.errors import ConflictError, NotFoundError, ValidationError
from expense_tracker.domain.entities import User
from expense_tracker.infrastructure.repositories import UserRepository

from .validators import conflict_from_integrity_error, normalize_currency


def update_user(
    session: Session,
    *,
    user_id: int,
    name: str | None = None,
    email: str | None = None,
    currency: str | None = None,
) -> User:
    """Update profile fields of the provided user."""

    repository = UserRepository(session)
    current_user = repository.get(user_id)
    if current_user is None:
        raise NotFoundError("User not found")
    if current_user.is_deleted():
        raise ValidationError("Deleted users cannot be modified")

    new_email = current_user.email
    if email is not None and email.strip().lower() != current_user.email:
        existing_with_email = repository.get_by_email(email)
        if existing_with_email and existing_with_email.id != user_id:
            raise ConflictError("Email already exists")
        new_email = email.strip().lower()

    updated_user = replace(
        current_user,
        name=name.strip() if name is not None else current_user.name,
        email=new_email,
        currency=(
            normalize_currency(currency) if currency is not None else current_user.currency
        ),
    )
    try:
        return repository.update(updated_user)
    except IntegrityError as exc:
        session.rollback()
        raise conflict_from_integrity_error(exc) from exc
