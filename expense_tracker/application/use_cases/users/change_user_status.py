"""Use cases for suspending, reactivating and soft deleting accounts."""

from dataclasses import replace

from sqlalchemy.orm import Session

from expense_tracker.application.errors import NotFoundError, ValidationError
from expense_tracker.domain.entities import User, UserStatus
from expense_tracker.infrastructure.repositories import UserRepository


def _load(repository: UserRepository, user_id: int) -> User:
    user = repository.get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def suspend_user(session: Session, *, user_id: int, acting_user_id: int | None = None) -> User:
    """Block logins for the account; existing sessions stop working."""

    if acting_user_id is not None and acting_user_id == user_id:
        raise ValidationError("You cannot suspend your own account")
    repository = UserRepository(session)
    user = _load(repository, user_id)
    if user.is_deleted():
        raise ValidationError("Deleted users cannot be suspended")
    if user.is_suspended():
        return user
    return repository.update(replace(user, status=UserStatus.SUSPENDED))


def reactivate_user(session: Session, *, user_id: int) -> User:
    repository = UserRepository(session)
    user = _load(repository, user_id)
    if user.is_deleted():
        raise ValidationError("Deleted users cannot be reactivated")
    if user.is_active():
        return user
    return repository.update(replace(user, status=UserStatus.ACTIVE))


def delete_user(session: Session, *, user_id: int, acting_user_id: int | None = None) -> User:
    """Soft delete the account. The row, id and username are kept for auditing."""

    if acting_user_id is not None and acting_user_id == user_id:
        raise ValidationError("You cannot delete your own account")
    repository = UserRepository(session)
    user = _load(repository, user_id)
    if user.is_deleted():
        return user
    user.soft_delete()
    return repository.update(user)
