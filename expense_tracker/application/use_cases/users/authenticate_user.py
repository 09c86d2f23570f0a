"""Use case for authenticating a user."""

from dataclasses import replace
from enum import Enum, auto
from functools import lru_cache

from sqlalchemy.orm import Session

from expense_tracker.domain.entities import User, UserStatus
from expense_tracker.infrastructure.repositories import UserRepository
from expense_tracker.infrastructure.security import (
    get_password_hash,
    needs_rehash,
    verify_password,
)


class AuthenticationStatus(Enum):
    """Possible outcomes when attempting to authenticate a user."""

    SUCCESS = auto()
    INVALID_CREDENTIALS = auto()
    SUSPENDED = auto()
    DELETED = auto()


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return get_password_hash("not-a-real-password")


def authenticate_user(
    session: Session, username: str, password: str
) -> tuple[User | None, AuthenticationStatus]:
    """Return the authentication result along with the user when possible.

    The account status is only consulted after the password matched, so a
    suspended or deleted account is never revealed to someone without its
    credentials.
    """

    repository = UserRepository(session)
    user = repository.get_by_username(username)

    if not user:
        # Spend the same hashing work as for an existing account.
        verify_password(password, _dummy_hash())
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if not verify_password(password, user.password):
        return None, AuthenticationStatus.INVALID_CREDENTIALS

    if user.status is UserStatus.SUSPENDED:
        return user, AuthenticationStatus.SUSPENDED

    if user.status is UserStatus.DELETED:
        return user, AuthenticationStatus.DELETED

    if needs_rehash(user.password):
        # Hash parameters changed since the password was stored.
        user = repository.update(replace(user, password=get_password_hash(password)))

    return user, AuthenticationStatus.SUCCESS
