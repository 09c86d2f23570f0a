"""Use case for retrieving a single user."""

from sqlalchemy.orm import Session

from expense_tracker.application.errors import NotFoundError
from expense_tracker.domain.entities import User
from expense_tracker.infrastructure.repositories import UserRepository


def get_user(session: Session, user_id: int) -> User:
    """Return the user identified by ``user_id`` whatever its status."""

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user
