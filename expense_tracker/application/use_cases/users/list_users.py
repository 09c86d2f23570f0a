"""Use case for listing users."""

from sqlalchemy.orm import Session

from expense_tracker.domain.entities import User, UserStatus
from expense_tracker.infrastructure.repositories import UserRepository


def list_users(
    session: Session,
    *,
    skip: int = 0,
    limit: int = 100,
    status: UserStatus | None = None,
    search: str | None = None,
) -> tuple[list[User], int]:
    """Return a page of users plus the total count.

    Deleted accounts are only listed when ``status`` asks for them.
    """

    repository = UserRepository(session)
    users = list(repository.list(skip=skip, limit=limit, status=status, search=search))
    return users, repository.count(status=status, search=search)
