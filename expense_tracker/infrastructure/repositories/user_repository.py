"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from expense_tracker.domain.entities import User, UserStatus
from expense_tracker.infrastructure.models import UserModel
from expense_tracker.utils import ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities.

    Rows are never removed; deleted accounts stay readable with
    ``status == "deleted"``.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        skip: int = 0,
        limit: int = 100,
        *,
        status: UserStatus | None = None,
        search: str | None = None,
    ) -> Sequence[User]:
        query = self._filtered_query(status=status, search=search)
        query = query.order_by(UserModel.id).offset(skip).limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count(
        self, *, status: UserStatus | None = None, search: str | None = None
    ) -> int:
        return self._filtered_query(status=status, search=search).count()

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.username) == username.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _filtered_query(
        self, *, status: UserStatus | None, search: str | None
    ):
        query = self.session.query(UserModel)
        if status is not None:
            query = query.filter(UserModel.status == status.value)
        else:
            query = query.filter(UserModel.status != UserStatus.DELETED.value)
        if search:
            pattern = f"%{search.strip().lower()}%"
            query = query.filter(
                or_(
                    func.lower(UserModel.username).like(pattern),
                    func.lower(UserModel.email).like(pattern),
                    func.lower(UserModel.name).like(pattern),
                )
            )
        return query

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password=model.password,
            name=model.name,
            currency=model.currency,
            status=UserStatus(model.status),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            deleted_at=ensure_app_timezone(model.deleted_at),
        )

    @staticmethod
    def _apply_entity_to_model(
        model: UserModel, user: User, *, include_creation_fields: bool
    ) -> None:
        if include_creation_fields:
            model.username = user.username
            if user.created_at is not None:
                model.created_at = user.created_at
        model.email = user.email
        model.password = user.password
        model.name = user.name
        model.currency = user.currency
        model.status = user.status.value
        model.deleted_at = user.deleted_at


__all__ = ["UserRepository"]
