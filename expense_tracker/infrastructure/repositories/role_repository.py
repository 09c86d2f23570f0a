"""Persistence layer for roles, permissions and role assignments."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import delete, exists, func, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from expense_tracker.domain.entities import Permission, Role, RoleWithPermissions
from expense_tracker.infrastructure.models import (
    PermissionModel,
    RoleModel,
    role_permissions_table,
    user_roles_table,
)
from expense_tracker.utils import ensure_app_timezone, now_in_app_timezone


class RoleRepository:
    """Provide CRUD operations for roles and resolve user permissions.

    Every lookup goes to the database; nothing is cached between calls.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    # ---- Roles ----

    def list(self) -> Sequence[Role]:
        models = self.session.query(RoleModel).order_by(RoleModel.name).all()
        return [self._to_entity(model) for model in models]

    def get(self, role_id: int) -> Role | None:
        model = self.session.get(RoleModel, role_id)
        return self._to_entity(model) if model else None

    def get_by_name(self, name: str) -> Role | None:
        model = (
            self.session.query(RoleModel)
            .filter(func.lower(RoleModel.name) == name.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def get_many(self, role_ids: Iterable[int]) -> Sequence[Role]:
        ids = {int(role_id) for role_id in role_ids}
        if not ids:
            return []
        models = (
            self.session.query(RoleModel)
            .filter(RoleModel.id.in_(ids))
            .order_by(RoleModel.name)
            .all()
        )
        return [self._to_entity(model) for model in models]

    def create(self, role: Role) -> Role:
        model = RoleModel(
            name=role.name,
            description=role.description,
            is_system=role.is_system,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, role: Role) -> Role:
        model = self.session.get(RoleModel, role.id)
        if model is None:
            msg = f"Role with id {role.id} not found"
            raise ValueError(msg)
        model.name = role.name
        model.description = role.description
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, role_id: int) -> bool:
        model = self.session.get(RoleModel, role_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def count_users(self, role_id: int) -> int:
        return self.session.scalar(
            select(func.count())
            .select_from(user_roles_table)
            .where(user_roles_table.c.role_id == role_id)
        ) or 0

    # ---- Permissions ----

    def list_permissions(self) -> Sequence[Permission]:
        models = (
            self.session.query(PermissionModel)
            .order_by(PermissionModel.scope, PermissionModel.id)
            .all()
        )
        return [self._permission_to_entity(model) for model in models]

    def get_permission_ids(self, permission_ids: Iterable[str]) -> set[str]:
        """Return which of ``permission_ids`` exist."""

        ids = set(permission_ids)
        if not ids:
            return set()
        return set(
            self.session.scalars(
                select(PermissionModel.id).where(PermissionModel.id.in_(ids))
            )
        )

    def get_role_with_permissions(self, role_id: int) -> RoleWithPermissions | None:
        model = self.session.get(RoleModel, role_id)
        if model is None:
            return None
        return RoleWithPermissions(
            role=self._to_entity(model),
            permissions=[self._permission_to_entity(p) for p in model.permissions],
        )

    # ---- Resolution ----

    def get_user_roles(self, user_id: int) -> Sequence[Role]:
        models = (
            self.session.query(RoleModel)
            .join(user_roles_table, user_roles_table.c.role_id == RoleModel.id)
            .filter(user_roles_table.c.user_id == user_id)
            .order_by(RoleModel.name)
            .all()
        )
        return [self._to_entity(model) for model in models]

    def get_user_permissions(self, user_id: int) -> Sequence[Permission]:
        """Return the union of permissions across every role held by the user."""

        models = (
            self.session.query(PermissionModel)
            .join(
                role_permissions_table,
                role_permissions_table.c.permission_id == PermissionModel.id,
            )
            .join(
                user_roles_table,
                user_roles_table.c.role_id == role_permissions_table.c.role_id,
            )
            .filter(user_roles_table.c.user_id == user_id)
            .distinct()
            .order_by(PermissionModel.scope, PermissionModel.id)
            .all()
        )
        return [self._permission_to_entity(model) for model in models]

    def has_permission(self, user_id: int, permission_id: str) -> bool:
        """Return ``True`` when any of the user's roles grants ``permission_id``."""

        return self.has_any_permission(user_id, [permission_id])

    def has_any_permission(self, user_id: int, permission_ids: Iterable[str]) -> bool:
        ids = list(dict.fromkeys(permission_ids))
        if not ids:
            return False
        grant = (
            select(role_permissions_table.c.permission_id)
            .join(
                user_roles_table,
                user_roles_table.c.role_id == role_permissions_table.c.role_id,
            )
            .where(user_roles_table.c.user_id == user_id)
            .where(role_permissions_table.c.permission_id.in_(ids))
        )
        return bool(self.session.scalar(select(exists(grant))))

    # ---- Assignment ----

    def set_user_roles(self, user_id: int, role_ids: Iterable[int]) -> None:
        """Replace the user's roles with ``role_ids`` in a single transaction.

        The delete and the insert are committed together; on any error the
        transaction is rolled back and the previous assignment stays in place.
        """

        ids = list(dict.fromkeys(int(role_id) for role_id in role_ids))
        assigned_at = now_in_app_timezone()
        try:
            self.session.execute(
                delete(user_roles_table).where(user_roles_table.c.user_id == user_id)
            )
            if ids:
                self.session.execute(
                    insert(user_roles_table),
                    [
                        {"user_id": user_id, "role_id": role_id, "assigned_at": assigned_at}
                        for role_id in ids
                    ],
                )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    def set_role_permissions(self, role_id: int, permission_ids: Iterable[str]) -> None:
        """Replace the permissions linked to a role in a single transaction."""

        ids = list(dict.fromkeys(permission_ids))
        try:
            self.session.execute(
                delete(role_permissions_table).where(
                    role_permissions_table.c.role_id == role_id
                )
            )
            if ids:
                self.session.execute(
                    insert(role_permissions_table),
                    [{"role_id": role_id, "permission_id": pid} for pid in ids],
                )
            self.session.query(RoleModel).filter(RoleModel.id == role_id).update(
                {RoleModel.updated_at: now_in_app_timezone()},
                synchronize_session=False,
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

    @staticmethod
    def _to_entity(model: RoleModel) -> Role:
        return Role(
            id=model.id,
            name=model.name,
            description=model.description,
            is_system=bool(model.is_system),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )

    @staticmethod
    def _permission_to_entity(model: PermissionModel) -> Permission:
        return Permission(
            id=model.id,
            name=model.name,
            description=model.description,
            scope=model.scope,
        )


__all__ = ["RoleRepository"]
