"""Use cases for creating, editing and removing roles."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from expense_tracker.application.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
)
from expense_tracker.domain.entities import Permission, Role
from expense_tracker.infrastructure.repositories import RoleRepository


def list_roles(session: Session) -> list[Role]:
    return list(RoleRepository(session).list())


def list_permissions(session: Session) -> list[Permission]:
    return list(RoleRepository(session).list_permissions())


def create_role(
    session: Session,
    *,
    name: str,
    description: str | None = None,
    permission_ids: Sequence[str] = (),
) -> Role:
    """Create a non-system role. Names are unique ignoring case.

    Unknown ``permission_ids`` are rejected before the role is stored.
    """

    repository = RoleRepository(session)
    name = name.strip()
    if not name:
        raise ValidationError("name must not be empty")
    if repository.get_by_name(name):
        raise ConflictError("Role name already exists")
    wanted = list(dict.fromkeys(permission_ids))
    known = repository.get_permission_ids(wanted)
    missing = [permission_id for permission_id in wanted if permission_id not in known]
    if missing:
        raise ValidationError(f"Unknown permissions: {missing}")
    try:
        return repository.create(
            Role(id=None, name=name, description=description, is_system=False)
        )
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError("Role name already exists") from exc


def _editable_role(repository: RoleRepository, role_id: int) -> Role:
    role = repository.get(role_id)
    if role is None:
        raise NotFoundError("Role not found")
    if role.is_system:
        raise ValidationError("System roles cannot be modified")
    return role


def update_role(
    session: Session,
    *,
    role_id: int,
    name: str | None = None,
    description: str | None = None,
) -> Role:
    repository = RoleRepository(session)
    role = _editable_role(repository, role_id)

    new_name = role.name
    if name is not None and name.strip() != role.name:
        new_name = name.strip()
        if not new_name:
            raise ValidationError("name must not be empty")
        existing = repository.get_by_name(new_name)
        if existing and existing.id != role_id:
            raise ConflictError("Role name already exists")

    try:
        return repository.update(
            replace(
                role,
                name=new_name,
                description=description if description is not None else role.description,
            )
        )
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError("Role name already exists") from exc


def delete_role(session: Session, *, role_id: int) -> None:
    """Remove a role that is neither a system role nor assigned to anyone."""

    repository = RoleRepository(session)
    _editable_role(repository, role_id)
    if repository.count_users(role_id):
        raise ValidationError("Cannot delete a role that is assigned to users")
    repository.delete(role_id)
