"""Use cases replacing role assignments as a whole."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from expense_tracker.application.errors import NotFoundError, ValidationError
from expense_tracker.domain.entities import Role, RoleWithPermissions
from expense_tracker.infrastructure.repositories import RoleRepository, UserRepository


def set_user_roles(session: Session, *, user_id: int, role_ids: Sequence[int]) -> list[Role]:
    """Replace every role of the user with ``role_ids``.

    The replacement is atomic and idempotent. Unknown role ids are rejected
    before anything is written; a foreign key failure raised by the database
    is reported the same way and leaves the previous roles in place.
    """

    if UserRepository(session).get(user_id) is None:
        raise NotFoundError("User not found")

    repository = RoleRepository(session)
    wanted = list(dict.fromkeys(int(role_id) for role_id in role_ids))
    found = {role.id for role in repository.get_many(wanted)}
    missing = [role_id for role_id in wanted if role_id not in found]
    if missing:
        raise ValidationError(f"Unknown role ids: {missing}")

    try:
        repository.set_user_roles(user_id, wanted)
    except IntegrityError as exc:
        raise ValidationError("One or more roles could not be assigned") from exc
    return list(repository.get_user_roles(user_id))


def set_role_permissions(
    session: Session, *, role_id: int, permission_ids: Sequence[str]
) -> RoleWithPermissions:
    """Replace the permissions granted by a non-system role."""

    repository = RoleRepository(session)
    role = repository.get(role_id)
    if role is None:
        raise NotFoundError("Role not found")
    if role.is_system:
        raise ValidationError("System roles cannot be modified")

    wanted = list(dict.fromkeys(permission_ids))
    known = repository.get_permission_ids(wanted)
    missing = [permission_id for permission_id in wanted if permission_id not in known]
    if missing:
        raise ValidationError(f"Unknown permissions: {missing}")

    try:
        repository.set_role_permissions(role_id, wanted)
    except IntegrityError as exc:
        raise ValidationError("One or more permissions could not be granted") from exc
    return repository.get_role_with_permissions(role_id)
