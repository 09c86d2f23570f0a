"""Permission resolution and atomic role replacement."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from conftest import make_user
from expense_tracker.application.errors import NotFoundError, ValidationError
from expense_tracker.application.use_cases.authorization import (
    get_user_permissions,
    get_user_roles,
    has_any_permission,
    has_permission,
)
from expense_tracker.application.use_cases.roles import set_user_roles
from expense_tracker.infrastructure.repositories import RoleRepository


def test_user_without_roles_has_no_permissions(session) -> None:
    user = make_user(session, "norole", roles=())

    assert get_user_roles(session, user.id) == []
    assert get_user_permissions(session, user.id) == []
    assert not has_permission(session, user.id, "expenses:read")
    assert not has_any_permission(session, user.id, ["expenses:read", "admin:read"])


def test_default_role_grants_personal_permissions_only(session) -> None:
    user = make_user(session, "regular")

    assert [role.name for role in get_user_roles(session, user.id)] == ["user"]
    assert has_permission(session, user.id, "expenses:write")
    assert not has_permission(session, user.id, "users:read")


def test_permissions_are_the_union_of_all_roles(session) -> None:
    user = make_user(session, "mixed", roles=("user", "moderator"))

    permission_ids = [permission.id for permission in get_user_permissions(session, user.id)]
    assert len(permission_ids) == len(set(permission_ids))
    assert "reports:write" in permission_ids
    assert "budgets:read" in permission_ids
    assert "settings:write" not in permission_ids


def test_unknown_permission_is_denied(session) -> None:
    admin = make_user(session, "boss", roles=("admin",))

    assert has_permission(session, admin.id, "users:write")
    assert not has_permission(session, admin.id, "does:not-exist")
    assert not has_permission(session, None, "users:write")
    assert not has_permission(session, admin.id, "")


def test_set_user_roles_replaces_the_whole_set(session) -> None:
    user = make_user(session, "switcher")
    moderator = RoleRepository(session).get_by_name("moderator")

    roles = set_user_roles(session, user_id=user.id, role_ids=[moderator.id])

    assert [role.name for role in roles] == ["moderator"]
    assert [role.name for role in get_user_roles(session, user.id)] == ["moderator"]


def test_set_user_roles_is_idempotent(session) -> None:
    user = make_user(session, "repeat")
    repository = RoleRepository(session)
    role_ids = [repository.get_by_name("user").id, repository.get_by_name("moderator").id]

    first = set_user_roles(session, user_id=user.id, role_ids=role_ids)
    second = set_user_roles(session, user_id=user.id, role_ids=role_ids + role_ids[:1])

    assert [role.id for role in first] == [role.id for role in second]


def test_set_user_roles_rejects_unknown_roles_without_changes(session) -> None:
    user = make_user(session, "keeper")
    user_role = RoleRepository(session).get_by_name("user")

    with pytest.raises(ValidationError):
        set_user_roles(session, user_id=user.id, role_ids=[user_role.id, 9999])

    assert [role.name for role in get_user_roles(session, user.id)] == ["user"]


def test_set_user_roles_requires_existing_user(session) -> None:
    with pytest.raises(NotFoundError):
        set_user_roles(session, user_id=4242, role_ids=[])


def test_repository_rolls_back_when_insert_fails(session) -> None:
    user = make_user(session, "atomic")
    repository = RoleRepository(session)
    moderator = repository.get_by_name("moderator")

    with pytest.raises(IntegrityError):
        repository.set_user_roles(user.id, [moderator.id, 9999])

    assert [role.name for role in repository.get_user_roles(user.id)] == ["user"]


def test_clearing_roles_removes_every_permission(session) -> None:
    user = make_user(session, "emptied")

    set_user_roles(session, user_id=user.id, role_ids=[])

    assert get_user_permissions(session, user.id) == []
