"""Administrative routes for managing user accounts and their roles."""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from expense_tracker.application.context import RequestContext
from expense_tracker.application.use_cases.activity import log_request_activity
from expense_tracker.application.use_cases.authorization import (
    get_user_permissions,
    get_user_roles,
)
from expense_tracker.application.use_cases.roles import set_user_roles
from expense_tracker.application.use_cases.security_events import record_security_event
from expense_tracker.application.use_cases.users import (
    create_user as create_user_uc,
    delete_user as delete_user_uc,
    get_user as get_user_uc,
    list_users as list_users_uc,
    reactivate_user as reactivate_user_uc,
    reset_password as reset_password_uc,
    suspend_user as suspend_user_uc,
    update_user as update_user_uc,
)
from expense_tracker.domain.entities import (
    ActionType,
    ResourceType,
    SecurityEventType,
    User,
    UserStatus,
)
from expense_tracker.infrastructure.database import get_db
from expense_tracker.interfaces.api.dependencies import (
    get_request_context,
    require_permission,
)
from expense_tracker.interfaces.api.error_handlers import to_http_exception
from expense_tracker.interfaces.api.schemas import (
    PasswordResetRequest,
    PasswordResetResponse,
    PermissionRead,
    RoleRead,
    UserCreate,
    UserListResponse,
    UserPermissionsRead,
    UserRead,
    UserRolesUpdate,
    UserUpdate,
)

router = APIRouter(prefix="/api/admin/users", tags=["admin-users"])
logger = logging.getLogger(__name__)


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


def _audit(
    db: Session,
    context: RequestContext,
    admin: User,
    *,
    action_type: ActionType,
    target_id: int,
    description: str,
    metadata: dict | None = None,
) -> None:
    log_request_activity(
        db,
        context.with_user(admin),
        action_type=action_type,
        resource_type=ResourceType.USER,
        resource_id=target_id,
        description=description,
        metadata=metadata,
    )


@router.get("", response_model=UserListResponse)
def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    user_status: UserStatus | None = Query(None, alias="status"),
    q: str | None = Query(None, max_length=100),
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("users:read")),
) -> UserListResponse:
    """List accounts. Deleted accounts only appear when ``status=deleted``."""

    users, total = list_users_uc(db, skip=skip, limit=limit, status=user_status, search=q)
    return UserListResponse(
        users=[_to_read_model(user) for user in users], total=total, skip=skip, limit=limit
    )


@router.post("", response_model=UserRead, status_code=201)
def create_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission("users:write")),
    context: RequestContext = Depends(get_request_context),
) -> UserRead:
    try:
        user = create_user_uc(
            db,
            username=user_in.username,
            email=user_in.email,
            password=user_in.password,
            name=user_in.name,
            currency=user_in.currency,
            role_ids=user_in.role_ids,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    _audit(
        db,
        context,
        admin,
        action_type=ActionType.CREATE,
        target_id=user.id,
        description=f"Admin {admin.username} created user {user.username}",
        metadata={"role_ids": user_in.role_ids},
    )
    return _to_read_model(user)


@router.get("/{user_id}", response_model=UserRead)
def read_user(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("users:read")),
) -> UserRead:
    """Return the user whatever its status, suspended and deleted included."""

    try:
        user = get_user_uc(db, user_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(user)


@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission("users:write")),
    context: RequestContext = Depends(get_request_context),
) -> UserRead:
    update_data = user_in.model_dump(exclude_unset=True)
    try:
        user = update_user_uc(db, user_id=user_id, **update_data)
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    _audit(
        db,
        context,
        admin,
        action_type=ActionType.UPDATE,
        target_id=user.id,
        description=f"Admin {admin.username} updated user {user.username}",
        metadata={"fields": sorted(update_data)},
    )
    return _to_read_model(user)


@router.patch("/{user_id}/suspend", response_model=UserRead)
def suspend_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission("users:write")),
    context: RequestContext = Depends(get_request_context),
) -> UserRead:
    try:
        user = suspend_user_uc(db, user_id=user_id, acting_user_id=admin.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    _audit(
        db,
        context,
        admin,
        action_type=ActionType.UPDATE,
        target_id=user.id,
        description=f"Admin {admin.username} suspended user {user.username}",
        metadata={"status": user.status.value},
    )
    return _to_read_model(user)


@router.patch("/{user_id}/reactivate", response_model=UserRead)
def reactivate_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission("users:write")),
    context: RequestContext = Depends(get_request_context),
) -> UserRead:
    try:
        user = reactivate_user_uc(db, user_id=user_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    _audit(
        db,
        context,
        admin,
        action_type=ActionType.UPDATE,
        target_id=user.id,
        description=f"Admin {admin.username} reactivated user {user.username}",
        metadata={"status": user.status.value},
    )
    return _to_read_model(user)


@router.patch("/{user_id}/reset-password", response_model=PasswordResetResponse)
def reset_password(
    user_id: int,
    payload: PasswordResetRequest | None = None,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission("users:write")),
    context: RequestContext = Depends(get_request_context),
) -> PasswordResetResponse:
    """Set a new password, generating a temporary one when none is supplied."""

    new_password = payload.password if payload else None
    try:
        user, temporary_password = reset_password_uc(
            db, user_id=user_id, new_password=new_password
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    context = context.with_user(admin)
    record_security_event(
        db,
        context,
        SecurityEventType.PASSWORD_CHANGE,
        user_id=user.id,
        details={"reset_by": admin.id, "generated": temporary_password is not None},
    )
    _audit(
        db,
        context,
        admin,
        action_type=ActionType.UPDATE,
        target_id=user.id,
        description=f"Admin {admin.username} reset the password of {user.username}",
    )
    return PasswordResetResponse(
        user=_to_read_model(user), temporary_password=temporary_password
    )


@router.delete("/{user_id}", response_model=UserRead)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission("users:write")),
    context: RequestContext = Depends(get_request_context),
) -> UserRead:
    """Soft delete the account; its row is kept with ``status=deleted``."""

    try:
        user = delete_user_uc(db, user_id=user_id, acting_user_id=admin.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    _audit(
        db,
        context,
        admin,
        action_type=ActionType.DELETE,
        target_id=user.id,
        description=f"Admin {admin.username} deleted user {user.username}",
    )
    return _to_read_model(user)


@router.get("/{user_id}/roles", response_model=list[RoleRead])
def read_user_roles(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("roles:read")),
) -> list[RoleRead]:
    try:
        get_user_uc(db, user_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return [RoleRead.model_validate(role) for role in get_user_roles(db, user_id)]


@router.post("/{user_id}/roles", response_model=list[RoleRead])
def replace_user_roles(
    user_id: int,
    payload: UserRolesUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission("roles:write")),
    context: RequestContext = Depends(get_request_context),
) -> list[RoleRead]:
    """Replace the user's whole role set in one transaction."""

    try:
        roles = set_user_roles(db, user_id=user_id, role_ids=payload.role_ids)
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    context = context.with_user(admin)
    record_security_event(
        db,
        context,
        SecurityEventType.ADMIN_ACTION,
        user_id=user_id,
        details={"action": "set_user_roles", "role_ids": [role.id for role in roles]},
    )
    _audit(
        db,
        context,
        admin,
        action_type=ActionType.UPDATE,
        target_id=user_id,
        description=f"Admin {admin.username} changed the roles of user #{user_id}",
        metadata={"roles": [role.name for role in roles]},
    )
    return [RoleRead.model_validate(role) for role in roles]


@router.get("/{user_id}/permissions", response_model=UserPermissionsRead)
def read_user_permissions(
    user_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("roles:read")),
) -> UserPermissionsRead:
    try:
        get_user_uc(db, user_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return UserPermissionsRead(
        user_id=user_id,
        roles=[RoleRead.model_validate(role) for role in get_user_roles(db, user_id)],
        permissions=[
            PermissionRead.model_validate(permission)
            for permission in get_user_permissions(db, user_id)
        ],
    )
