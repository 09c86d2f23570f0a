"""Administrative routes for roles and the permission catalogue."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from expense_tracker.application.context import RequestContext
from expense_tracker.application.use_cases.activity import log_request_activity
from expense_tracker.application.use_cases.authorization import get_role_with_permissions
from expense_tracker.application.use_cases.roles import (
    create_role as create_role_uc,
    delete_role as delete_role_uc,
    list_permissions as list_permissions_uc,
    list_roles as list_roles_uc,
    set_role_permissions,
    update_role as update_role_uc,
)
from expense_tracker.domain.entities import (
    ActionType,
    ResourceType,
    RoleWithPermissions,
    User,
)
from expense_tracker.infrastructure.database import get_db
from expense_tracker.interfaces.api.dependencies import (
    get_request_context,
    require_permission,
)
from expense_tracker.interfaces.api.error_handlers import to_http_exception
from expense_tracker.interfaces.api.schemas import (
    PermissionRead,
    RoleCreate,
    RoleDetailRead,
    RolePermissionsUpdate,
    RoleRead,
    RoleUpdate,
)

router = APIRouter(prefix="/api/admin", tags=["admin-roles"])


def _to_detail(role: RoleWithPermissions) -> RoleDetailRead:
    return RoleDetailRead(
        **RoleRead.model_validate(role.role).model_dump(),
        permissions=[PermissionRead.model_validate(p) for p in role.permissions],
    )


def _log_role_change(
    db: Session,
    context: RequestContext,
    admin: User,
    *,
    action_type: ActionType,
    role_id: int,
    description: str,
    metadata: dict | None = None,
) -> None:
    log_request_activity(
        db,
        context.with_user(admin),
        action_type=action_type,
        resource_type=ResourceType.ROLE,
        resource_id=role_id,
        description=description,
        metadata=metadata,
    )


@router.get("/permissions", response_model=list[PermissionRead])
def list_permissions(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("roles:read")),
) -> list[PermissionRead]:
    return [PermissionRead.model_validate(p) for p in list_permissions_uc(db)]


@router.get("/roles", response_model=list[RoleDetailRead])
def list_roles(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("roles:read")),
) -> list[RoleDetailRead]:
    return [
        _to_detail(get_role_with_permissions(db, role.id)) for role in list_roles_uc(db)
    ]


@router.post("/roles", response_model=RoleDetailRead, status_code=status.HTTP_201_CREATED)
def create_role(
    payload: RoleCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission("roles:write")),
    context: RequestContext = Depends(get_request_context),
) -> RoleDetailRead:
    try:
        role = create_role_uc(
            db,
            name=payload.name,
            description=payload.description,
            permission_ids=payload.permission_ids,
        )
        if payload.permission_ids:
            detail = set_role_permissions(
                db, role_id=role.id, permission_ids=payload.permission_ids
            )
        else:
            detail = get_role_with_permissions(db, role.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    _log_role_change(
        db,
        context,
        admin,
        action_type=ActionType.CREATE,
        role_id=role.id,
        description=f"Admin {admin.username} created role {role.name}",
        metadata={"permissions": detail.permission_ids},
    )
    return _to_detail(detail)


@router.get("/roles/{role_id}", response_model=RoleDetailRead)
def read_role(
    role_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("roles:read")),
) -> RoleDetailRead:
    try:
        return _to_detail(get_role_with_permissions(db, role_id))
    except ValueError as exc:
        raise to_http_exception(exc) from exc


@router.put("/roles/{role_id}", response_model=RoleDetailRead)
def update_role(
    role_id: int,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission("roles:write")),
    context: RequestContext = Depends(get_request_context),
) -> RoleDetailRead:
    try:
        role = update_role_uc(
            db, role_id=role_id, name=payload.name, description=payload.description
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    _log_role_change(
        db,
        context,
        admin,
        action_type=ActionType.UPDATE,
        role_id=role.id,
        description=f"Admin {admin.username} updated role {role.name}",
    )
    return _to_detail(get_role_with_permissions(db, role.id))


@router.put("/roles/{role_id}/permissions", response_model=RoleDetailRead)
def replace_role_permissions(
    role_id: int,
    payload: RolePermissionsUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission("roles:write")),
    context: RequestContext = Depends(get_request_context),
) -> RoleDetailRead:
    try:
        detail = set_role_permissions(
            db, role_id=role_id, permission_ids=payload.permission_ids
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    _log_role_change(
        db,
        context,
        admin,
        action_type=ActionType.UPDATE,
        role_id=role_id,
        description=f"Admin {admin.username} changed permissions of role {detail.role.name}",
        metadata={"permissions": detail.permission_ids},
    )
    return _to_detail(detail)


@router.delete("/roles/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_role(
    role_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission("roles:write")),
    context: RequestContext = Depends(get_request_context),
) -> Response:
    try:
        delete_role_uc(db, role_id=role_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    _log_role_change(
        db,
        context,
        admin,
        action_type=ActionType.DELETE,
        role_id=role_id,
        description=f"Admin {admin.username} deleted role #{role_id}",
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
