"""Routes exposing system settings."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from expense_tracker.application.context import RequestContext
from expense_tracker.application.use_cases.activity import log_request_activity
from expense_tracker.application.use_cases.settings import (
    list_settings,
    update_settings as update_settings_uc,
)
from expense_tracker.domain.entities import ActionType, ResourceType, User
from expense_tracker.infrastructure.database import get_db
from expense_tracker.interfaces.api.dependencies import (
    get_request_context,
    require_permission,
)
from expense_tracker.interfaces.api.error_handlers import to_http_exception
from expense_tracker.interfaces.api.schemas import SettingRead, SettingsUpdate

router = APIRouter(prefix="/api", tags=["settings"])


@router.get("/settings/public", response_model=list[SettingRead])
def read_public_settings(db: Session = Depends(get_db)) -> list[SettingRead]:
    return [SettingRead.from_entity(s) for s in list_settings(db, public_only=True)]


@router.get("/admin/settings", response_model=list[SettingRead])
def read_settings(
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("settings:read")),
) -> list[SettingRead]:
    return [SettingRead.from_entity(s) for s in list_settings(db)]


@router.put("/admin/settings", response_model=list[SettingRead])
def update_settings(
    payload: SettingsUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(require_permission("settings:write")),
    context: RequestContext = Depends(get_request_context),
) -> list[SettingRead]:
    """Change several settings at once; values are checked against each setting's type."""

    try:
        updated = update_settings_uc(db, payload.values)
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    log_request_activity(
        db,
        context.with_user(admin),
        action_type=ActionType.UPDATE,
        resource_type=ResourceType.SETTINGS,
        description=f"Admin {admin.username} updated system settings",
        metadata={"keys": sorted(payload.values)},
    )
    return [SettingRead.from_entity(s) for s in updated]
