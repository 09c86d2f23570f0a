"""Routes for browsing the activity log.

Entries can be added and read; every attempt to delete them is refused.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from expense_tracker.application.context import RequestContext
from expense_tracker.application.use_cases.activity import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    list_activity_logs as list_activity_logs_uc,
    record_client_activity,
)
from expense_tracker.domain.entities import ActionType, ActivityLogFilters, ResourceType
from expense_tracker.infrastructure.database import get_db
from expense_tracker.interfaces.api.dependencies import get_current_context
from expense_tracker.interfaces.api.error_handlers import to_http_exception
from expense_tracker.interfaces.api.schemas import (
    ActivityLogCreate,
    ActivityLogListResponse,
    ActivityLogRead,
    PaginationRead,
)

router = APIRouter(prefix="/api/activity-logs", tags=["activity-logs"])

IMMUTABLE_DETAIL = (
    "Activity logs cannot be deleted. They are maintained for security and audit purposes."
)


@router.get("", response_model=ActivityLogListResponse)
def list_activity_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    action_type: ActionType | None = Query(None),
    resource_type: ResourceType | None = Query(None),
    search: str | None = Query(None, max_length=200),
    from_date: datetime | None = Query(None),
    to_date: datetime | None = Query(None),
    user_id: int | None = Query(None, description="Only honoured for admin:read holders"),
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_current_context),
) -> ActivityLogListResponse:
    """Return the caller's own activity, or everyone's for administrators."""

    filters = ActivityLogFilters(
        user_id=user_id,
        action_type=action_type,
        resource_type=resource_type,
        search=search,
        from_date=from_date,
        to_date=to_date,
    )
    try:
        result = list_activity_logs_uc(
            db, current_user=context.user, page=page, limit=limit, filters=filters
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc

    return ActivityLogListResponse(
        logs=[ActivityLogRead.model_validate(entry) for entry in result.logs],
        pagination=PaginationRead(
            page=result.page,
            limit=result.limit,
            total_count=result.total_count,
            total_pages=result.total_pages,
        ),
        is_admin=result.is_admin,
        current_user_id=result.current_user_id,
    )


@router.post("", response_model=ActivityLogRead, status_code=status.HTTP_201_CREATED)
def create_activity_log(
    payload: ActivityLogCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_current_context),
) -> ActivityLogRead:
    """Record an action the client performed, attributed to the caller."""

    try:
        entry = record_client_activity(
            db,
            context,
            action_type=payload.action_type,
            resource_type=payload.resource_type,
            resource_id=payload.resource_id,
            description=payload.description,
            metadata=payload.metadata,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ActivityLogRead.model_validate(entry)


def _refuse_deletion() -> None:
    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail={
            "detail": IMMUTABLE_DETAIL,
            "message": IMMUTABLE_DETAIL,
            "reason": "IMMUTABLE_AUDIT_LOG",
        },
    )


@router.delete("")
def delete_activity_logs(_: RequestContext = Depends(get_current_context)) -> None:
    _refuse_deletion()


@router.delete("/{entry_id}")
def delete_activity_log(
    entry_id: int, _: RequestContext = Depends(get_current_context)
) -> None:
    _refuse_deletion()
