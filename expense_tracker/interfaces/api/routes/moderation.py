"""Routes for reporting content and working the moderation queue."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from expense_tracker.application.context import RequestContext
from expense_tracker.application.use_cases.moderation import (
    create_report as create_report_uc,
    delete_report as delete_report_uc,
    get_moderation_stats,
    list_moderation_queue,
    list_report_actions,
    take_moderation_action,
)
from expense_tracker.domain.entities import ReportStatus, User
from expense_tracker.infrastructure.database import get_db
from expense_tracker.interfaces.api.dependencies import (
    get_current_context,
    get_request_context,
    require_any_permission,
    require_permission,
)
from expense_tracker.interfaces.api.error_handlers import to_http_exception
from expense_tracker.interfaces.api.schemas import (
    ModerationActionCreate,
    ModerationActionRead,
    ModerationActionResponse,
    ModerationStatsRead,
    PaginationRead,
    ReportCreate,
    ReportQueueResponse,
    ReportRead,
    StandaloneModerationActionCreate,
)

router = APIRouter(prefix="/api", tags=["moderation"])


@router.post(
    "/moderation/report", response_model=ReportRead, status_code=status.HTTP_201_CREATED
)
def create_report(
    payload: ReportCreate,
    db: Session = Depends(get_db),
    context: RequestContext = Depends(get_current_context),
) -> ReportRead:
    """Report another user's content."""

    try:
        report = create_report_uc(
            db,
            context,
            reported_user_id=payload.reported_user_id,
            content_type=payload.content_type,
            content_id=payload.content_id,
            reason=payload.reason,
            description=payload.description,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ReportRead.model_validate(report)


@router.get("/admin/moderation/queue", response_model=ReportQueueResponse)
def read_queue(
    report_status: ReportStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("reports:read")),
) -> ReportQueueResponse:
    result = list_moderation_queue(db, status=report_status, page=page, limit=limit)
    return ReportQueueResponse(
        reports=[ReportRead.model_validate(report) for report in result.reports],
        pagination=PaginationRead(
            page=result.page,
            limit=result.limit,
            total_count=result.total_count,
            total_pages=result.total_pages,
        ),
    )


@router.get("/admin/moderation/stats", response_model=ModerationStatsRead)
def read_stats(
    db: Session = Depends(get_db),
    _: User = Depends(require_any_permission("reports:read", "admin:dashboard")),
) -> ModerationStatsRead:
    return ModerationStatsRead.model_validate(get_moderation_stats(db))


@router.get(
    "/admin/moderation/{report_id}/actions", response_model=list[ModerationActionRead]
)
def read_report_actions(
    report_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_permission("reports:read")),
) -> list[ModerationActionRead]:
    try:
        actions = list_report_actions(db, report_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return [ModerationActionRead.model_validate(action) for action in actions]


@router.post("/admin/moderation/action", response_model=ModerationActionResponse)
def apply_standalone_action(
    payload: StandaloneModerationActionCreate,
    db: Session = Depends(get_db),
    moderator: User = Depends(require_permission("reports:write")),
    context: RequestContext = Depends(get_request_context),
) -> ModerationActionResponse:
    """Act on a user or a piece of content directly, with or without a report."""

    try:
        report, action = take_moderation_action(
            db,
            context.with_user(moderator),
            action_type=payload.action_type,
            report_id=payload.report_id,
            target_user_id=payload.target_user_id,
            content_type=payload.content_type,
            content_id=payload.content_id,
            reason=payload.reason,
            details=payload.details,
            user_feedback=payload.user_feedback,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ModerationActionResponse(
        report=ReportRead.model_validate(report) if report is not None else None,
        action=ModerationActionRead.model_validate(action),
    )


@router.post("/admin/moderation/{report_id}/action", response_model=ModerationActionResponse)
def apply_action(
    report_id: int,
    payload: ModerationActionCreate,
    db: Session = Depends(get_db),
    moderator: User = Depends(require_permission("reports:write")),
    context: RequestContext = Depends(get_request_context),
) -> ModerationActionResponse:
    """Record a moderation decision (resolve, dismiss, warn, hide, suspend, escalate)."""

    try:
        report, action = take_moderation_action(
            db,
            context.with_user(moderator),
            report_id=report_id,
            action_type=payload.action_type,
            reason=payload.reason,
            details=payload.details,
            user_feedback=payload.user_feedback,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ModerationActionResponse(
        report=ReportRead.model_validate(report),
        action=ModerationActionRead.model_validate(action),
    )


@router.delete("/admin/moderation/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    report_id: int,
    db: Session = Depends(get_db),
    moderator: User = Depends(require_permission("reports:write")),
    context: RequestContext = Depends(get_request_context),
) -> Response:
    """Hide the report from the queue without touching its status."""

    try:
        delete_report_uc(db, context.with_user(moderator), report_id=report_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
