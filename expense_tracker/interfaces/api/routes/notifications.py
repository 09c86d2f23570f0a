"""Endpoints for the authenticated user's notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from expense_tracker.application.use_cases.notifications import (
    delete_notification as delete_notification_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notification_read,
)
from expense_tracker.domain.entities import User
from expense_tracker.infrastructure.database import get_db
from expense_tracker.interfaces.api.dependencies import get_current_user
from expense_tracker.interfaces.api.error_handlers import to_http_exception
from expense_tracker.interfaces.api.schemas import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationRead,
    PaginationRead,
)

router = APIRouter(prefix="/api/user/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    unread_only: bool = Query(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationListResponse:
    """Return the user's notifications together with the unread count."""

    result = list_notifications_uc(
        db, user_id=current_user.id, page=page, limit=limit, unread_only=unread_only
    )
    return NotificationListResponse(
        notifications=[NotificationRead.model_validate(n) for n in result.notifications],
        unread_count=result.unread_count,
        pagination=PaginationRead(
            page=result.page,
            limit=result.limit,
            total_count=result.total_count,
            total_pages=result.total_pages,
        ),
    )


@router.post("/read-all", response_model=MarkAllReadResponse)
def read_all_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MarkAllReadResponse:
    updated = mark_all_notifications_read(db, user_id=current_user.id)
    return MarkAllReadResponse(message="All notifications marked as read", updated=updated)


@router.post("/{notification_id}/read", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    """Mark one notification as read. Repeating the call changes nothing."""

    try:
        notification = mark_notification_read(
            db, user_id=current_user.id, notification_id=notification_id
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return NotificationRead.model_validate(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    try:
        delete_notification_uc(db, user_id=current_user.id, notification_id=notification_id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
