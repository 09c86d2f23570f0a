"""Persistence helpers for notification entities."""

from __future__ import annotations

from sqlalchemy.orm import Session

from expense_tracker.domain.entities import NotificationType, UserNotification
from expense_tracker.infrastructure.models import UserNotificationModel
from expense_tracker.utils import ensure_app_timezone, now_in_app_timezone


class NotificationRepository:
    """Provide CRUD operations for :class:`UserNotification` objects.

    Soft-deleted notifications are invisible to every method here.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: UserNotification) -> UserNotification:
        model = UserNotificationModel(
            user_id=notification.user_id,
            title=notification.title,
            message=notification.message,
            type=notification.type.value,
            related_report_id=notification.related_report_id,
            read_at=notification.read_at,
        )
        if notification.created_at is not None:
            model.created_at = notification.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_for_user(self, notification_id: int, *, user_id: int) -> UserNotification | None:
        model = self._visible(user_id).filter(
            UserNotificationModel.id == notification_id
        ).first()
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        unread_only: bool = False,
        offset: int = 0,
        limit: int | None = 20,
    ) -> tuple[list[UserNotification], int]:
        query = self._visible(user_id)
        if unread_only:
            query = query.filter(UserNotificationModel.read_at.is_(None))
        total = query.count()
        query = query.order_by(
            UserNotificationModel.created_at.desc(), UserNotificationModel.id.desc()
        ).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def count_unread(self, user_id: int) -> int:
        return (
            self._visible(user_id)
            .filter(UserNotificationModel.read_at.is_(None))
            .count()
        )

    def mark_as_read(self, notification_id: int, *, user_id: int) -> bool:
        """Stamp ``read_at`` when still unread; return whether a row changed."""

        updated = (
            self._visible(user_id)
            .filter(UserNotificationModel.id == notification_id)
            .filter(UserNotificationModel.read_at.is_(None))
            .update(
                {UserNotificationModel.read_at: now_in_app_timezone()},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return bool(updated)

    def mark_all_as_read(self, user_id: int) -> int:
        updated = (
            self._visible(user_id)
            .filter(UserNotificationModel.read_at.is_(None))
            .update(
                {UserNotificationModel.read_at: now_in_app_timezone()},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    def soft_delete(self, notification_id: int, *, user_id: int) -> bool:
        updated = (
            self._visible(user_id)
            .filter(UserNotificationModel.id == notification_id)
            .update(
                {UserNotificationModel.deleted_at: now_in_app_timezone()},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return bool(updated)

    def _visible(self, user_id: int):
        return (
            self.session.query(UserNotificationModel)
            .filter(UserNotificationModel.user_id == user_id)
            .filter(UserNotificationModel.deleted_at.is_(None))
        )

    @staticmethod
    def _to_entity(model: UserNotificationModel) -> UserNotification:
        return UserNotification(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            message=model.message,
            type=NotificationType(model.type),
            related_report_id=model.related_report_id,
            read_at=ensure_app_timezone(model.read_at),
            created_at=ensure_app_timezone(model.created_at),
            deleted_at=ensure_app_timezone(model.deleted_at),
        )


__all__ = ["NotificationRepository"]
