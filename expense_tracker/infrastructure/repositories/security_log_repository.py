"""Persistence layer for security events."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from expense_tracker.domain.entities import SecurityEventType, SecurityLog
from expense_tracker.infrastructure.models import SecurityLogModel
from expense_tracker.utils import ensure_app_timezone


class SecurityLogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: SecurityLog) -> SecurityLog:
        model = SecurityLogModel(
            user_id=entry.user_id,
            event_type=entry.event_type.value,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            details=dict(entry.details or {}),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_recent(
        self,
        *,
        user_id: int | None = None,
        event_type: SecurityEventType | None = None,
        limit: int = 50,
    ) -> Sequence[SecurityLog]:
        query = self.session.query(SecurityLogModel)
        if user_id is not None:
            query = query.filter(SecurityLogModel.user_id == user_id)
        if event_type is not None:
            query = query.filter(SecurityLogModel.event_type == event_type.value)
        query = query.order_by(
            SecurityLogModel.created_at.desc(), SecurityLogModel.id.desc()
        ).limit(limit)
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: SecurityLogModel) -> SecurityLog:
        return SecurityLog(
            id=model.id,
            event_type=SecurityEventType(model.event_type),
            user_id=model.user_id,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            details=dict(model.details or {}),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["SecurityLogRepository"]
