"""Persistence layer for activity log records.

Only inserts and reads are offered; the table itself rejects updates and deletes.
"""

from __future__ import annotations

from sqlalchemy.orm import Session, joinedload

from expense_tracker.domain.entities import (
    ActionType,
    ActivityLog,
    ActivityLogFilters,
    ResourceType,
)
from expense_tracker.infrastructure.models import ActivityLogModel
from expense_tracker.utils import ensure_app_timezone


class ActivityLogRepository:
    """Append and query :class:`ActivityLog` entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: ActivityLog) -> ActivityLog:
        model = ActivityLogModel(
            user_id=entry.user_id,
            action_type=entry.action_type.value,
            resource_type=entry.resource_type.value,
            resource_id=entry.resource_id,
            description=entry.description,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            metadata_=entry.metadata,
        )
        if entry.created_at is not None:
            model.created_at = entry.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, entry_id: int) -> ActivityLog | None:
        model = self.session.get(ActivityLogModel, entry_id)
        return self._to_entity(model) if model else None

    def list(
        self, filters: ActivityLogFilters, *, offset: int = 0, limit: int = 20
    ) -> tuple[list[ActivityLog], int]:
        """Return one page of entries, newest first, and the total match count."""

        query = self.session.query(ActivityLogModel)
        if filters.user_id is not None:
            query = query.filter(ActivityLogModel.user_id == filters.user_id)
        if filters.action_type is not None:
            query = query.filter(
                ActivityLogModel.action_type == filters.action_type.value
            )
        if filters.resource_type is not None:
            query = query.filter(
                ActivityLogModel.resource_type == filters.resource_type.value
            )
        if filters.search:
            query = query.filter(
                ActivityLogModel.description.ilike(f"%{filters.search.strip()}%")
            )
        if filters.from_date is not None:
            query = query.filter(
                ActivityLogModel.created_at >= ensure_app_timezone(filters.from_date)
            )
        if filters.to_date is not None:
            query = query.filter(
                ActivityLogModel.created_at <= ensure_app_timezone(filters.to_date)
            )

        total = query.order_by(None).count()
        models = (
            query.options(joinedload(ActivityLogModel.user))
            .order_by(ActivityLogModel.created_at.desc(), ActivityLogModel.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    @staticmethod
    def _to_entity(model: ActivityLogModel) -> ActivityLog:
        return ActivityLog(
            id=model.id,
            user_id=model.user_id,
            action_type=ActionType(model.action_type),
            resource_type=ResourceType(model.resource_type),
            resource_id=model.resource_id,
            description=model.description,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            metadata=model.metadata_,
            created_at=ensure_app_timezone(model.created_at),
            username=model.user.username if model.user is not None else None,
        )


__all__ = ["ActivityLogRepository"]
