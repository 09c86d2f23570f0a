"""Persistence layer for content reports and moderation actions."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from expense_tracker.domain.entities import (
    ContentReport,
    ContentType,
    ModerationAction,
    ModerationActionType,
    ReportPriority,
    ReportReason,
    ReportStatus,
)
from expense_tracker.infrastructure.models import (
    ContentReportModel,
    ModerationActionModel,
)
from expense_tracker.utils import ensure_app_timezone

_OPEN_STATUSES = (ReportStatus.PENDING.value, ReportStatus.REVIEWING.value)

_priority_order = case(
    {priority.value: priority.rank for priority in ReportPriority},
    value=ContentReportModel.priority,
    else_=len(ReportPriority),
)


class ContentReportRepository:
    """Provide CRUD operations for :class:`ContentReport` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, report: ContentReport) -> ContentReport:
        model = ContentReportModel()
        self._apply_entity_to_model(model, report)
        model.reporter_id = report.reporter_id
        model.reported_user_id = report.reported_user_id
        model.content_type = report.content_type.value
        model.content_id = report.content_id
        model.reason = report.reason.value
        model.description = report.description
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, report: ContentReport) -> ContentReport:
        model = self.session.get(ContentReportModel, report.id)
        if model is None:
            msg = f"Report with id {report.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, report)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, report_id: int, *, include_deleted: bool = False) -> ContentReport | None:
        query = self.session.query(ContentReportModel).filter(
            ContentReportModel.id == report_id
        )
        if not include_deleted:
            query = query.filter(ContentReportModel.deleted_at.is_(None))
        model = query.first()
        return self._to_entity(model) if model else None

    def find_open_duplicate(
        self,
        *,
        reporter_id: int,
        content_type: ContentType,
        content_id: int,
    ) -> ContentReport | None:
        model = (
            self.session.query(ContentReportModel)
            .filter(ContentReportModel.reporter_id == reporter_id)
            .filter(ContentReportModel.content_type == content_type.value)
            .filter(ContentReportModel.content_id == content_id)
            .filter(ContentReportModel.status.in_(_OPEN_STATUSES))
            .filter(ContentReportModel.deleted_at.is_(None))
            .first()
        )
        return self._to_entity(model) if model else None

    def count_against_user_since(self, reported_user_id: int, since: datetime) -> int:
        return (
            self.session.query(func.count(ContentReportModel.id))
            .filter(ContentReportModel.reported_user_id == reported_user_id)
            .filter(ContentReportModel.created_at >= since)
            .scalar()
        ) or 0

    def list_queue(
        self,
        *,
        status: ReportStatus | None = None,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[ContentReport], int]:
        """Return active reports ordered by priority, oldest first within a priority."""

        query = self.session.query(ContentReportModel).filter(
            ContentReportModel.deleted_at.is_(None)
        )
        if status is not None:
            query = query.filter(ContentReportModel.status == status.value)
        total = query.count()
        models = (
            query.order_by(
                _priority_order,
                ContentReportModel.created_at.asc(),
                ContentReportModel.id.asc(),
            )
            .offset(offset)
            .limit(limit)
            .all()
        )
        return [self._to_entity(model) for model in models], total

    def count_warnings_for_user(self, user_id: int) -> int:
        """Count warn_user actions aimed at the user, with or without a report."""

        return (
            self.session.query(func.count(ModerationActionModel.id))
            .filter(ModerationActionModel.target_user_id == user_id)
            .filter(
                ModerationActionModel.action_type
                == ModerationActionType.WARN_USER.value
            )
            .scalar()
        ) or 0

    def count_by_status(self) -> dict[ReportStatus, int]:
        rows = (
            self.session.query(ContentReportModel.status, func.count(ContentReportModel.id))
            .filter(ContentReportModel.deleted_at.is_(None))
            .group_by(ContentReportModel.status)
            .all()
        )
        counts = {status: 0 for status in ReportStatus}
        for status, total in rows:
            counts[ReportStatus(status)] = total
        return counts

    def count_created_since(self, since: datetime) -> int:
        return (
            self.session.query(func.count(ContentReportModel.id))
            .filter(ContentReportModel.created_at >= since)
            .scalar()
        ) or 0

    # ---- Moderation actions ----

    def add_action(self, action: ModerationAction) -> ModerationAction:
        model = ModerationActionModel(
            report_id=action.report_id,
            moderator_id=action.moderator_id,
            action_type=action.action_type.value,
            target_user_id=action.target_user_id,
            content_type=action.content_type.value if action.content_type else None,
            content_id=action.content_id,
            reason=action.reason,
            details=action.details,
            user_feedback=action.user_feedback,
            feedback_sent_at=action.feedback_sent_at,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._action_to_entity(model)

    def list_actions(self, report_id: int) -> Sequence[ModerationAction]:
        models = (
            self.session.query(ModerationActionModel)
            .filter(ModerationActionModel.report_id == report_id)
            .order_by(ModerationActionModel.created_at, ModerationActionModel.id)
            .all()
        )
        return [self._action_to_entity(model) for model in models]

    @staticmethod
    def _apply_entity_to_model(model: ContentReportModel, report: ContentReport) -> None:
        model.status = report.status.value
        model.priority = report.priority.value
        model.moderator_feedback = report.moderator_feedback
        model.deleted_at = report.deleted_at

    @staticmethod
    def _to_entity(model: ContentReportModel) -> ContentReport:
        return ContentReport(
            id=model.id,
            reporter_id=model.reporter_id,
            reported_user_id=model.reported_user_id,
            content_type=ContentType(model.content_type),
            content_id=model.content_id,
            reason=ReportReason(model.reason),
            description=model.description,
            status=ReportStatus(model.status),
            priority=ReportPriority(model.priority),
            moderator_feedback=model.moderator_feedback,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            deleted_at=ensure_app_timezone(model.deleted_at),
            reporter_username=model.reporter.username if model.reporter else None,
            reported_username=(
                model.reported_user.username if model.reported_user else None
            ),
        )

    @staticmethod
    def _action_to_entity(model: ModerationActionModel) -> ModerationAction:
        return ModerationAction(
            id=model.id,
            report_id=model.report_id,
            moderator_id=model.moderator_id,
            action_type=ModerationActionType(model.action_type),
            target_user_id=model.target_user_id,
            content_type=ContentType(model.content_type) if model.content_type else None,
            content_id=model.content_id,
            reason=model.reason,
            details=model.details,
            user_feedback=model.user_feedback,
            feedback_sent_at=ensure_app_timezone(model.feedback_sent_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ContentReportRepository"]
