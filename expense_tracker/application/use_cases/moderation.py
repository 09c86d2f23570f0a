"""Use cases for reporting content and moderating the resulting reports."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timedelta
import logging

from sqlalchemy.orm import Session

from expense_tracker.application.context import RequestContext
from expense_tracker.application.errors import ConflictError, NotFoundError, ValidationError
from expense_tracker.application.use_cases.activity import log_request_activity
from expense_tracker.application.use_cases.notifications import (
    notify_report_resolution,
    notify_user_suspended,
    notify_user_warned,
)
from expense_tracker.application.use_cases.users import suspend_user
from expense_tracker.domain.entities import (
    ActionType,
    ContentReport,
    ContentType,
    ModerationAction,
    ModerationActionType,
    ModerationStats,
    ReportPriority,
    ReportReason,
    ReportStatus,
    ResourceType,
    UserStatus,
)
from expense_tracker.infrastructure.repositories import (
    ContentReportRepository,
    UserRepository,
)
from expense_tracker.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

ESCALATION_WINDOW = timedelta(days=30)
ESCALATION_THRESHOLD = 3
MAX_PAGE_SIZE = 100

_REPORT_ONLY_ACTIONS = frozenset(
    {
        ModerationActionType.RESOLVE,
        ModerationActionType.DISMISS,
        ModerationActionType.ESCALATE,
    }
)
_USER_ACTIONS = frozenset(
    {ModerationActionType.WARN_USER, ModerationActionType.SUSPEND_USER}
)

_PRIORITY_STEPS = [
    ReportPriority.LOW,
    ReportPriority.MEDIUM,
    ReportPriority.HIGH,
    ReportPriority.URGENT,
]


@dataclass
class ReportPage:
    reports: list[ContentReport]
    page: int
    limit: int
    total_count: int

    @property
    def total_pages(self) -> int:
        return (self.total_count + self.limit - 1) // self.limit if self.limit else 0


def _bump(priority: ReportPriority) -> ReportPriority:
    index = _PRIORITY_STEPS.index(priority)
    return _PRIORITY_STEPS[min(index + 1, len(_PRIORITY_STEPS) - 1)]


def _initial_priority(repository: ContentReportRepository, reported_user_id: int) -> ReportPriority:
    """Escalate reports against users who are reported often or already warned."""

    since = now_in_app_timezone() - ESCALATION_WINDOW
    recent = repository.count_against_user_since(reported_user_id, since) + 1
    priority = ReportPriority.HIGH if recent >= ESCALATION_THRESHOLD else ReportPriority.MEDIUM
    if repository.count_warnings_for_user(reported_user_id):
        priority = _bump(priority)
    return priority


def create_report(
    session: Session,
    context: RequestContext,
    *,
    reported_user_id: int,
    content_type: ContentType,
    content_id: int,
    reason: ReportReason,
    description: str | None = None,
) -> ContentReport:
    """File a report from the current user about someone else's content."""

    reporter_id = context.user_id
    if reporter_id is None:
        raise ValidationError("An authenticated user is required")
    if reported_user_id == reporter_id:
        raise ValidationError("Cannot report your own content")

    reported_user = UserRepository(session).get(reported_user_id)
    if reported_user is None or reported_user.status is UserStatus.DELETED:
        raise NotFoundError("Reported user not found")

    repository = ContentReportRepository(session)
    if repository.find_open_duplicate(
        reporter_id=reporter_id, content_type=content_type, content_id=content_id
    ):
        raise ConflictError("You have already reported this content")

    report = repository.create(
        ContentReport(
            id=None,
            reporter_id=reporter_id,
            reported_user_id=reported_user_id,
            content_type=content_type,
            content_id=content_id,
            reason=reason,
            description=(description or "").strip() or None,
            priority=_initial_priority(repository, reported_user_id),
        )
    )
    log_request_activity(
        session,
        context,
        action_type=ActionType.CREATE,
        resource_type=ResourceType.REPORT,
        resource_id=report.id,
        description=f"Reported {content_type.value} #{content_id} for {reason.value}",
        metadata={"reported_user_id": reported_user_id, "priority": report.priority.value},
    )
    return report


def list_moderation_queue(
    session: Session,
    *,
    status: ReportStatus | None = None,
    page: int = 1,
    limit: int = 20,
) -> ReportPage:
    """Return reports that are not soft deleted, most urgent first."""

    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    reports, total = ContentReportRepository(session).list_queue(
        status=status, offset=(page - 1) * limit, limit=limit
    )
    return ReportPage(reports=reports, page=page, limit=limit, total_count=total)


def get_report(session: Session, report_id: int) -> ContentReport:
    report = ContentReportRepository(session).get(report_id)
    if report is None:
        raise NotFoundError("Report not found")
    return report


def list_report_actions(session: Session, report_id: int) -> list[ModerationAction]:
    get_report(session, report_id)
    return list(ContentReportRepository(session).list_actions(report_id))


def get_moderation_stats(session: Session) -> ModerationStats:
    repository = ContentReportRepository(session)
    counts = repository.count_by_status()
    now = now_in_app_timezone()
    return ModerationStats(
        pending=counts[ReportStatus.PENDING],
        reviewing=counts[ReportStatus.REVIEWING],
        resolved=counts[ReportStatus.RESOLVED],
        dismissed=counts[ReportStatus.DISMISSED],
        reports_last_24h=repository.count_created_since(now - timedelta(hours=24)),
        reports_last_7d=repository.count_created_since(now - timedelta(days=7)),
        suspended_users=UserRepository(session).count(status=UserStatus.SUSPENDED),
    )


def _closing_status(action_type: ModerationActionType) -> ReportStatus:
    if action_type is ModerationActionType.ESCALATE:
        return ReportStatus.REVIEWING
    if action_type is ModerationActionType.DISMISS:
        return ReportStatus.DISMISSED
    return ReportStatus.RESOLVED


def take_moderation_action(
    session: Session,
    context: RequestContext,
    *,
    action_type: ModerationActionType,
    report_id: int | None = None,
    target_user_id: int | None = None,
    content_type: ContentType | None = None,
    content_id: int | None = None,
    reason: str | None = None,
    details: str | None = None,
    user_feedback: str | None = None,
) -> tuple[ContentReport | None, ModerationAction]:
    """Apply a moderator decision and record it.

    With ``report_id`` the report must still be open: ``resolve`` closes and
    hides it and notifies the people involved, ``escalate`` keeps it open with
    urgent priority, ``dismiss`` dismisses it and every other action resolves
    it. The target user and content default to those of the report.

    Without a report only user and content actions are accepted, aimed at
    ``target_user_id`` or at ``content_type``/``content_id``.
    """

    moderator_id = context.user_id
    if moderator_id is None:
        raise ValidationError("An authenticated user is required")

    repository = ContentReportRepository(session)
    report = None
    if report_id is not None:
        report = repository.get(report_id)
        if report is None:
            raise NotFoundError("Report not found")
        if not report.status.is_open:
            raise ValidationError(f"Report is already {report.status.value}")
        target_user_id = report.reported_user_id
        content_type = report.content_type
        content_id = report.content_id
    elif action_type in _REPORT_ONLY_ACTIONS:
        raise ValidationError(f"{action_type.value} requires a report")
    elif action_type in _USER_ACTIONS:
        if target_user_id is None:
            raise ValidationError(f"{action_type.value} requires target_user_id")
    elif content_type is None or content_id is None:
        raise ValidationError(f"{action_type.value} requires content_type and content_id")

    if target_user_id is not None and report is None:
        if UserRepository(session).get(target_user_id) is None:
            raise NotFoundError("Target user not found")

    feedback = (user_feedback or "").strip() or None
    feedback_sent_at = None

    if action_type is ModerationActionType.SUSPEND_USER:
        suspend_user(session, user_id=target_user_id, acting_user_id=moderator_id)

    if report is not None:
        updated = replace(report, status=_closing_status(action_type))
        if action_type is ModerationActionType.ESCALATE:
            updated.priority = ReportPriority.URGENT
        else:
            updated.moderator_feedback = feedback
        if action_type is ModerationActionType.RESOLVE:
            updated.soft_delete()
        report = repository.update(updated)

    if action_type is ModerationActionType.RESOLVE:
        if notify_report_resolution(session, report, feedback):
            feedback_sent_at = now_in_app_timezone()
    elif action_type is ModerationActionType.WARN_USER:
        if notify_user_warned(
            session,
            user_id=target_user_id,
            reason=reason,
            content_type=content_type,
            related_report_id=report_id,
            feedback=feedback,
        ):
            feedback_sent_at = now_in_app_timezone()
    elif action_type is ModerationActionType.SUSPEND_USER:
        if notify_user_suspended(
            session,
            user_id=target_user_id,
            reason=reason,
            related_report_id=report_id,
            feedback=feedback,
        ):
            feedback_sent_at = now_in_app_timezone()

    action = repository.add_action(
        ModerationAction(
            id=None,
            report_id=report_id,
            moderator_id=moderator_id,
            action_type=action_type,
            target_user_id=target_user_id,
            content_type=content_type,
            content_id=content_id,
            reason=reason,
            details=details,
            user_feedback=feedback,
            feedback_sent_at=feedback_sent_at,
        )
    )
    subject = f"report #{report_id}" if report_id is not None else _describe_target(action)
    logger.info("Moderator %s applied %s to %s", moderator_id, action_type.value, subject)

    metadata = {"action": action_type.value, "target_user_id": target_user_id}
    if report is not None:
        metadata["status"] = report.status.value
    resource_type, resource_id = _activity_resource(action)
    log_request_activity(
        session,
        context,
        action_type=ActionType.UPDATE,
        resource_type=resource_type,
        resource_id=resource_id,
        description=f"Moderation action {action_type.value} on {subject}",
        metadata=metadata,
    )
    return report, action


def _describe_target(action: ModerationAction) -> str:
    if action.content_type is not None and action.content_id is not None:
        return f"{action.content_type.value} #{action.content_id}"
    return f"user #{action.target_user_id}"


def _activity_resource(action: ModerationAction) -> tuple[ResourceType, int | None]:
    if action.report_id is not None:
        return ResourceType.REPORT, action.report_id
    if action.target_user_id is not None:
        return ResourceType.USER, action.target_user_id
    try:
        return ResourceType(action.content_type.value.upper()), action.content_id
    except ValueError:
        # Announcements and profiles have no resource of their own.
        return ResourceType.USER, None


def delete_report(session: Session, context: RequestContext, *, report_id: int) -> None:
    """Hide a report from the queue. Its status is left as it was."""

    repository = ContentReportRepository(session)
    report = repository.get(report_id)
    if report is None:
        raise NotFoundError("Report not found")
    report.soft_delete()
    repository.update(report)
    log_request_activity(
        session,
        context,
        action_type=ActionType.DELETE,
        resource_type=ResourceType.REPORT,
        resource_id=report_id,
        description=f"Removed report #{report_id} from the moderation queue",
    )


__all__ = [
    "ESCALATION_THRESHOLD",
    "ReportPage",
    "create_report",
    "delete_report",
    "get_moderation_stats",
    "get_report",
    "list_moderation_queue",
    "list_report_actions",
    "take_moderation_action",
]
