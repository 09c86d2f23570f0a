"""Reporting content, moderation decisions and the notifications they produce."""

from __future__ import annotations

from dataclasses import replace

import pytest

from conftest import make_user
from expense_tracker.application.context import RequestContext
from expense_tracker.application.errors import ConflictError, NotFoundError, ValidationError
from expense_tracker.application.use_cases.moderation import (
    create_report,
    delete_report,
    get_moderation_stats,
    list_moderation_queue,
    list_report_actions,
    take_moderation_action,
)
from expense_tracker.application.use_cases.notifications import (
    list_notifications,
    notify_report_resolution,
)
from expense_tracker.application.use_cases.users import delete_user
from expense_tracker.domain.entities import (
    ContentType,
    ModerationActionType,
    NotificationType,
    ReportPriority,
    ReportReason,
    ReportStatus,
    UserStatus,
)
from expense_tracker.infrastructure.repositories import NotificationRepository, UserRepository


@pytest.fixture()
def people(session):
    reporter = make_user(session, "reporter")
    offender = make_user(session, "offender")
    moderator = make_user(session, "mod", roles=("moderator",))
    return reporter, offender, moderator


def _report(session, reporter, offender, *, content_id: int = 1, **overrides):
    kwargs = {
        "reported_user_id": offender.id,
        "content_type": ContentType.EXPENSE,
        "content_id": content_id,
        "reason": ReportReason.SPAM,
        "description": "Looks like spam",
    }
    kwargs.update(overrides)
    return create_report(session, RequestContext(user=reporter), **kwargs)


def test_new_report_is_pending_with_medium_priority(session, people) -> None:
    reporter, offender, _ = people

    report = _report(session, reporter, offender)

    assert report.status is ReportStatus.PENDING
    assert report.priority is ReportPriority.MEDIUM
    assert report.reporter_username == "reporter"
    assert report.reported_username == "offender"


def test_cannot_report_own_content(session, people) -> None:
    reporter, _, _ = people

    with pytest.raises(ValidationError, match="Cannot report your own content"):
        _report(session, reporter, reporter)


def test_reported_user_must_exist(session, people) -> None:
    reporter, offender, moderator = people
    delete_user(session, user_id=offender.id, acting_user_id=moderator.id)

    with pytest.raises(NotFoundError):
        _report(session, reporter, offender)


def test_duplicate_open_report_is_rejected(session, people) -> None:
    reporter, offender, _ = people
    _report(session, reporter, offender)

    with pytest.raises(ConflictError):
        _report(session, reporter, offender, reason=ReportReason.FRAUD)


def test_repeatedly_reported_users_get_high_priority(session, people) -> None:
    reporter, offender, _ = people

    first = _report(session, reporter, offender, content_id=1)
    second = _report(session, reporter, offender, content_id=2)
    third = _report(session, reporter, offender, content_id=3)

    assert first.priority is ReportPriority.MEDIUM
    assert second.priority is ReportPriority.MEDIUM
    assert third.priority is ReportPriority.HIGH


def test_previous_warnings_raise_priority(session, people) -> None:
    reporter, offender, moderator = people
    first = _report(session, reporter, offender, content_id=1)
    take_moderation_action(
        session,
        RequestContext(user=moderator),
        report_id=first.id,
        action_type=ModerationActionType.WARN_USER,
    )

    second = _report(session, reporter, offender, content_id=2)

    assert second.priority is ReportPriority.HIGH


def test_queue_orders_by_priority_then_age(session, people) -> None:
    reporter, offender, moderator = people
    older = _report(session, reporter, offender, content_id=1)
    newer = _report(session, reporter, offender, content_id=2)
    take_moderation_action(
        session,
        RequestContext(user=moderator),
        report_id=newer.id,
        action_type=ModerationActionType.ESCALATE,
    )

    queue = list_moderation_queue(session)

    assert [report.id for report in queue.reports] == [newer.id, older.id]
    assert queue.reports[0].status is ReportStatus.REVIEWING
    assert queue.reports[0].priority is ReportPriority.URGENT


def test_resolve_notifies_reporter_and_reported_user(session, people) -> None:
    reporter, offender, moderator = people
    report = _report(session, reporter, offender)

    resolved, action = take_moderation_action(
        session,
        RequestContext(user=moderator),
        report_id=report.id,
        action_type=ModerationActionType.RESOLVE,
        user_feedback="Content removed",
    )

    assert resolved.status is ReportStatus.RESOLVED
    assert resolved.is_deleted()
    assert action.feedback_sent_at is not None
    assert list_moderation_queue(session).total_count == 0

    reporter_inbox = list_notifications(session, user_id=reporter.id)
    offender_inbox = list_notifications(session, user_id=offender.id)
    assert reporter_inbox.unread_count == 1
    assert offender_inbox.unread_count == 1
    reporter_note = reporter_inbox.notifications[0]
    assert reporter_note.title == "Report Update: Issue Resolved"
    assert reporter_note.type is NotificationType.SUCCESS
    assert reporter_note.message.endswith("Moderator feedback: Content removed")
    assert reporter_note.related_report_id == report.id
    offender_note = offender_inbox.notifications[0]
    assert offender_note.title == "Content Report Resolution"
    assert offender_note.type is NotificationType.INFO
    assert offender_note.message.endswith("Moderator note: Content removed")


def test_resolution_without_feedback_uses_default_messages(session, people) -> None:
    reporter, offender, _ = people
    report = _report(session, reporter, offender)

    created = notify_report_resolution(session, report)

    assert len(created) == 2
    assert created[0].message.endswith("helping maintain our community standards.")
    assert created[1].message.endswith("Thank you for your cooperation.")


def test_self_resolution_sends_a_single_notification(session, people) -> None:
    reporter, offender, _ = people
    report = _report(session, reporter, offender)

    created = notify_report_resolution(
        session, replace(report, reported_user_id=reporter.id), "Handled"
    )

    assert [notification.user_id for notification in created] == [reporter.id]


def test_dismiss_closes_the_report_without_notifications(session, people) -> None:
    reporter, offender, moderator = people
    report = _report(session, reporter, offender)

    dismissed, _ = take_moderation_action(
        session,
        RequestContext(user=moderator),
        report_id=report.id,
        action_type=ModerationActionType.DISMISS,
    )

    assert dismissed.status is ReportStatus.DISMISSED
    assert list_notifications(session, user_id=reporter.id).total_count == 0
    with pytest.raises(ValidationError):
        take_moderation_action(
            session,
            RequestContext(user=moderator),
            report_id=report.id,
            action_type=ModerationActionType.RESOLVE,
        )


def test_suspend_action_suspends_and_notifies(session, people) -> None:
    reporter, offender, moderator = people
    report = _report(session, reporter, offender)

    take_moderation_action(
        session,
        RequestContext(user=moderator),
        report_id=report.id,
        action_type=ModerationActionType.SUSPEND_USER,
        reason="Repeated spam",
    )

    assert UserRepository(session).get(offender.id).status is UserStatus.SUSPENDED
    inbox = list_notifications(session, user_id=offender.id)
    assert inbox.notifications[0].title == "Account Suspended"
    assert inbox.notifications[0].message.endswith("Reason: Repeated spam")
    assert [action.action_type for action in list_report_actions(session, report.id)] == [
        ModerationActionType.SUSPEND_USER
    ]


def test_stats_count_reports_and_suspensions(session, people) -> None:
    reporter, offender, moderator = people
    first = _report(session, reporter, offender, content_id=1)
    _report(session, reporter, offender, content_id=2)
    take_moderation_action(
        session,
        RequestContext(user=moderator),
        report_id=first.id,
        action_type=ModerationActionType.SUSPEND_USER,
    )

    stats = get_moderation_stats(session)

    assert stats.pending == 1
    assert stats.resolved == 1
    assert stats.reports_last_24h == 2
    assert stats.suspended_users == 1


def test_delete_report_hides_it_from_the_queue(session, people) -> None:
    reporter, offender, moderator = people
    report = _report(session, reporter, offender)

    delete_report(session, RequestContext(user=moderator), report_id=report.id)

    assert list_moderation_queue(session).total_count == 0
    with pytest.raises(NotFoundError):
        delete_report(session, RequestContext(user=moderator), report_id=report.id)


def test_warn_user_sends_one_warning_to_the_reported_user(session, people) -> None:
    reporter, offender, moderator = people
    report = _report(session, reporter, offender)

    warned, action = take_moderation_action(
        session,
        RequestContext(user=moderator),
        report_id=report.id,
        action_type=ModerationActionType.WARN_USER,
        reason="Spam links",
    )

    assert warned.status is ReportStatus.RESOLVED
    assert action.target_user_id == offender.id
    assert action.feedback_sent_at is not None
    offender_inbox = list_notifications(session, user_id=offender.id)
    assert offender_inbox.total_count == 1
    warning = offender_inbox.notifications[0]
    assert warning.type is NotificationType.WARNING
    assert warning.title == "Content Warning"
    assert warning.related_report_id == report.id
    assert warning.message.endswith("Reason: Spam links")
    assert list_notifications(session, user_id=reporter.id).total_count == 0


@pytest.mark.parametrize(
    "action_type",
    [ModerationActionType.HIDE_CONTENT, ModerationActionType.RESTORE_CONTENT],
)
def test_content_visibility_actions_resolve_without_hiding_the_report(
    session, people, action_type
) -> None:
    reporter, offender, moderator = people
    report = _report(session, reporter, offender)

    updated, action = take_moderation_action(
        session,
        RequestContext(user=moderator),
        report_id=report.id,
        action_type=action_type,
    )

    assert updated.status is ReportStatus.RESOLVED
    assert updated.deleted_at is None
    assert action.feedback_sent_at is None
    assert [queued.id for queued in list_moderation_queue(session, status=None).reports] == [
        report.id
    ]
    assert list_notifications(session, user_id=offender.id).total_count == 0


def test_delete_content_is_recorded_and_resolves_the_report(session, people) -> None:
    reporter, offender, moderator = people
    report = _report(session, reporter, offender, content_id=7)

    updated, action = take_moderation_action(
        session,
        RequestContext(user=moderator),
        report_id=report.id,
        action_type=ModerationActionType.DELETE_CONTENT,
        reason="Fraudulent entry",
    )

    assert updated.status is ReportStatus.RESOLVED
    assert action.action_type is ModerationActionType.DELETE_CONTENT
    assert (action.content_type, action.content_id) == (ContentType.EXPENSE, 7)
    assert [recorded.action_type for recorded in list_report_actions(session, report.id)] == [
        ModerationActionType.DELETE_CONTENT
    ]


def test_feedback_timestamp_requires_a_stored_notification(
    session, people, monkeypatch
) -> None:
    reporter, offender, moderator = people
    report = _report(session, reporter, offender)

    def fail_to_store(self, notification):
        raise RuntimeError("notification store unavailable")

    monkeypatch.setattr(NotificationRepository, "create", fail_to_store)

    resolved, action = take_moderation_action(
        session,
        RequestContext(user=moderator),
        report_id=report.id,
        action_type=ModerationActionType.RESOLVE,
        user_feedback="Content removed",
    )

    assert resolved.status is ReportStatus.RESOLVED
    assert action.user_feedback == "Content removed"
    assert action.feedback_sent_at is None


def test_escalate_and_dismiss_never_stamp_feedback(session, people) -> None:
    reporter, offender, moderator = people
    escalated_report = _report(session, reporter, offender, content_id=1)
    dismissed_report = _report(session, reporter, offender, content_id=2)

    _, escalation = take_moderation_action(
        session,
        RequestContext(user=moderator),
        report_id=escalated_report.id,
        action_type=ModerationActionType.ESCALATE,
        user_feedback="Needs a second look",
    )
    _, dismissal = take_moderation_action(
        session,
        RequestContext(user=moderator),
        report_id=dismissed_report.id,
        action_type=ModerationActionType.DISMISS,
        user_feedback="Not a violation",
    )

    assert escalation.feedback_sent_at is None
    assert dismissal.feedback_sent_at is None


def test_user_can_be_warned_without_a_report(session, people) -> None:
    _, offender, moderator = people

    report, action = take_moderation_action(
        session,
        RequestContext(user=moderator),
        action_type=ModerationActionType.WARN_USER,
        target_user_id=offender.id,
        user_feedback="Please keep descriptions civil.",
    )

    assert report is None
    assert action.report_id is None
    assert action.target_user_id == offender.id
    assert action.feedback_sent_at is not None
    inbox = list_notifications(session, user_id=offender.id)
    assert inbox.notifications[0].message == "Please keep descriptions civil."
    assert inbox.notifications[0].related_report_id is None


def test_warnings_without_a_report_still_raise_priority(session, people) -> None:
    reporter, offender, moderator = people
    take_moderation_action(
        session,
        RequestContext(user=moderator),
        action_type=ModerationActionType.WARN_USER,
        target_user_id=offender.id,
    )

    report = _report(session, reporter, offender)

    assert report.priority is ReportPriority.HIGH


def test_content_can_be_deleted_without_a_report(session, people) -> None:
    _, _, moderator = people

    report, action = take_moderation_action(
        session,
        RequestContext(user=moderator),
        action_type=ModerationActionType.DELETE_CONTENT,
        content_type=ContentType.ANNOUNCEMENT,
        content_id=3,
    )

    assert report is None
    assert (action.content_type, action.content_id) == (ContentType.ANNOUNCEMENT, 3)
    assert action.target_user_id is None


@pytest.mark.parametrize(
    ("action_type", "kwargs", "message"),
    [
        (ModerationActionType.RESOLVE, {}, "resolve requires a report"),
        (ModerationActionType.WARN_USER, {}, "warn_user requires target_user_id"),
        (
            ModerationActionType.HIDE_CONTENT,
            {"content_type": ContentType.EXPENSE},
            "hide_content requires content_type and content_id",
        ),
    ],
)
def test_actions_without_a_report_need_a_target(
    session, people, action_type, kwargs, message
) -> None:
    _, _, moderator = people

    with pytest.raises(ValidationError, match=message):
        take_moderation_action(
            session, RequestContext(user=moderator), action_type=action_type, **kwargs
        )


def test_unknown_target_user_is_not_found(session, people) -> None:
    _, _, moderator = people

    with pytest.raises(NotFoundError, match="Target user not found"):
        take_moderation_action(
            session,
            RequestContext(user=moderator),
            action_type=ModerationActionType.SUSPEND_USER,
            target_user_id=9999,
        )
