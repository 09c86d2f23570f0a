"""Best-effort recording of security events."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from expense_tracker.application.context import RequestContext
from expense_tracker.domain.entities import SecurityEventType, SecurityLog
from expense_tracker.infrastructure.repositories import SecurityLogRepository

logger = logging.getLogger(__name__)
security_logger = logging.getLogger("expense_tracker.security")


def record_security_event(
    session: Session,
    context: RequestContext,
    event_type: SecurityEventType,
    *,
    user_id: int | None = None,
    details: dict[str, Any] | None = None,
) -> SecurityLog | None:
    """Persist ``event_type`` with its specific cause; never raises."""

    subject_id = user_id if user_id is not None else context.user_id
    payload = dict(details or {})
    security_logger.info(
        "security event=%s user=%s ip=%s details=%s",
        event_type.value,
        subject_id,
        context.ip_address,
        payload,
    )
    entry = SecurityLog(
        id=None,
        event_type=event_type,
        user_id=subject_id,
        ip_address=context.ip_address,
        user_agent=context.user_agent,
        details=payload,
    )
    try:
        return SecurityLogRepository(session).create(entry)
    except Exception:
        session.rollback()
        logger.exception("Could not store %s security event", event_type.value)
        return None


__all__ = ["record_security_event", "security_logger"]
