"""Redistribution of missed study sessions."""

from __future__ import annotations

import logging
from datetime import timedelta

from study_scheduler.capacity import CapacityTracker
from study_scheduler.identity import IdFactory, make_session_id
from study_scheduler.schema import RescheduleResult, Session
from study_scheduler.validation import ScheduleInputError, validate_daily_budget, validate_session

logger = logging.getLogger(__name__)

RESCHEDULE_HORIZON_DAYS = 3


def reschedule_missed_session(
    missed: Session,
    existing_sessions: list[Session],
    daily_budget: int,
    id_factory: IdFactory = make_session_id,
    horizon_days: int = RESCHEDULE_HORIZON_DAYS,
) -> RescheduleResult:
    """Spread a missed session's minutes over the days right after it.

    Free capacity is recomputed from ``existing_sessions`` regardless of
    their status. Minutes that do not fit within ``horizon_days`` are dropped
    and show up as ``RescheduleResult.unplaced_minutes``.
    """

    validate_session(missed)
    validate_daily_budget(daily_budget)
    if missed.status != "missed":
        raise ScheduleInputError(f"Session {missed.id}: only missed sessions can be rescheduled, got '{missed.status}'")

    tracker = CapacityTracker.from_sessions(existing_sessions, daily_budget)
    remaining = missed.duration
    sessions: list[Session] = []

    for offset in range(1, horizon_days + 1):
        if remaining <= 0:
            break
        day = missed.date + timedelta(days=offset)
        assigned = min(remaining, tracker.free_minutes(day))
        if assigned <= 0:
            continue
        tracker = tracker.commit(day, assigned)
        remaining -= assigned
        sessions.append(
            Session(
                id=id_factory("rescheduled", missed.id, day, offset),
                type=missed.type,
                source_id=missed.source_id,
                title=missed.title,
                subject=missed.subject,
                date=day,
                duration=assigned,
                status="rescheduled",
            )
        )

    result = RescheduleResult(sessions=sessions, requested_minutes=missed.duration)
    logger.debug(
        "Rescheduled %d of %d minute(s) from session %s",
        result.scheduled_minutes,
        result.requested_minutes,
        missed.id,
    )
    return result
