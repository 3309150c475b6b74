"""Greedy placement of homework and exam revision into a capacity window."""

from __future__ import annotations

from datetime import date, timedelta
from math import ceil

from study_scheduler.capacity import CapacityTracker
from study_scheduler.identity import IdFactory, make_session_id
from study_scheduler.schema import Exam, Session, Task

WINDOW_DAYS = 7
MIN_REVISION_DAYS = 3


def allocate_task(
    task: Task,
    window_start: date,
    tracker: CapacityTracker,
    id_factory: IdFactory = make_session_id,
) -> tuple[CapacityTracker, list[Session]]:
    """Fill the earliest days up to the deadline with the task's minutes.

    Days after the deadline or outside the window are never used, so a task
    whose deadline precedes ``window_start`` gets no sessions at all.
    """

    days_until_deadline = (task.deadline - window_start).days
    remaining = task.estimated_time
    sessions: list[Session] = []

    for offset in range(min(days_until_deadline, WINDOW_DAYS - 1) + 1):
        if remaining <= 0:
            break
        day = window_start + timedelta(days=offset)
        assigned = min(remaining, tracker.free_minutes(day))
        if assigned <= 0:
            continue
        tracker = tracker.commit(day, assigned)
        remaining -= assigned
        sessions.append(
            Session(
                id=id_factory("task", task.id, day, offset),
                type="homework",
                source_id=task.id,
                title=task.name,
                subject=task.subject,
                date=day,
                duration=assigned,
            )
        )

    return tracker, sessions


def _revision_session(exam: Exam, day: date, duration: int, sequence: int, id_factory: IdFactory) -> Session:
    return Session(
        id=id_factory("exam", exam.id, day, sequence),
        type="exam_revision",
        source_id=exam.id,
        title=f"{exam.subject} Revision",
        subject=exam.subject,
        date=day,
        duration=duration,
    )


def distribute_exam_revision(
    exam: Exam,
    window_start: date,
    tracker: CapacityTracker,
    id_factory: IdFactory = make_session_id,
) -> tuple[CapacityTracker, list[Session]]:
    """Spread an exam's revision minutes over at least three days.

    The first pass hands each day an even share. The second pass tops up any
    day that still has room, growing that day's session instead of adding
    another one.
    """

    days_until_exam = (exam.date - window_start).days
    if days_until_exam < 0:
        return tracker, []

    remaining = exam.required_minutes
    days_to_use = min(max(days_until_exam, MIN_REVISION_DAYS), WINDOW_DAYS)
    ideal_share = ceil(remaining / days_to_use)
    offsets = range(min(days_to_use, WINDOW_DAYS))

    by_key: dict[tuple[date, str], Session] = {}
    sessions: list[Session] = []

    for offset in offsets:
        if remaining <= 0:
            break
        day = window_start + timedelta(days=offset)
        assigned = min(remaining, tracker.free_minutes(day), ideal_share)
        if assigned <= 0:
            continue
        tracker = tracker.commit(day, assigned)
        remaining -= assigned
        session = _revision_session(exam, day, assigned, offset, id_factory)
        by_key[(day, exam.id)] = session
        sessions.append(session)

    for offset in offsets:
        if remaining <= 0:
            break
        day = window_start + timedelta(days=offset)
        assigned = min(remaining, tracker.free_minutes(day))
        if assigned <= 0:
            continue
        tracker = tracker.commit(day, assigned)
        remaining -= assigned
        existing = by_key.get((day, exam.id))
        if existing is not None:
            existing.duration += assigned
        else:
            # offset + WINDOW_DAYS keeps top-up ids apart from first-pass ids
            session = _revision_session(exam, day, assigned, offset + WINDOW_DAYS, id_factory)
            by_key[(day, exam.id)] = session
            sessions.append(session)

    return tracker, sessions
