"""Weekly schedule generation."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date, timedelta

from study_scheduler.allocation import WINDOW_DAYS, allocate_task, distribute_exam_revision
from study_scheduler.capacity import CapacityTracker
from study_scheduler.evaluator import validate_schedule
from study_scheduler.identity import IdFactory, make_session_id
from study_scheduler.schema import DailyBucket, Exam, Session, Task, ValidationReport, WeeklySchedule
from study_scheduler.validation import validate_daily_budget, validate_exam, validate_session, validate_task

logger = logging.getLogger(__name__)


@dataclass
class WeekPlan:
    """A generated schedule together with its validation report."""

    schedule: WeeklySchedule
    report: ValidationReport
    tasks: list[Task]
    exams: list[Exam]
    generation_seconds: float = 0.0


def week_start(reference: date) -> date:
    """Return the Monday on or before ``reference``."""

    return reference - timedelta(days=reference.weekday())


def window_dates(start: date) -> list[date]:
    return [start + timedelta(days=offset) for offset in range(WINDOW_DAYS)]


def sort_tasks_by_deadline(tasks: list[Task]) -> list[Task]:
    # sorted() is stable, so equal deadlines keep their input order
    return sorted(tasks, key=lambda task: task.deadline)


def select_inputs(tasks: list[Task], exams: list[Exam], start: date) -> tuple[list[Task], list[Exam]]:
    """Keep pending tasks and exams that fall after the window start."""

    pending = [task for task in tasks if task.is_pending]
    upcoming = [exam for exam in exams if exam.date > start]
    return pending, upcoming


def build_schedule(sessions: list[Session], start: date) -> WeeklySchedule:
    by_date: dict[date, list[Session]] = {day: [] for day in window_dates(start)}
    for session in sessions:
        if session.date in by_date:
            by_date[session.date].append(session)
    return WeeklySchedule(start=start, days=[DailyBucket(date=day, sessions=items) for day, items in by_date.items()])


def generate_weekly_schedule(
    tasks: list[Task],
    exams: list[Exam],
    daily_budget: int,
    reference_date: date,
    id_factory: IdFactory = make_session_id,
) -> WeeklySchedule:
    """Allocate homework first, then exam revision, into a Monday-based week."""

    validate_daily_budget(daily_budget)
    for task in tasks:
        validate_task(task)
    for exam in exams:
        validate_exam(exam)

    start = week_start(reference_date)
    pending, upcoming = select_inputs(tasks, exams, start)
    logger.debug(
        "Scheduling week of %s: %d pending task(s), %d upcoming exam(s), budget %d",
        start.isoformat(),
        len(pending),
        len(upcoming),
        daily_budget,
    )

    tracker = CapacityTracker.for_window(window_dates(start), daily_budget)
    sessions: list[Session] = []

    for task in sort_tasks_by_deadline(pending):
        tracker, produced = allocate_task(task, start, tracker, id_factory)
        sessions.extend(produced)

    for exam in upcoming:
        tracker, produced = distribute_exam_revision(exam, start, tracker, id_factory)
        sessions.extend(produced)

    schedule = build_schedule(sessions, start)
    logger.info("Generated %d session(s) for week of %s", len(sessions), start.isoformat())
    return schedule


def plan_week(
    tasks: list[Task],
    exams: list[Exam],
    daily_budget: int,
    reference_date: date,
    id_factory: IdFactory = make_session_id,
) -> WeekPlan:
    """Generate a week and validate it against the records that were scheduled."""

    started = time.perf_counter()
    schedule = generate_weekly_schedule(tasks, exams, daily_budget, reference_date, id_factory)
    elapsed = time.perf_counter() - started
    pending, upcoming = select_inputs(tasks, exams, schedule.start)
    report = validate_schedule(schedule, pending, upcoming, daily_budget)
    if not report.is_valid:
        logger.debug("Schedule for week of %s failed checks: %s", schedule.start.isoformat(), report.details)
    return WeekPlan(schedule=schedule, report=report, tasks=pending, exams=upcoming, generation_seconds=elapsed)


def check_saved_week(
    sessions: list[Session],
    tasks: list[Task],
    exams: list[Exam],
    daily_budget: int,
    reference_date: date,
) -> WeekPlan:
    """Rebuild a week from stored sessions and validate it.

    Sessions dated outside the week are ignored. Statuses are not filtered,
    so a missed session still counts towards its task or exam.
    """

    validate_daily_budget(daily_budget)
    for task in tasks:
        validate_task(task)
    for exam in exams:
        validate_exam(exam)
    for session in sessions:
        validate_session(session)

    start = week_start(reference_date)
    pending, upcoming = select_inputs(tasks, exams, start)
    schedule = build_schedule(sessions, start)
    report = validate_schedule(schedule, pending, upcoming, daily_budget)
    return WeekPlan(schedule=schedule, report=report, tasks=pending, exams=upcoming)


def add_sessions(schedule: WeeklySchedule, sessions: list[Session]) -> list[Session]:
    """Append sessions to their day's bucket; return the ones outside the week."""

    buckets = {bucket.date: bucket for bucket in schedule.days}
    outside: list[Session] = []
    for session in sessions:
        bucket = buckets.get(session.date)
        if bucket is None:
            outside.append(session)
        else:
            bucket.sessions.append(session)
    return outside
