"""Input validation for records entering the scheduler."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from study_scheduler.schema import SESSION_STATUSES, SESSION_TYPES, TASK_STATUSES, Exam, Session, Task

MIN_DAILY_BUDGET = 60
MAX_DAILY_BUDGET = 960


class ScheduleInputError(ValueError):
    """Raised when a record or setting is malformed before allocation starts."""


def _is_calendar_date(value: Any) -> bool:
    return isinstance(value, date) and not isinstance(value, datetime)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def validate_daily_budget(minutes: Any) -> int:
    if not isinstance(minutes, int) or isinstance(minutes, bool):
        raise ScheduleInputError("Study session limit must be a number")
    if minutes < MIN_DAILY_BUDGET:
        raise ScheduleInputError(f"Study session limit must be at least {MIN_DAILY_BUDGET} minutes")
    if minutes > MAX_DAILY_BUDGET:
        raise ScheduleInputError(f"Study session limit cannot exceed {MAX_DAILY_BUDGET} minutes")
    return minutes


def validate_task(task: Task) -> Task:
    if not task.id:
        raise ScheduleInputError("Task id is required")
    if not task.name or not task.name.strip():
        raise ScheduleInputError(f"Task {task.id}: name is required")
    if not _is_calendar_date(task.deadline):
        raise ScheduleInputError(f"Task {task.id}: deadline must be a calendar date")
    if not _is_positive_int(task.estimated_time):
        raise ScheduleInputError(f"Task {task.id}: estimated time must be a positive number of minutes")
    if task.status not in TASK_STATUSES:
        raise ScheduleInputError(f"Task {task.id}: invalid status '{task.status}'")
    return task


def validate_exam(exam: Exam) -> Exam:
    if not exam.id:
        raise ScheduleInputError("Exam id is required")
    if not exam.subject or not exam.subject.strip():
        raise ScheduleInputError(f"Exam {exam.id}: subject is required")
    if not _is_calendar_date(exam.date):
        raise ScheduleInputError(f"Exam {exam.id}: date must be a calendar date")
    if exam.estimated_time is not None and not _is_positive_int(exam.estimated_time):
        raise ScheduleInputError(f"Exam {exam.id}: revision time must be a positive number of minutes")
    return exam


def validate_session(session: Session) -> Session:
    if not session.id:
        raise ScheduleInputError("Session id is required")
    if session.type not in SESSION_TYPES:
        raise ScheduleInputError(f"Session {session.id}: invalid type '{session.type}'")
    if not session.source_id:
        raise ScheduleInputError(f"Session {session.id}: source id is required")
    if not _is_calendar_date(session.date):
        raise ScheduleInputError(f"Session {session.id}: date must be a calendar date")
    if not _is_positive_int(session.duration):
        raise ScheduleInputError(f"Session {session.id}: duration must be a positive number of minutes")
    if session.status not in SESSION_STATUSES:
        raise ScheduleInputError(f"Session {session.id}: invalid status '{session.status}'")
    return session


# Builders shared by the file adapters. ``context`` prefixes error messages,
# e.g. "Row 3" or "Item 2".


def _field(raw: dict, *names: str) -> Any:
    for name in names:
        value = raw.get(name)
        if value not in (None, ""):
            return value
    return None


def _text(raw: dict, *names: str) -> str:
    value = _field(raw, *names)
    return str(value).strip() if value is not None else ""


def _parse_date(value: Any, label: str, context: str) -> date:
    if value is None:
        raise ScheduleInputError(f"{context}: missing {label}")
    text = str(value).strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as exc:
        raise ScheduleInputError(f"{context}: malformed {label} '{value}'") from exc


def _parse_minutes(value: Any, label: str, context: str) -> int:
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise ScheduleInputError(f"{context}: invalid {label} '{value}'") from exc


def _optional_minutes(value: Any, label: str, context: str) -> Optional[int]:
    if value is None:
        return None
    return _parse_minutes(value, label, context)


def _revalidate(validator, record, context: str):
    try:
        return validator(record)
    except ScheduleInputError as exc:
        raise ScheduleInputError(f"{context}: {exc}") from exc


def task_from_mapping(raw: dict, context: str) -> Task:
    estimated = _field(raw, "estimated_time", "estimatedTime")
    if estimated is None:
        raise ScheduleInputError(f"{context}: missing estimated_time")
    task = Task(
        id=_text(raw, "id"),
        name=_text(raw, "name"),
        subject=_text(raw, "subject"),
        deadline=_parse_date(_field(raw, "deadline"), "deadline", context),
        estimated_time=_parse_minutes(estimated, "estimated_time", context),
        status=_text(raw, "status") or "pending",
    )
    return _revalidate(validate_task, task, context)


def exam_from_mapping(raw: dict, context: str) -> Exam:
    exam = Exam(
        id=_text(raw, "id"),
        subject=_text(raw, "subject"),
        date=_parse_date(_field(raw, "date"), "date", context),
        estimated_time=_optional_minutes(_field(raw, "estimated_time", "estimatedTime"), "estimated_time", context),
    )
    return _revalidate(validate_exam, exam, context)


def session_from_mapping(raw: dict, context: str) -> Session:
    duration = _field(raw, "duration")
    if duration is None:
        raise ScheduleInputError(f"{context}: missing duration")
    session = Session(
        id=_text(raw, "id"),
        type=_text(raw, "type"),
        source_id=_text(raw, "source_id", "sourceId", "taskId", "examId"),
        title=_text(raw, "title"),
        subject=_text(raw, "subject"),
        date=_parse_date(_field(raw, "date"), "date", context),
        duration=_parse_minutes(duration, "duration", context),
        status=_text(raw, "status") or "planned",
    )
    return _revalidate(validate_session, session, context)
