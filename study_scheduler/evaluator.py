"""Schedule evaluator: shortfalls and invariant checks."""

from __future__ import annotations

from collections import defaultdict

from study_scheduler.schema import Exam, Session, ShortfallItem, Task, ValidationReport, WeeklySchedule

MIN_EXAM_SESSIONS = 3


def _sessions_by_source(sessions: list[Session], session_type: str) -> dict[str, list[Session]]:
    grouped: dict[str, list[Session]] = defaultdict(list)
    for session in sessions:
        if session.type == session_type:
            grouped[session.source_id].append(session)
    return grouped


def validate_schedule(
    schedule: WeeklySchedule,
    tasks: list[Task],
    exams: list[Exam],
    daily_budget: int,
) -> ValidationReport:
    """Report per-item shortfalls and the four schedule checks."""

    all_sessions = schedule.sessions()
    homework = _sessions_by_source(all_sessions, "homework")
    revision = _sessions_by_source(all_sessions, "exam_revision")
    shortfalls: list[ShortfallItem] = []

    for task in tasks:
        scheduled = sum(session.duration for session in homework.get(task.id, []))
        if scheduled < task.estimated_time:
            shortfalls.append(ShortfallItem(task.id, task.name, "homework", task.estimated_time - scheduled))

    for exam in exams:
        needed = exam.required_minutes
        scheduled = sum(session.duration for session in revision.get(exam.id, []))
        if scheduled < needed:
            shortfalls.append(ShortfallItem(exam.id, exam.subject, "exam_revision", needed - scheduled))

    def meets_deadline(task: Task) -> bool:
        task_sessions = homework.get(task.id, [])
        return bool(task_sessions) and all(session.date <= task.deadline for session in task_sessions)

    details = {
        "allTasksScheduled": not shortfalls,
        "noDeadlineViolations": all(meets_deadline(task) for task in tasks),
        "examDistribution": all(len(revision.get(exam.id, [])) >= MIN_EXAM_SESSIONS for exam in exams),
        "studySessionLimitRespected": all(bucket.total_minutes <= daily_budget for bucket in schedule.days),
    }

    return ValidationReport(is_valid=all(details.values()), details=details, shortfalls=shortfalls)
