"""Schedule load metrics."""

from __future__ import annotations

from math import ceil

from study_scheduler.schema import Exam, Task, WeeklySchedule


def compute_schedule_metrics(schedule: WeeklySchedule) -> dict:
    """Compute session counts and average daily load for a week."""

    sessions = schedule.sessions()
    total_minutes = sum(session.duration for session in sessions)
    return {
        "total_sessions": len(sessions),
        "total_minutes": total_minutes,
        "homework_sessions": sum(1 for session in sessions if session.type == "homework"),
        "exam_sessions": sum(1 for session in sessions if session.type == "exam_revision"),
        "average_daily_minutes": total_minutes / len(schedule.days) if schedule.days else 0.0,
    }


def estimate_workload(tasks: list[Task], exams: list[Exam], daily_budget: int) -> dict:
    """Estimate how many budget-sized days the pending work needs."""

    pending = [task for task in tasks if task.is_pending]
    total = sum(task.estimated_time for task in pending) + sum(exam.required_minutes for exam in exams)
    return {
        "total_minutes": total,
        "items": len(pending) + len(exams),
        "estimated_days": ceil(total / daily_budget) if daily_budget > 0 else 0,
    }
