"""Core data schema for tasks, exams and study sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

DEFAULT_EXAM_MINUTES = 240

TASK_STATUSES = ("pending", "completed")
SESSION_TYPES = ("homework", "exam_revision")
SESSION_STATUSES = ("planned", "completed", "missed", "rescheduled")


@dataclass
class Task:
    """Homework task with a hard deadline."""

    id: str
    name: str
    subject: str
    deadline: date
    estimated_time: int
    status: str = "pending"

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"


@dataclass
class Exam:
    """Upcoming exam with a revision-time budget."""

    id: str
    subject: str
    date: date
    estimated_time: Optional[int] = None

    @property
    def required_minutes(self) -> int:
        return self.estimated_time or DEFAULT_EXAM_MINUTES


@dataclass
class Session:
    """One scheduled block of study time tied to a single task or exam."""

    id: str
    type: str
    source_id: str
    title: str
    subject: str
    date: date
    duration: int
    status: str = "planned"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "sourceId": self.source_id,
            "title": self.title,
            "subject": self.subject,
            "date": self.date.isoformat(),
            "duration": self.duration,
            "status": self.status,
        }


@dataclass
class DailyBucket:
    """Sessions falling on a single calendar date."""

    date: date
    sessions: list[Session] = field(default_factory=list)

    @property
    def total_minutes(self) -> int:
        return sum(session.duration for session in self.sessions)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "sessions": [session.to_dict() for session in self.sessions],
            "totalMinutes": self.total_minutes,
        }


@dataclass
class WeeklySchedule:
    """Seven contiguous daily buckets starting on a Monday."""

    start: date
    days: list[DailyBucket]

    def dates(self) -> list[date]:
        return [bucket.date for bucket in self.days]

    def bucket(self, day: date) -> DailyBucket:
        for bucket in self.days:
            if bucket.date == day:
                return bucket
        raise KeyError(day.isoformat())

    def sessions(self) -> list[Session]:
        return [session for bucket in self.days for session in bucket.sessions]

    def to_dict(self) -> dict:
        return {bucket.date.isoformat(): bucket.to_dict() for bucket in self.days}


@dataclass
class ShortfallItem:
    """Minutes of a task or exam that could not be placed in the window."""

    id: str
    name: str
    type: str
    missing_minutes: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "missingMinutes": self.missing_minutes,
        }


@dataclass
class ValidationReport:
    """Outcome of checking a schedule against its inputs."""

    is_valid: bool
    details: dict[str, bool]
    shortfalls: list[ShortfallItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "details": dict(self.details),
            "shortfalls": [item.to_dict() for item in self.shortfalls],
        }


@dataclass
class RescheduleResult:
    """New sessions produced for a missed one, plus how much was placed."""

    sessions: list[Session]
    requested_minutes: int

    @property
    def scheduled_minutes(self) -> int:
        return sum(session.duration for session in self.sessions)

    @property
    def unplaced_minutes(self) -> int:
        return max(0, self.requested_minutes - self.scheduled_minutes)

    @property
    def is_partial(self) -> bool:
        return self.scheduled_minutes < self.requested_minutes

    def to_dict(self) -> dict:
        return {
            "sessions": [session.to_dict() for session in self.sessions],
            "requestedMinutes": self.requested_minutes,
            "scheduledMinutes": self.scheduled_minutes,
            "unplacedMinutes": self.unplaced_minutes,
            "isPartial": self.is_partial,
        }
