"""Per-day study capacity bookkeeping."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable

from study_scheduler.schema import Session


@dataclass(frozen=True)
class CapacityTracker:
    """Committed minutes per date against a fixed daily budget.

    Instances are treated as values: ``commit`` returns a new tracker and
    leaves the original untouched.
    """

    daily_budget: int
    committed: dict[date, int] = field(default_factory=dict)

    @classmethod
    def for_window(cls, dates: Iterable[date], daily_budget: int) -> "CapacityTracker":
        return cls(daily_budget=daily_budget, committed={day: 0 for day in dates})

    @classmethod
    def from_sessions(cls, sessions: Iterable[Session], daily_budget: int) -> "CapacityTracker":
        """Snapshot usage from existing sessions, whatever their status."""

        used: dict[date, int] = defaultdict(int)
        for session in sessions:
            used[session.date] += session.duration
        return cls(daily_budget=daily_budget, committed=dict(used))

    def used(self, day: date) -> int:
        return self.committed.get(day, 0)

    def free_minutes(self, day: date) -> int:
        return max(0, self.daily_budget - self.used(day))

    def commit(self, day: date, minutes: int) -> "CapacityTracker":
        if minutes <= 0:
            return self
        committed = dict(self.committed)
        committed[day] = committed.get(day, 0) + minutes
        return replace(self, committed=committed)
