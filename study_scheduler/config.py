"""Planner settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from study_scheduler.validation import ScheduleInputError, validate_daily_budget

DEFAULT_DAILY_BUDGET = 480

BUDGET_ENV_VAR = "STUDY_SCHEDULER_DAILY_BUDGET"


@dataclass(frozen=True)
class PlannerConfig:
    """Tunable limits shared by the scheduler and the rescheduler."""

    daily_budget_minutes: int = DEFAULT_DAILY_BUDGET
    reschedule_horizon_days: int = 3

    def __post_init__(self) -> None:
        validate_daily_budget(self.daily_budget_minutes)
        if not isinstance(self.reschedule_horizon_days, int) or self.reschedule_horizon_days < 1:
            raise ScheduleInputError("Reschedule horizon must be at least 1 day")

    @classmethod
    def from_env(cls, environ=None) -> "PlannerConfig":
        """Build a config, taking the daily budget from the environment if set."""

        env = os.environ if environ is None else environ
        raw = env.get(BUDGET_ENV_VAR)
        if raw in (None, ""):
            return cls()
        try:
            budget = int(raw)
        except ValueError as exc:
            raise ValueError(f"{BUDGET_ENV_VAR} must be an integer, got '{raw}'") from exc
        return cls(daily_budget_minutes=budget)
