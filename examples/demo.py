"""Demo script for study-scheduler."""

import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from study_scheduler.adapters.csv_adapter import parse_tasks
from study_scheduler.adapters.json_adapter import parse_exams
from study_scheduler.metrics import compute_schedule_metrics
from study_scheduler.rescheduling import reschedule_missed_session
from study_scheduler.scheduling import plan_week


def main() -> None:
    tasks = parse_tasks("examples/sample_tasks.csv")
    exams = parse_exams("examples/sample_exams.json")
    plan = plan_week(tasks, exams, daily_budget=240, reference_date=date(2025, 3, 12))

    for bucket in plan.schedule.days:
        print(bucket.date.isoformat(), f"{bucket.total_minutes}m")
        for session in bucket.sessions:
            print(f"    {session.title:<32} {session.duration:>4}m")
    print("Validation:", plan.report.to_dict())
    print("Metrics:", compute_schedule_metrics(plan.schedule))

    first = plan.schedule.sessions()[0]
    first.status = "missed"
    result = reschedule_missed_session(first, plan.schedule.sessions(), daily_budget=240)
    print("Rescheduled:", result.to_dict())


if __name__ == "__main__":
    main()
