"""Generate, re-check or reschedule a weekly study schedule from CSV/JSON files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from study_scheduler.adapters import csv_adapter, json_adapter
from study_scheduler.config import PlannerConfig
from study_scheduler.metrics import compute_schedule_metrics, estimate_workload
from study_scheduler.rescheduling import reschedule_missed_session
from study_scheduler.scheduling import check_saved_week, plan_week


def _adapter_for(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter
    if suffix == ".json":
        return json_adapter
    raise ValueError("Unsupported input format, expected .csv or .json")


def _config(args: argparse.Namespace) -> PlannerConfig:
    config = PlannerConfig.from_env()
    if args.budget is not None:
        config = PlannerConfig(
            daily_budget_minutes=args.budget,
            reschedule_horizon_days=config.reschedule_horizon_days,
        )
    return config


def _load_records(args: argparse.Namespace):
    tasks_path = Path(args.tasks) if args.tasks else None
    exams_path = Path(args.exams) if args.exams else None
    tasks = _adapter_for(tasks_path).parse_tasks(str(tasks_path)) if tasks_path else []
    exams = _adapter_for(exams_path).parse_exams(str(exams_path)) if exams_path else []
    return tasks, exams


def _run_plan(args: argparse.Namespace) -> dict:
    config = _config(args)
    tasks, exams = _load_records(args)
    reference = date.fromisoformat(args.week_of) if args.week_of else date.today()

    plan = plan_week(tasks, exams, config.daily_budget_minutes, reference)
    return {
        "weekStart": plan.schedule.start.isoformat(),
        "dailyBudget": config.daily_budget_minutes,
        "generationSeconds": round(plan.generation_seconds, 6),
        "schedule": plan.schedule.to_dict(),
        "validation": plan.report.to_dict(),
        "metrics": compute_schedule_metrics(plan.schedule),
        "workload": estimate_workload(plan.tasks, plan.exams, config.daily_budget_minutes),
    }


def _run_validate(args: argparse.Namespace) -> dict:
    config = _config(args)
    sessions_path = Path(args.sessions)
    sessions = _adapter_for(sessions_path).parse_sessions(str(sessions_path))
    tasks, exams = _load_records(args)
    reference = date.fromisoformat(args.week_of) if args.week_of else date.today()

    plan = check_saved_week(sessions, tasks, exams, config.daily_budget_minutes, reference)
    return {
        "weekStart": plan.schedule.start.isoformat(),
        "dailyBudget": config.daily_budget_minutes,
        "validation": plan.report.to_dict(),
        "metrics": compute_schedule_metrics(plan.schedule),
    }


def _run_reschedule(args: argparse.Namespace) -> dict:
    config = _config(args)
    sessions_path = Path(args.sessions)
    sessions = _adapter_for(sessions_path).parse_sessions(str(sessions_path))
    missed = next((session for session in sessions if session.id == args.session_id), None)
    if missed is None:
        raise ValueError(f"Session '{args.session_id}' not found in {sessions_path}")

    result = reschedule_missed_session(
        missed,
        sessions,
        config.daily_budget_minutes,
        horizon_days=config.reschedule_horizon_days,
    )
    return result.to_dict()


def main() -> None:
    parser = argparse.ArgumentParser(description="Weekly study schedule generator")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan_parser = subparsers.add_parser("plan", help="Generate a seven-day schedule")
    plan_parser.add_argument("--tasks", help="Path to CSV/JSON tasks file")
    plan_parser.add_argument("--exams", help="Path to CSV/JSON exams file")
    plan_parser.add_argument("--budget", type=int, help="Daily study budget in minutes (60-960)")
    plan_parser.add_argument("--week-of", help="Any date in the target week, YYYY-MM-DD (default: today)")
    plan_parser.add_argument("--output", help="Also write the JSON result to this path")

    reschedule_parser = subparsers.add_parser("reschedule", help="Redistribute a missed session")
    reschedule_parser.add_argument("--sessions", required=True, help="Path to CSV/JSON sessions file")
    reschedule_parser.add_argument("--session-id", required=True, help="Id of the missed session")
    reschedule_parser.add_argument("--budget", type=int, help="Daily study budget in minutes (60-960)")
    reschedule_parser.add_argument("--output", help="Also write the JSON result to this path")

    validate_parser = subparsers.add_parser("validate", help="Re-check a saved week against its tasks and exams")
    validate_parser.add_argument("--sessions", required=True, help="Path to CSV/JSON sessions file")
    validate_parser.add_argument("--tasks", help="Path to CSV/JSON tasks file")
    validate_parser.add_argument("--exams", help="Path to CSV/JSON exams file")
    validate_parser.add_argument("--budget", type=int, help="Daily study budget in minutes (60-960)")
    validate_parser.add_argument("--week-of", help="Any date in the saved week, YYYY-MM-DD (default: today)")
    validate_parser.add_argument("--output", help="Also write the JSON result to this path")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        runners = {"plan": _run_plan, "reschedule": _run_reschedule, "validate": _run_validate}
        report = runners[args.command](args)
    except ValueError as exc:
        parser.error(str(exc))

    print(json.dumps(report, indent=2))

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
        print(f"Saved result to {out_path}")


if __name__ == "__main__":
    main()
