"""Streamlit demo UI for study-scheduler."""

from __future__ import annotations

import tempfile
from datetime import date
from pathlib import Path
from typing import Any

from study_scheduler.adapters import csv_adapter, json_adapter
from study_scheduler.config import PlannerConfig
from study_scheduler.evaluator import validate_schedule
from study_scheduler.metrics import compute_schedule_metrics, estimate_workload
from study_scheduler.rescheduling import reschedule_missed_session
from study_scheduler.scheduling import WeekPlan, add_sessions, plan_week
from study_scheduler.validation import MAX_DAILY_BUDGET, MIN_DAILY_BUDGET

DEMO_TASKS = "examples/sample_tasks.csv"
DEMO_EXAMS = "examples/sample_exams.json"


def _adapter_for(file_path: str):
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter
    if suffix == ".json":
        return json_adapter
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _save_uploaded(uploaded_file) -> str:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        return handle.name


def _fmt_minutes(minutes: int) -> str:
    hours, rest = divmod(int(minutes), 60)
    if hours and rest:
        return f"{hours}h {rest}m"
    return f"{hours}h" if hours else f"{rest}m"


def run_planner(tasks_path: str, exams_path: str, budget: int, reference: date) -> dict[str, Any]:
    """Load inputs, plan the week and return a UI-friendly result payload."""

    tasks = _adapter_for(tasks_path).parse_tasks(tasks_path)
    exams = _adapter_for(exams_path).parse_exams(exams_path)
    plan = plan_week(tasks, exams, budget, reference)
    return {
        "plan": plan,
        "metrics": compute_schedule_metrics(plan.schedule),
        "workload": estimate_workload(plan.tasks, plan.exams, budget),
    }


def _render_week(st, plan: WeekPlan, budget: int) -> None:
    columns = st.columns(len(plan.schedule.days))
    for column, bucket in zip(columns, plan.schedule.days):
        column.markdown(f"**{bucket.date.strftime('%a %d %b')}**")
        column.progress(min(1.0, bucket.total_minutes / budget), text=_fmt_minutes(bucket.total_minutes))
        for session in bucket.sessions:
            icon = "📘" if session.type == "homework" else "📝"
            column.caption(f"{icon} {session.title} · {_fmt_minutes(session.duration)}")


def main() -> None:
    import streamlit as st

    defaults = PlannerConfig.from_env()

    st.set_page_config(page_title="Study Scheduler Demo", layout="wide")
    st.title("Study Scheduler: Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        tasks_upload = st.file_uploader("Upload tasks", type=["csv", "json"])
        exams_upload = st.file_uploader("Upload exams", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        budget = st.slider(
            "Daily study budget (minutes)",
            min_value=MIN_DAILY_BUDGET,
            max_value=MAX_DAILY_BUDGET,
            value=defaults.daily_budget_minutes,
            step=30,
        )
        reference = st.date_input("Week of", value=date(2025, 3, 10) if use_demo else date.today())
        run = st.button("Generate schedule", type="primary")

    if run:
        try:
            if use_demo:
                tasks_path, exams_path = DEMO_TASKS, DEMO_EXAMS
            elif tasks_upload is not None and exams_upload is not None:
                tasks_path, exams_path = _save_uploaded(tasks_upload), _save_uploaded(exams_upload)
            else:
                st.error("Please upload both tasks and exams files or enable 'Load demo dataset'.")
                return
            st.session_state["result"] = run_planner(tasks_path, exams_path, int(budget), reference)
            st.session_state["budget"] = int(budget)
        except ValueError as exc:
            st.error(f"Input error: {exc}")
            return

    result = st.session_state.get("result")
    if result is None:
        st.info("Configure inputs in the sidebar and click **Generate schedule**.")
        return

    plan: WeekPlan = result["plan"]
    budget = st.session_state["budget"]

    st.subheader("A) Weekly Schedule")
    _render_week(st, plan, budget)

    st.subheader("B) Validation")
    report = plan.report
    if report.is_valid:
        st.success("All checks passed.")
    else:
        st.warning("Some items could not be fully scheduled.")
    st.table([report.details])
    if report.shortfalls:
        st.table([item.to_dict() for item in report.shortfalls])

    st.subheader("C) Metrics")
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Sessions", result["metrics"]["total_sessions"])
    m2.metric("Scheduled", _fmt_minutes(result["metrics"]["total_minutes"]))
    m3.metric("Workload", _fmt_minutes(result["workload"]["total_minutes"]))
    m4.metric("Days needed", result["workload"]["estimated_days"])

    st.subheader("D) Reschedule a Missed Session")
    sessions = plan.schedule.sessions()
    if not sessions:
        st.write("No sessions to reschedule.")
        return
    labels = {f"{s.date.isoformat()} · {s.title} ({s.duration}m)": s for s in sessions}
    choice = st.selectbox("Session", options=list(labels))
    if st.button("Mark missed and reschedule"):
        missed = labels[choice]
        missed.status = "missed"
        outcome = reschedule_missed_session(missed, sessions, budget, horizon_days=defaults.reschedule_horizon_days)
        if not outcome.sessions:
            st.error("No free capacity in the next days; the session could not be rescheduled.")
        elif outcome.is_partial:
            st.warning(f"Only {_fmt_minutes(outcome.scheduled_minutes)} could be rescheduled.")
        else:
            st.success(f"Rescheduled {_fmt_minutes(outcome.scheduled_minutes)}.")
        st.table([session.to_dict() for session in outcome.sessions])

        outside = add_sessions(plan.schedule, outcome.sessions)
        if outside:
            st.caption(f"{len(outside)} session(s) land after this week and stay out of the weekly view.")
        plan.report = validate_schedule(plan.schedule, plan.tasks, plan.exams, budget)
        result["metrics"] = compute_schedule_metrics(plan.schedule)
        st.session_state["result"] = result
        st.info("The weekly schedule above refreshes with these sessions on the next interaction.")


if __name__ == "__main__":
    main()
