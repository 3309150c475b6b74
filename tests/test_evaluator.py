from datetime import date, timedelta

from study_scheduler.evaluator import validate_schedule
from study_scheduler.schema import Exam, Session, Task
from study_scheduler.scheduling import build_schedule, plan_week

START = date(2025, 3, 10)


def day(offset):
    return START + timedelta(days=offset)


def session(source_id, offset, duration, kind="homework"):
    return Session(f"{source_id}-{offset}", kind, source_id, source_id, "X", day(offset), duration)


def test_fully_scheduled_week_is_valid():
    plan = plan_week([Task("t1", "Essay", "English", day(2), 120)], [Exam("e1", "Physics", day(5), 240)], 480, START)
    assert plan.report.is_valid
    assert all(plan.report.details.values())
    assert plan.report.shortfalls == []


def test_task_before_window_is_a_full_shortfall():
    plan = plan_week([Task("t1", "Overdue", "History", day(-3), 90)], [], 480, START)
    assert plan.schedule.sessions() == []
    assert [item.to_dict() for item in plan.report.shortfalls] == [
        {"id": "t1", "name": "Overdue", "type": "homework", "missingMinutes": 90}
    ]
    assert plan.report.details["noDeadlineViolations"] is False
    assert plan.report.details["allTasksScheduled"] is False
    assert not plan.report.is_valid


def test_missing_minutes_match_unplaced_time():
    task = Task("t1", "Project", "CS", day(20), 4000)
    plan = plan_week([task], [], 480, START)
    scheduled = sum(s.duration for s in plan.schedule.sessions())
    assert scheduled <= task.estimated_time
    assert plan.report.shortfalls[0].missing_minutes == task.estimated_time - scheduled == 640
    assert plan.report.details["noDeadlineViolations"] is True


def test_session_after_deadline_is_a_violation():
    task = Task("t1", "Essay", "English", day(1), 60)
    schedule = build_schedule([session("t1", 0, 30), session("t1", 2, 30)], START)
    report = validate_schedule(schedule, [task], [], 480)
    assert report.details["noDeadlineViolations"] is False
    assert report.details["allTasksScheduled"] is True


def test_exam_with_two_sessions_fails_distribution():
    exam = Exam("e1", "Physics", day(5), 120)
    schedule = build_schedule([session("e1", 0, 60, "exam_revision"), session("e1", 1, 60, "exam_revision")], START)
    report = validate_schedule(schedule, [], [exam], 480)
    assert report.details["examDistribution"] is False
    assert report.shortfalls == []


def test_over_budget_day_is_flagged():
    schedule = build_schedule([session("t1", 0, 300), session("t2", 0, 300)], START)
    tasks = [Task("t1", "A", "X", day(3), 300), Task("t2", "B", "X", day(3), 300)]
    report = validate_schedule(schedule, tasks, [], 480)
    assert report.details["studySessionLimitRespected"] is False
    assert not report.is_valid


def test_task_and_exam_with_same_id_are_counted_separately():
    schedule = build_schedule(
        [session("1", 0, 60), session("1", 1, 40, "exam_revision"), session("1", 2, 40, "exam_revision")],
        START,
    )
    report = validate_schedule(schedule, [Task("1", "Worksheet", "X", day(3), 60)], [Exam("1", "Art", day(4), 80)], 480)
    assert report.shortfalls == []
    assert report.details["examDistribution"] is False


def test_report_serializes_with_original_keys():
    plan = plan_week([], [Exam("e1", "Physics", day(5), 240)], 480, START)
    payload = plan.report.to_dict()
    assert set(payload) == {"isValid", "details", "shortfalls"}
    assert set(payload["details"]) == {
        "allTasksScheduled",
        "noDeadlineViolations",
        "examDistribution",
        "studySessionLimitRespected",
    }
