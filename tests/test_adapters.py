import json
from datetime import date

import pytest

from study_scheduler.adapters.csv_adapter import parse_exams as parse_exams_csv
from study_scheduler.adapters.csv_adapter import parse_sessions as parse_sessions_csv
from study_scheduler.adapters.csv_adapter import parse_tasks as parse_tasks_csv
from study_scheduler.adapters.json_adapter import parse_exams as parse_exams_json
from study_scheduler.adapters.json_adapter import parse_sessions as parse_sessions_json
from study_scheduler.adapters.json_adapter import parse_tasks as parse_tasks_json
from study_scheduler.adapters.json_adapter import write_sessions
from study_scheduler.schema import Session


def test_csv_tasks_parse_success(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text(
        "id,name,subject,deadline,estimated_time,status\n"
        "t1,Problem set,Maths,2025-03-11,150,pending\n"
        "t2,Reading log,English,2025-03-09,60,\n",
        encoding="utf-8",
    )
    tasks = parse_tasks_csv(str(path))
    assert len(tasks) == 2
    assert tasks[0].deadline == date(2025, 3, 11)
    assert tasks[0].estimated_time == 150
    assert tasks[1].status == "pending"


def test_csv_tasks_missing_column(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text("id,name,subject\nt1,Problem set,Maths\n", encoding="utf-8")
    with pytest.raises(ValueError, match="deadline"):
        parse_tasks_csv(str(path))


def test_csv_tasks_malformed_deadline(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text("id,name,subject,deadline,estimated_time\nt1,Essay,English,soon,90\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Row 2"):
        parse_tasks_csv(str(path))


@pytest.mark.parametrize("deadline", ["2025-03-12-oops", "2025-03-12garbage", "2025-13-01"])
def test_csv_tasks_rejects_malformed_iso_deadline(tmp_path, deadline):
    path = tmp_path / "tasks.csv"
    path.write_text(f"id,name,subject,deadline,estimated_time\nt1,Essay,English,{deadline},90\n", encoding="utf-8")
    with pytest.raises(ValueError, match="malformed deadline"):
        parse_tasks_csv(str(path))


def test_csv_tasks_accept_iso_datetime_deadline(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text("id,name,subject,deadline,estimated_time\nt1,Essay,English,2025-03-12T09:00:00,90\n", encoding="utf-8")
    assert parse_tasks_csv(str(path))[0].deadline == date(2025, 3, 12)


def test_csv_tasks_non_positive_estimate(tmp_path):
    path = tmp_path / "tasks.csv"
    path.write_text("id,name,subject,deadline,estimated_time\nt1,Essay,English,2025-03-12,0\n", encoding="utf-8")
    with pytest.raises(ValueError):
        parse_tasks_csv(str(path))


def test_csv_exams_optional_estimate(tmp_path):
    path = tmp_path / "exams.csv"
    path.write_text("id,subject,date,estimated_time\ne1,Physics,2025-03-15,\ne2,Biology,2025-03-13,180\n", encoding="utf-8")
    exams = parse_exams_csv(str(path))
    assert exams[0].estimated_time is None
    assert exams[0].required_minutes == 240
    assert exams[1].required_minutes == 180


def test_csv_sessions_parse_success(tmp_path):
    path = tmp_path / "sessions.csv"
    path.write_text(
        "id,type,source_id,title,subject,date,duration,status\n"
        "s1,homework,t1,Problem set,Maths,2025-03-10,90,missed\n"
        "s2,exam_revision,e1,Physics revision,Physics,2025-03-11,60,\n",
        encoding="utf-8",
    )
    sessions = parse_sessions_csv(str(path))
    assert [s.id for s in sessions] == ["s1", "s2"]
    assert sessions[0].status == "missed"
    assert sessions[0].duration == 90
    assert sessions[1].type == "exam_revision"
    assert sessions[1].date == date(2025, 3, 11)
    assert sessions[1].status == "planned"


def test_csv_sessions_bad_duration(tmp_path):
    path = tmp_path / "sessions.csv"
    path.write_text(
        "id,type,source_id,title,subject,date,duration\n"
        "s1,homework,t1,Problem set,Maths,2025-03-10,ninety\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="Row 2"):
        parse_sessions_csv(str(path))


def test_json_exams_accept_camel_case(tmp_path):
    path = tmp_path / "exams.json"
    path.write_text(json.dumps([{"id": "e1", "subject": "Physics", "date": "2025-03-15", "estimatedTime": 300}]), encoding="utf-8")
    exams = parse_exams_json(str(path))
    assert exams[0].estimated_time == 300


def test_json_tasks_payload_must_be_list(tmp_path):
    path = tmp_path / "tasks.json"
    path.write_text(json.dumps({"id": "t1"}), encoding="utf-8")
    with pytest.raises(ValueError):
        parse_tasks_json(str(path))


def test_json_tasks_unknown_status(tmp_path):
    path = tmp_path / "tasks.json"
    payload = [{"id": "t1", "name": "Essay", "subject": "English", "deadline": "2025-03-12", "estimatedTime": 60, "status": "later"}]
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValueError, match="Item 1"):
        parse_tasks_json(str(path))


def test_json_sessions_written_and_read_back(tmp_path):
    path = tmp_path / "sessions.json"
    sessions = [Session("s1", "homework", "t1", "Problem set", "Maths", date(2025, 3, 10), 90, "missed")]
    write_sessions(str(path), sessions)
    assert parse_sessions_json(str(path)) == sessions
