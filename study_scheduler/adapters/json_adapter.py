"""JSON adapter for tasks, exams and sessions."""

from __future__ import annotations

import json
from typing import Callable, TypeVar

from study_scheduler.schema import Exam, Session, Task
from study_scheduler.validation import exam_from_mapping, session_from_mapping, task_from_mapping

T = TypeVar("T")


def _read_items(file_path: str, build: Callable[[dict, str], T]) -> list[T]:
    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    records: list[T] = []
    for index, item in enumerate(payload, start=1):
        if not isinstance(item, dict):
            raise ValueError(f"Item {index}: expected an object")
        records.append(build(item, f"Item {index}"))
    return records


def parse_tasks(file_path: str) -> list[Task]:
    """Parse a JSON list of homework tasks."""

    return _read_items(file_path, task_from_mapping)


def parse_exams(file_path: str) -> list[Exam]:
    """Parse a JSON list of exams."""

    return _read_items(file_path, exam_from_mapping)


def parse_sessions(file_path: str) -> list[Session]:
    """Parse a JSON list of sessions, e.g. a saved week."""

    return _read_items(file_path, session_from_mapping)


def write_sessions(file_path: str, sessions: list[Session]) -> None:
    """Write sessions in the same shape ``parse_sessions`` reads."""

    with open(file_path, "w", encoding="utf-8") as handle:
        json.dump([session.to_dict() for session in sessions], handle, indent=2)
