"""CSV adapter for tasks, exams and sessions."""

from __future__ import annotations

import csv
from typing import Callable, TypeVar

from study_scheduler.schema import Exam, Session, Task
from study_scheduler.validation import exam_from_mapping, session_from_mapping, task_from_mapping

T = TypeVar("T")

_TASK_FIELDS = {"id", "name", "subject", "deadline"}
_EXAM_FIELDS = {"id", "subject", "date"}
_SESSION_FIELDS = {"id", "type", "source_id", "date", "duration"}


def _read_rows(file_path: str, required: set[str], build: Callable[[dict, str], T]) -> list[T]:
    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        missing = sorted(required - {name.strip() for name in reader.fieldnames})
        if missing:
            raise ValueError(f"Header: missing required columns {missing}")

        records: list[T] = []
        for row_number, row in enumerate(reader, start=2):
            row = {key.strip(): value for key, value in row.items() if key}
            records.append(build(row, f"Row {row_number}"))
        return records


def parse_tasks(file_path: str) -> list[Task]:
    """Parse a CSV file of homework tasks."""

    return _read_rows(file_path, _TASK_FIELDS, task_from_mapping)


def parse_exams(file_path: str) -> list[Exam]:
    """Parse a CSV file of exams."""

    return _read_rows(file_path, _EXAM_FIELDS, exam_from_mapping)


def parse_sessions(file_path: str) -> list[Session]:
    """Parse a CSV file of previously scheduled sessions."""

    return _read_rows(file_path, _SESSION_FIELDS, session_from_mapping)
