"""Deterministic session identities."""

from __future__ import annotations

import hashlib
from datetime import date
from typing import Callable

IdFactory = Callable[[str, str, date, int], str]


def make_session_id(prefix: str, source_id: str, day: date, sequence: int) -> str:
    """Hash (prefix, source, date, sequence) into a short stable id."""

    digest = hashlib.sha1(f"{prefix}|{source_id}|{day.isoformat()}|{sequence}".encode("utf-8")).hexdigest()
    return f"{prefix}-{digest[:12]}"
