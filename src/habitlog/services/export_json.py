"""JSON snapshot export/import for habits and their completion log."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from ..domain.habit import CompletionEvent, Habit

SNAPSHOT_VERSION = 1


def dump_snapshot(*, habits: Iterable[Habit], logs: Iterable[CompletionEvent]) -> str:
    payload = {
        "version": SNAPSHOT_VERSION,
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "habits": [habit.to_dict() for habit in habits],
        "logs": [event.to_dict() for event in logs],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def load_snapshot(text: str) -> tuple[list[Habit], list[CompletionEvent]]:
    """Parse :func:`dump_snapshot` output back into domain objects."""

    payload = json.loads(text)
    version = payload.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise ValueError(f"Unsupported snapshot version: {version}")
    habits = [Habit.from_dict(item) for item in payload.get("habits", [])]
    logs = [CompletionEvent.from_dict(item) for item in payload.get("logs", [])]
    return habits, logs


def export_snapshot(
    *, habits: Iterable[Habit], logs: Iterable[CompletionEvent], output_path: Path
) -> Path:
    """Write habits and logs to ``output_path`` and return the path written."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_snapshot(habits=habits, logs=logs), encoding="utf-8")
    return output_path


def import_snapshot(*, input_path: Path) -> tuple[list[Habit], list[CompletionEvent]]:
    return load_snapshot(input_path.read_text(encoding="utf-8"))


__all__ = [
    "SNAPSHOT_VERSION",
    "dump_snapshot",
    "export_snapshot",
    "import_snapshot",
    "load_snapshot",
]
