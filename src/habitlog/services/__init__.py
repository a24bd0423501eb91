"""Service module exports."""

from . import analytics, completion_index, completion_rate, export_json, habits, schedule, tracker

__all__ = [
    "analytics",
    "completion_index",
    "completion_rate",
    "export_json",
    "habits",
    "schedule",
    "tracker",
]
