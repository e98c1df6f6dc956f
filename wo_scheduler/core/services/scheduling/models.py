from __future__ import annotations

from dataclasses import dataclass

from wo_scheduler.core.domain.task import Task


@dataclass
class CPMTaskInfo:
    """CPM times are whole-day offsets from the schedule origin (day 0)."""
    task: Task
    duration_days: int
    earliest_start: int
    earliest_finish: int
    latest_start: int
    latest_finish: int
    total_float_days: int
    is_critical: bool
