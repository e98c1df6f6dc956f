# tests/helpers.py
from datetime import date, timedelta

from wo_scheduler.core.domain import DependencyType, Task

ORIGIN = date(2024, 3, 1)


def day(n: int) -> date:
    """Calendar date of schedule day n (day 1 == ORIGIN)."""
    return ORIGIN + timedelta(days=n - 1)


def make_task(
    task_id: str,
    start: int,
    duration: int,
    depends_on: str = "",
    dependency_type: DependencyType = DependencyType.FINISH_TO_START,
    lag: int = 0,
    lead: int = 0,
    **extra,
) -> Task:
    return Task(
        id=task_id,
        title=f"Task {task_id}",
        start=day(start),
        end=day(start + duration - 1),
        depends_on=depends_on,
        dependency_type=dependency_type,
        lag_days=lag,
        lead_days=lead,
        **extra,
    )
