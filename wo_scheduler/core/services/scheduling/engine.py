from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Dict, List, Optional

from wo_scheduler.core.domain.dates import add_days
from wo_scheduler.core.domain.task import Task
from wo_scheduler.core.events.domain_events import DomainEvents, domain_events
from wo_scheduler.core.services.scheduling.cascade import shift_children
from wo_scheduler.core.services.scheduling.constraints import SolveResult, solve
from wo_scheduler.core.services.scheduling.critical_path import (
    analyze_critical_path,
    compute_critical_path,
)
from wo_scheduler.core.services.scheduling.models import CPMTaskInfo
from wo_scheduler.core.services.scheduling.sequencer import organize
from wo_scheduler.infra.settings import SchedulerSettings, load_settings

if TYPE_CHECKING:
    from wo_scheduler.core.services.task.store import TaskStore

logger = logging.getLogger(__name__)


@dataclass
class ScheduleSnapshot:
    solve: SolveResult
    critical_task_ids: Optional[set[str]] = None
    order: Optional[List[str]] = None
    cpm: Dict[str, CPMTaskInfo] = field(default_factory=dict)


class SchedulingEngine:
    """
    Binds the scheduling operations to one TaskStore:
    - solve: settle FS/SS links (with lag/lead) in place
    - shift_children: cascade a direct date move to descendants
    - CPM: earliest/latest times and the zero-slack set
    - organize: waterfall row order
    recompute() runs them in the usual order and announces the result.
    """

    def __init__(
        self,
        store: "TaskStore",
        *,
        settings: SchedulerSettings | None = None,
        events: DomainEvents | None = None,
    ):
        self._store = store
        self._settings: SchedulerSettings = settings or load_settings()
        self._events: DomainEvents = events if events is not None else domain_events

    @property
    def store(self) -> "TaskStore":
        return self._store

    @property
    def settings(self) -> SchedulerSettings:
        return self._settings

    @property
    def events(self) -> DomainEvents:
        return self._events

    def solve(self) -> SolveResult:
        return solve(
            self._store,
            max_iterations=self._settings.max_iterations,
            cycle_policy=self._settings.cycle_policy,
        )

    def shift_children(self, parent_id: str, delta_days: int, force: bool = False) -> list[str]:
        return shift_children(self._store, parent_id, delta_days, force=force)

    def analyze_critical_path(self) -> Dict[str, CPMTaskInfo]:
        return analyze_critical_path(
            self._store,
            max_iterations=self._settings.max_iterations,
            cycle_policy=self._settings.cycle_policy,
        )

    def compute_critical_path(self) -> set[str]:
        return compute_critical_path(
            self._store,
            max_iterations=self._settings.max_iterations,
            cycle_policy=self._settings.cycle_policy,
        )

    def organize(self) -> List[Task]:
        ordered = organize(self._store)
        self._store.reorder(ordered)
        return ordered

    def recompute(self, *, critical: bool = False, organize: bool = False) -> ScheduleSnapshot:
        """
        Full recompute after a load or edit:
        - solve dependency constraints
        - optionally CPM (advisory, no mutation)
        - optionally waterfall re-sort
        then emits schedule_changed so views can redraw.
        """
        result = ScheduleSnapshot(solve=self.solve())
        if critical:
            result.cpm = self.analyze_critical_path()
            result.critical_task_ids = {
                task_id for task_id, info in result.cpm.items() if info.is_critical
            }
        if organize:
            result.order = [task.id for task in self.organize()]

        logger.debug(
            "Recomputed schedule %s: %s task(s), %s moved",
            self._store.schedule_id,
            len(self._store),
            len(result.solve.moved_task_ids),
        )
        self._events.schedule_changed.emit(self._store.schedule_id)
        return result

    def timeline_bounds(self, padding_days: int | None = None) -> tuple[date, date] | None:
        """(earliest start - padding, latest end), or None for an empty schedule."""
        tasks = list(self._store)
        if not tasks:
            return None
        padding = self._settings.timeline_padding_days if padding_days is None else padding_days
        first = min(task.start for task in tasks)
        last = max(task.end for task in tasks)
        return add_days(first, -padding), last


__all__ = ["SchedulingEngine", "ScheduleSnapshot"]
