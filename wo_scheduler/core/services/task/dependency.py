from __future__ import annotations

import logging

from wo_scheduler.core.domain.enums import DependencyType
from wo_scheduler.core.domain.task import Task
from wo_scheduler.core.services.scheduling.engine import SchedulingEngine
from wo_scheduler.core.services.task.store import TaskStore

logger = logging.getLogger(__name__)


class TaskDependencyMixin:
    _store: TaskStore
    _engine: SchedulingEngine

    def set_dependency(
        self,
        task_id: str,
        parent_id: str,
        dependency_type: DependencyType | str = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
        lead_days: int = 0,
    ) -> Task:
        """Link task_id to its (single) parent, replacing any previous link."""
        task = self._store.require(task_id)
        dependency_type = self._validate_dependency_type(dependency_type)
        diagnostic = self.get_dependency_diagnostics(
            task_id=task_id,
            parent_id=parent_id,
            dependency_type=dependency_type,
            lag_days=lag_days,
            lead_days=lead_days,
            include_impact=False,
        )
        self._raise_for_diagnostic(diagnostic)

        with self._undoable("dependency.set"):
            task.depends_on = parent_id
            task.dependency_type = dependency_type
            task.lag_days = int(lag_days or 0)
            task.lead_days = int(lead_days or 0)
        logger.info(
            "Linked task %s to parent %s (%s, lag=%s, lead=%s)",
            task_id,
            parent_id,
            dependency_type.value,
            task.lag_days,
            task.lead_days,
        )
        self._events.tasks_changed.emit(self._store.schedule_id)
        return task

    def clear_dependency(self, task_id: str) -> Task:
        task = self._store.require(task_id)
        if not task.depends_on:
            return task
        with self._undoable("dependency.clear"):
            task.depends_on = ""
            task.lag_days = 0
            task.lead_days = 0
        logger.info("Removed dependency from task %s", task_id)
        self._events.tasks_changed.emit(self._store.schedule_id)
        return task
