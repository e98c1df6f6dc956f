from __future__ import annotations

from wo_scheduler.core.services.common.base import ServiceBase
from wo_scheduler.core.services.scheduling.engine import SchedulingEngine
from wo_scheduler.core.services.task.dependency import TaskDependencyMixin
from wo_scheduler.core.services.task.dependency_diagnostics import TaskDependencyDiagnosticsMixin
from wo_scheduler.core.services.task.lifecycle import TaskLifecycleMixin
from wo_scheduler.core.services.task.query import TaskQueryMixin
from wo_scheduler.core.services.task.store import TaskStore
from wo_scheduler.core.services.task.validation import TaskValidationMixin


class TaskService(
    TaskLifecycleMixin,
    TaskDependencyDiagnosticsMixin,
    TaskDependencyMixin,
    TaskQueryMixin,
    TaskValidationMixin,
    ServiceBase,
):
    """
    Edit operations on one schedule. Every mutation is undoable and is
    followed by a recompute (which emits schedule_changed).
    """

    def __init__(self, store: TaskStore, engine: SchedulingEngine | None = None):
        super().__init__(store, engine or SchedulingEngine(store))

    @property
    def store(self) -> TaskStore:
        return self._store

    @property
    def engine(self) -> SchedulingEngine:
        return self._engine
