from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from wo_scheduler.core.events.domain_events import DomainEvents
from wo_scheduler.core.services.scheduling.engine import SchedulingEngine

if TYPE_CHECKING:
    from wo_scheduler.core.services.task.store import TaskStore

logger = logging.getLogger(__name__)


class ServiceBase:
    def __init__(self, store: "TaskStore", engine: SchedulingEngine):
        self._store: "TaskStore" = store
        self._engine: SchedulingEngine = engine

    @property
    def _events(self) -> DomainEvents:
        return self._engine.events

    @contextmanager
    def _undoable(self, action: str) -> Iterator[None]:
        """
        Snapshot, let the caller mutate, then settle the schedule.
        Any failure restores the snapshot and drops it from the history.
        """
        self._store.push_history()
        try:
            yield
            self._engine.recompute()
        except Exception as exc:
            self._store.rollback_history()
            logger.error("Error during %s on schedule %s: %s", action, self._store.schedule_id, exc)
            raise
        self._events.history_changed.emit(self._store.schedule_id)
