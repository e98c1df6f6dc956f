from __future__ import annotations

import json
import logging
from collections import deque
from typing import Dict, Iterable, Iterator, List, Optional

from wo_scheduler.core.domain.task import Task
from wo_scheduler.core.exceptions import NotFoundError, ValidationError
from wo_scheduler.infra.settings import DEFAULT_HISTORY_LIMIT

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Ordered, in-memory task collection for one schedule plus a bounded
    undo/redo history of full-collection JSON snapshots.

    The list returned by `tasks` is the live collection; restoring a snapshot
    replaces its contents without replacing the list object.
    """

    def __init__(
        self,
        tasks: Iterable[Task] = (),
        *,
        schedule_id: str = "default",
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self.schedule_id: str = schedule_id
        self._tasks: List[Task] = []
        self._undo: deque[str] = deque(maxlen=max(1, int(history_limit)))
        self._redo: List[str] = []
        self._redo_before_push: List[str] = []
        self._evicted_on_push: Optional[str] = None
        for task in tasks:
            self.add(task)

    # ---- collection ----

    @property
    def tasks(self) -> List[Task]:
        return self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return any(task.id == task_id for task in self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def require(self, task_id: str) -> Task:
        task = self.get(task_id)
        if task is None:
            raise NotFoundError(f"Task '{task_id}' not found.", code="TASK_NOT_FOUND")
        return task

    def by_id(self) -> Dict[str, Task]:
        return {task.id: task for task in self._tasks}

    def index_of(self, task_id: str) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise NotFoundError(f"Task '{task_id}' not found.", code="TASK_NOT_FOUND")

    def children_of(self, task_id: str) -> List[Task]:
        return [task for task in self._tasks if task.depends_on == task_id]

    def add(self, task: Task) -> Task:
        if task.id in self:
            raise ValidationError(f"Duplicate task id '{task.id}'.", code="TASK_DUPLICATE_ID")
        self._tasks.append(task)
        return task

    def remove(self, task_id: str) -> Task:
        task = self.require(task_id)
        self._tasks.remove(task)
        return task

    def replace_all(self, tasks: Iterable[Task]) -> None:
        incoming = list(tasks)
        ids = [task.id for task in incoming]
        if len(ids) != len(set(ids)):
            raise ValidationError("Duplicate task ids in replacement set.", code="TASK_DUPLICATE_ID")
        self._tasks[:] = incoming

    def reorder(self, ordered: Iterable[Task]) -> None:
        ordered = list(ordered)
        if sorted(t.id for t in ordered) != sorted(t.id for t in self._tasks):
            raise ValidationError(
                "Reordered tasks do not match the stored task set.",
                code="TASK_SET_MISMATCH",
            )
        current = self.by_id()
        self._tasks[:] = [current[task.id] for task in ordered]
        for index, task in enumerate(self._tasks):
            task.row = index

    # ---- history ----

    def snapshot(self) -> str:
        return json.dumps([task.to_dict() for task in self._tasks], sort_keys=True)

    def restore(self, snapshot: str) -> None:
        self._tasks[:] = [Task.from_dict(item) for item in json.loads(snapshot)]

    def push_history(self) -> None:
        """Record the current state; call right before an undoable mutation."""
        snapshot = self.snapshot()
        # a full stack evicts its oldest entry; keep it so a rollback can put it back
        self._evicted_on_push = self._undo[0] if len(self._undo) == self._undo.maxlen else None
        self._undo.append(snapshot)
        self._redo_before_push = self._redo
        self._redo = []

    def rollback_history(self) -> bool:
        """Abandon the last push: restore its snapshot and drop it from the stack."""
        if not self._undo:
            return False
        self.restore(self._undo.pop())
        if self._evicted_on_push is not None:
            self._undo.appendleft(self._evicted_on_push)
            self._evicted_on_push = None
        self._redo = self._redo_before_push
        self._redo_before_push = []
        return True

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append(self.snapshot())
        self.restore(self._undo.pop())
        logger.debug("Undo on schedule %s (%s step(s) left)", self.schedule_id, len(self._undo))
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append(self.snapshot())
        self.restore(self._redo.pop())
        logger.debug("Redo on schedule %s (%s step(s) left)", self.schedule_id, len(self._redo))
        return True

    def clear_history(self) -> None:
        self._undo.clear()
        self._redo.clear()
        self._redo_before_push = []
        self._evicted_on_push = None


__all__ = ["TaskStore"]
