from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from wo_scheduler.core.domain.dates import days_between, format_date, parse_date
from wo_scheduler.core.domain.enums import DependencyType
from wo_scheduler.core.domain.task import Task
from wo_scheduler.core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from wo_scheduler.core.services.scheduling.engine import SchedulingEngine
from wo_scheduler.core.services.task.store import TaskStore


logger = logging.getLogger(__name__)


class TaskLifecycleMixin:
    _store: TaskStore
    _engine: SchedulingEngine

    def create_task(
        self,
        title: str,
        start: date | str,
        end: date | str,
        *,
        task_id: Optional[str] = None,
        depends_on: str = "",
        dependency_type: DependencyType | str = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
        lead_days: int = 0,
        **payload,
    ) -> Task:
        title = self._validate_title(title)
        start_date, end_date = self._validate_dates(start, end)
        dependency_type = self._validate_dependency_type(dependency_type)
        self._validate_offsets(lag_days, lead_days)
        payload = self._validate_payload(payload)

        task = Task.create(
            title=title,
            start=start_date,
            end=end_date,
            depends_on=depends_on or "",
            dependency_type=dependency_type,
            lag_days=int(lag_days or 0),
            lead_days=int(lead_days or 0),
            row=len(self._store),
            **payload,
        )
        if task_id:
            task.id = task_id
            if task_id in self._store:
                raise ValidationError(f"Duplicate task id '{task_id}'.", code="TASK_DUPLICATE_ID")

        if task.depends_on:
            diagnostic = self.get_dependency_diagnostics(
                task.id,
                task.depends_on,
                dependency_type=dependency_type,
                lag_days=task.lag_days,
                lead_days=task.lead_days,
                include_impact=False,
            )
            self._raise_for_diagnostic(diagnostic)

        with self._undoable("task.create"):
            self._store.add(task)
        logger.info("Created task %s - %s in schedule %s", task.id, task.title, self._store.schedule_id)
        self._events.tasks_changed.emit(self._store.schedule_id)
        return task

    def delete_task(self, task_id: str) -> Task:
        task = self._store.require(task_id)
        with self._undoable("task.delete"):
            self._store.remove(task_id)
            for index, remaining in enumerate(self._store):
                remaining.row = index
        # children keep their stale depends_on; the link is simply inert now
        logger.info("Deleted task %s - %s", task.id, task.title)
        self._events.tasks_changed.emit(self._store.schedule_id)
        return task

    def update_task(
        self,
        task_id: str,
        title: str | None = None,
        **payload,
    ) -> Task:
        """Edit display fields and payload; scheduling fields have their own operations."""
        task = self._store.require(task_id)
        payload = self._validate_payload(payload)
        new_title = self._validate_title(title) if title is not None else None
        with self._undoable("task.update"):
            if new_title is not None:
                task.title = new_title
            for key, value in payload.items():
                setattr(task, key, value)
        return task

    def move_task(self, task_id: str, new_start: date | str, *, force: bool = False) -> Task:
        """
        Drag a bar to a new start date. Descendants follow by the same delta
        (SS children only with force); the solver then settles the rest, which
        pins an FS child back to its parent.
        """
        task = self._store.require(task_id)
        target = parse_date(new_start)
        delta = days_between(task.start, target)
        if delta == 0:
            return task
        with self._undoable("task.move"):
            task.move_to(target)
            self._engine.shift_children(task.id, delta, force=force)
        logger.info("Moved task %s to %s (%+d day(s))", task.id, format_date(task.start), delta)
        return task

    def resize_task(
        self,
        task_id: str,
        new_start: date | str | None = None,
        new_end: date | str | None = None,
    ) -> Task:
        """Drag either handle of a bar; the task never shrinks below one day."""
        task = self._store.require(task_id)
        start = parse_date(new_start) if new_start is not None else task.start
        end = parse_date(new_end) if new_end is not None else task.end
        if end < start:
            end = start
        end_delta = days_between(task.end, end)
        if start == task.start and end_delta == 0:
            return task
        with self._undoable("task.resize"):
            task.start = start
            task.end = end
            self._engine.shift_children(task.id, end_delta)
        return task

    def set_duration(self, task_id: str, days: int) -> Task:
        task = self._store.require(task_id)
        duration = self._validate_duration(days)
        old_end = task.end
        with self._undoable("task.set_duration"):
            task.set_duration(duration)
            self._engine.shift_children(task.id, days_between(old_end, task.end))
        return task

    def move_row(self, task_id: str, new_index: int) -> list[Task]:
        """Manual reorder; rows are renumbered 0..n-1."""
        task = self._store.require(task_id)
        ordered = [t for t in self._store if t.id != task.id]
        index = min(max(0, int(new_index)), len(ordered))
        ordered.insert(index, task)
        with self._undoable("task.move_row"):
            self._store.reorder(ordered)
        self._events.tasks_changed.emit(self._store.schedule_id)
        return list(self._store)

    def organize_rows(self) -> list[Task]:
        """Re-sort into waterfall order as an undoable step."""
        with self._undoable("task.organize"):
            ordered = self._engine.organize()
        self._events.tasks_changed.emit(self._store.schedule_id)
        return ordered

    def undo(self) -> bool:
        if not self._store.undo():
            return False
        self._after_history_move()
        return True

    def redo(self) -> bool:
        if not self._store.redo():
            return False
        self._after_history_move()
        return True

    def _after_history_move(self) -> None:
        self._engine.recompute()
        self._events.history_changed.emit(self._store.schedule_id)
        self._events.tasks_changed.emit(self._store.schedule_id)

    def _raise_for_diagnostic(self, diagnostic) -> None:
        if diagnostic.is_valid:
            return
        message = diagnostic.summary
        if diagnostic.detail:
            message = f"{diagnostic.summary}\n{diagnostic.detail}"
        if diagnostic.code == "TASK_NOT_FOUND":
            raise NotFoundError(message, code=diagnostic.code)
        if diagnostic.code in ("DEPENDENCY_CYCLE", "SCHEDULE_CYCLE"):
            raise BusinessRuleError(message, code=diagnostic.code)
        raise ValidationError(message, code=diagnostic.code)
