from __future__ import annotations

from typing import Dict, List, Optional

from wo_scheduler.core.domain.task import Task
from wo_scheduler.core.services.task.store import TaskStore

DEFAULT_AIRCRAFT_REG = "AC REG"


class TaskQueryMixin:
    _store: TaskStore

    def get_task(self, task_id: str) -> Optional[Task]:
        return self._store.get(task_id)

    def list_tasks(self) -> List[Task]:
        return list(self._store)

    def list_children(self, task_id: str) -> List[Task]:
        return self._store.children_of(task_id)

    def list_work_orders(self) -> Dict[str, str]:
        """Work order -> aircraft registration, first-seen order, blanks skipped."""
        work_orders: Dict[str, str] = {}
        for task in self._store:
            wo = str(task.work_order or "").strip()
            if not wo:
                continue
            # a later task with a registration wins over the placeholder
            reg = (task.aircraft_reg or "").strip()
            if wo not in work_orders or (reg and work_orders[wo] == DEFAULT_AIRCRAFT_REG):
                work_orders[wo] = reg or DEFAULT_AIRCRAFT_REG
        return work_orders

    def tasks_for_work_order(self, work_order: str) -> List[Task]:
        wo = str(work_order or "").strip()
        return [task for task in self._store if str(task.work_order or "").strip() == wo]
