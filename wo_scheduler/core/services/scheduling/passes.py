from __future__ import annotations

import logging
from typing import Dict, List

from wo_scheduler.core.domain.enums import DependencyType
from wo_scheduler.core.domain.task import Task
from wo_scheduler.core.exceptions import ScheduleCycleError
from wo_scheduler.core.services.scheduling.graph import resolve_parent

logger = logging.getLogger(__name__)


def _budget_exhausted(pass_name: str, limit: int, strict: bool) -> None:
    if strict:
        raise ScheduleCycleError(
            f"CPM {pass_name} pass did not settle within {limit} passes.",
            code="SCHEDULE_NOT_CONVERGED",
        )
    logger.warning("CPM %s pass stopped at the %s-pass cap without converging", pass_name, limit)


def run_forward_pass(
    task_list: List[Task],
    tasks_by_id: Dict[str, Task],
    durations: Dict[str, int],
    max_iterations: int,
    strict: bool,
) -> tuple[Dict[str, int], Dict[str, int]]:
    es: Dict[str, int] = {task.id: 0 for task in task_list}
    ef: Dict[str, int] = {task.id: durations[task.id] for task in task_list}

    for _ in range(max_iterations):
        changed = False
        for task in task_list:
            parent = resolve_parent(task, tasks_by_id)
            if parent is None:
                continue
            net = task.net_offset
            if task.dependency_type == DependencyType.START_TO_START:
                candidate = es[parent.id] + net
            else:
                candidate = ef[parent.id] + net
            if candidate > es[task.id]:
                es[task.id] = candidate
                ef[task.id] = candidate + durations[task.id]
                changed = True
        if not changed:
            return es, ef

    _budget_exhausted("forward", max_iterations, strict)
    return es, ef


def run_backward_pass(
    task_list: List[Task],
    children_by_parent: Dict[str, List[Task]],
    durations: Dict[str, int],
    horizon: int,
    max_iterations: int,
    strict: bool,
) -> tuple[Dict[str, int], Dict[str, int]]:
    lf: Dict[str, int] = {task.id: horizon for task in task_list}
    ls: Dict[str, int] = {task.id: horizon - durations[task.id] for task in task_list}

    for _ in range(max_iterations):
        changed = False
        for task in task_list:
            duration = durations[task.id]
            for child in children_by_parent.get(task.id, []):
                net = child.net_offset
                if child.dependency_type == DependencyType.START_TO_START:
                    # ES[child] >= ES[task] + net  =>  LS[task] <= LS[child] - net
                    candidate_lf = ls[child.id] - net + duration
                else:
                    # ES[child] >= EF[task] + net  =>  LF[task] <= LS[child] - net
                    candidate_lf = ls[child.id] - net
                if candidate_lf < lf[task.id]:
                    lf[task.id] = candidate_lf
                    ls[task.id] = candidate_lf - duration
                    changed = True
        if not changed:
            return ls, lf

    _budget_exhausted("backward", max_iterations, strict)
    return ls, lf


__all__ = ["run_forward_pass", "run_backward_pass"]
