from __future__ import annotations

from typing import Dict, Iterable

from wo_scheduler.core.domain.dates import inclusive_duration
from wo_scheduler.core.domain.task import Task
from wo_scheduler.core.services.scheduling.graph import (
    build_children_map,
    ensure_acyclic,
    index_tasks,
)
from wo_scheduler.core.services.scheduling.models import CPMTaskInfo
from wo_scheduler.core.services.scheduling.passes import run_backward_pass, run_forward_pass
from wo_scheduler.infra.settings import (
    CYCLE_POLICY_STRICT,
    DEFAULT_MAX_ITERATIONS,
    normalize_cycle_policy,
)

CRITICAL_EPSILON = 1e-4


def analyze_critical_path(
    tasks: Iterable[Task],
    *,
    max_iterations: int | None = None,
    cycle_policy: str | None = None,
) -> Dict[str, CPMTaskInfo]:
    """
    Two-pass CPM over the single-parent FS/SS graph.

    Every task starts at day 0 in the forward pass; links push successors
    later, never earlier. The horizon (max EF) anchors the backward pass.
    Works on day offsets only and never mutates the tasks.
    """
    task_list = list(tasks)
    if not task_list:
        return {}

    tasks_by_id = index_tasks(task_list)
    limit = max(1, int(max_iterations or DEFAULT_MAX_ITERATIONS))
    strict = normalize_cycle_policy(cycle_policy) == CYCLE_POLICY_STRICT
    if strict:
        ensure_acyclic(tasks_by_id)
        # a verified forest settles within depth + 1 passes
        limit = max(limit, len(task_list) + 1)

    durations = {task.id: inclusive_duration(task.start, task.end) for task in task_list}

    es, ef = run_forward_pass(task_list, tasks_by_id, durations, limit, strict)
    horizon = max(ef.values())
    ls, lf = run_backward_pass(
        task_list,
        build_children_map(task_list, tasks_by_id),
        durations,
        horizon,
        limit,
        strict,
    )

    result: Dict[str, CPMTaskInfo] = {}
    for task_id, task in tasks_by_id.items():
        slack = ls[task_id] - es[task_id]
        result[task_id] = CPMTaskInfo(
            task=task,
            duration_days=durations[task_id],
            earliest_start=es[task_id],
            earliest_finish=ef[task_id],
            latest_start=ls[task_id],
            latest_finish=lf[task_id],
            total_float_days=slack,
            is_critical=abs(slack) < CRITICAL_EPSILON,
        )
    return result


def compute_critical_path(
    tasks: Iterable[Task],
    *,
    max_iterations: int | None = None,
    cycle_policy: str | None = None,
) -> set[str]:
    schedule = analyze_critical_path(tasks, max_iterations=max_iterations, cycle_policy=cycle_policy)
    return {task_id for task_id, info in schedule.items() if info.is_critical}


__all__ = ["CRITICAL_EPSILON", "analyze_critical_path", "compute_critical_path"]
