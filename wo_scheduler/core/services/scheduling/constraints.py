from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from wo_scheduler.core.domain.dates import add_days
from wo_scheduler.core.domain.enums import DependencyType
from wo_scheduler.core.domain.task import Task
from wo_scheduler.core.exceptions import ScheduleCycleError
from wo_scheduler.core.services.scheduling.graph import ensure_acyclic, index_tasks, resolve_parent
from wo_scheduler.infra.settings import (
    CYCLE_POLICY_STRICT,
    DEFAULT_MAX_ITERATIONS,
    normalize_cycle_policy,
)

logger = logging.getLogger(__name__)


@dataclass
class SolveResult:
    iterations: int
    converged: bool
    moved_task_ids: set[str] = field(default_factory=set)


def constraint_target(task: Task, parent: Task) -> date:
    """Start date the link from parent demands for task."""
    if task.dependency_type == DependencyType.START_TO_START:
        return add_days(parent.start, task.net_offset)
    return add_days(parent.end, 1 + task.net_offset)


def is_pinned(task: Task) -> bool:
    """
    FS links pin the child to its target. SS links pin it only when an offset
    is set; a bare SS link is a "no earlier than" floor.
    """
    if task.dependency_type != DependencyType.START_TO_START:
        return True
    return bool(task.lag_days) or bool(task.lead_days)


def solve(
    tasks: Iterable[Task],
    *,
    max_iterations: int | None = None,
    cycle_policy: str | None = None,
) -> SolveResult:
    """
    Relax every parent link until no start date moves.

    Mutates start/end in place (durations are kept). Links to unknown parents
    are ignored. Under the strict policy a cyclic graph raises
    ScheduleCycleError before any date changes, and exhausting the pass budget
    raises SCHEDULE_NOT_CONVERGED; under the cutoff policy the loop simply
    stops at the cap.
    """
    task_list = list(tasks)
    tasks_by_id = index_tasks(task_list)
    limit = max(1, int(max_iterations or DEFAULT_MAX_ITERATIONS))
    strict = normalize_cycle_policy(cycle_policy) == CYCLE_POLICY_STRICT

    if strict:
        ensure_acyclic(tasks_by_id)
        # a verified forest settles within depth + 1 passes
        limit = max(limit, len(task_list) + 1)

    moved: set[str] = set()
    for iteration in range(1, limit + 1):
        changed = False
        for task in task_list:
            parent = resolve_parent(task, tasks_by_id)
            if parent is None:
                continue
            target = constraint_target(task, parent)
            if is_pinned(task):
                needs_move = task.start != target
            else:
                needs_move = task.start < target
            if needs_move:
                task.move_to(target)
                moved.add(task.id)
                changed = True
        if not changed:
            logger.debug(
                "Constraint solver converged after %s pass(es); %s task(s) moved",
                iteration,
                len(moved),
            )
            return SolveResult(iterations=iteration, converged=True, moved_task_ids=moved)

    if strict:
        raise ScheduleCycleError(
            f"Dependency constraints did not settle within {limit} passes.",
            code="SCHEDULE_NOT_CONVERGED",
        )
    logger.warning(
        "Constraint solver stopped at the %s-pass cap without converging; dates may be inconsistent",
        limit,
    )
    return SolveResult(iterations=limit, converged=False, moved_task_ids=moved)


__all__ = ["SolveResult", "constraint_target", "is_pinned", "solve"]
