from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from wo_scheduler.core.domain.task import Task
from wo_scheduler.core.exceptions import ScheduleCycleError


def index_tasks(tasks: Iterable[Task]) -> Dict[str, Task]:
    return {task.id: task for task in tasks}


def resolve_parent(task: Task, tasks_by_id: Dict[str, Task]) -> Optional[Task]:
    """Parent of task, or None when there is no link or the id is stale."""
    if not task.depends_on:
        return None
    return tasks_by_id.get(task.depends_on)


def build_children_map(tasks: Iterable[Task], tasks_by_id: Dict[str, Task]) -> Dict[str, List[Task]]:
    """parent id -> children in input order; only links whose parent exists."""
    children: Dict[str, List[Task]] = {}
    for task in tasks:
        if task.depends_on and task.depends_on in tasks_by_id:
            children.setdefault(task.depends_on, []).append(task)
    return children


def chain_member_ids(tasks_by_id: Dict[str, Task]) -> set[str]:
    """Ids on either end of at least one resolvable link."""
    members: set[str] = set()
    for task in tasks_by_id.values():
        if task.depends_on and task.depends_on in tasks_by_id:
            members.add(task.id)
            members.add(task.depends_on)
    return members


def find_cycle(tasks_by_id: Dict[str, Task]) -> list[str] | None:
    """
    Follow parent links from every task. With one parent per task a cycle is a
    closed walk; returns its ids in child -> parent order (first id repeated at
    the end), or None for a forest.
    """
    done: set[str] = set()
    for start_id in tasks_by_id:
        if start_id in done:
            continue
        path: list[str] = []
        on_path: dict[str, int] = {}
        current: str | None = start_id
        while current is not None and current in tasks_by_id and current not in done:
            if current in on_path:
                cycle = path[on_path[current]:]
                return [*cycle, current]
            on_path[current] = len(path)
            path.append(current)
            current = tasks_by_id[current].depends_on or None
        done.update(path)
    return None


def find_dependency_cycle_path(
    tasks_by_id: Dict[str, Task],
    child_id: str,
    parent_id: str,
) -> list[str] | None:
    """
    Would linking child_id -> parent_id close a loop?
    Walks the would-be ancestors of child_id (parent_id, its parent, ...) and
    returns the loop as [child_id, parent_id, ..., child_id] when child_id is
    reached.
    """
    if child_id == parent_id:
        return [child_id, child_id]
    path = [child_id]
    visited: set[str] = set()
    current: str | None = parent_id
    while current and current in tasks_by_id and current not in visited:
        path.append(current)
        if current == child_id:
            return path
        visited.add(current)
        current = tasks_by_id[current].depends_on or None
    return None


def describe_path(tasks_by_id: Dict[str, Task], ids: list[str]) -> str:
    return " -> ".join(
        (tasks_by_id[task_id].title or task_id) if task_id in tasks_by_id else task_id
        for task_id in ids
    )


def ensure_acyclic(tasks_by_id: Dict[str, Task]) -> None:
    cycle = find_cycle(tasks_by_id)
    if cycle:
        raise ScheduleCycleError(
            f"Cannot schedule: circular dependency detected ({describe_path(tasks_by_id, cycle)}).",
            cycle=cycle,
        )


__all__ = [
    "index_tasks",
    "resolve_parent",
    "build_children_map",
    "chain_member_ids",
    "find_cycle",
    "find_dependency_cycle_path",
    "describe_path",
    "ensure_acyclic",
]
