from __future__ import annotations

from typing import Dict, Iterable, List

from wo_scheduler.core.domain.enums import DependencyType
from wo_scheduler.core.domain.task import Task


def shift_children(
    tasks: Iterable[Task],
    parent_id: str,
    delta_days: int,
    force: bool = False,
) -> list[str]:
    """
    Drag the descendants of parent_id along with it by delta_days.

    SS children (and everything below them) stay put unless force is set; the
    solver decides where they land. A task reached twice stops the walk there,
    so a malformed cyclic graph cannot recurse forever. Returns the shifted ids
    in visit order. Does not run the solver.
    """
    if not delta_days:
        return []

    children: Dict[str, List[Task]] = {}
    for task in tasks:
        if task.depends_on:
            children.setdefault(task.depends_on, []).append(task)

    shifted: list[str] = []
    visited: set[str] = {parent_id}
    stack: list[Task] = list(reversed(children.get(parent_id, [])))
    while stack:
        child = stack.pop()
        if child.id in visited:
            continue
        if not force and child.dependency_type == DependencyType.START_TO_START:
            continue
        visited.add(child.id)
        child.shift(delta_days)
        shifted.append(child.id)
        stack.extend(reversed(children.get(child.id, [])))
    return shifted


__all__ = ["shift_children"]
