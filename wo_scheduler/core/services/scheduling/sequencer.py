from __future__ import annotations

from typing import Callable, Dict, Iterable, List

from wo_scheduler.core.domain.task import Task
from wo_scheduler.core.services.scheduling.graph import (
    build_children_map,
    chain_member_ids,
    index_tasks,
)


def _waterfall_key(chain_ids: set[str], position: Dict[str, int]) -> Callable[[Task], tuple]:
    # chain membership only breaks ties between equal start dates
    def key(task: Task) -> tuple:
        return (
            task.start,
            0 if task.id in chain_ids else 1,
            task.duration_days,
            task.row,
            position[task.id],
        )

    return key


def organize(tasks: Iterable[Task]) -> List[Task]:
    """
    Waterfall order: each task is followed by all of its descendants.

    Roots (no parent, or a parent not in the input) are ordered by start date,
    then chain membership, duration and previous row; children use the same
    ordering under their parent. Tasks only reachable through a cycle are
    appended as extra roots. Sets row = index; dates are untouched.
    """
    task_list = list(tasks)
    tasks_by_id = index_tasks(task_list)
    position = {task.id: index for index, task in enumerate(task_list)}
    key = _waterfall_key(chain_member_ids(tasks_by_id), position)
    children = {
        parent_id: sorted(kids, key=key)
        for parent_id, kids in build_children_map(task_list, tasks_by_id).items()
    }

    roots = sorted(
        (task for task in task_list if not task.depends_on or task.depends_on not in tasks_by_id),
        key=key,
    )

    ordered: List[Task] = []
    visited: set[str] = set()

    def visit_tree(root: Task) -> None:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.id in visited:
                continue
            visited.add(node.id)
            ordered.append(node)
            stack.extend(reversed(children.get(node.id, [])))

    for root in roots:
        visit_tree(root)

    # cycle members never hang below a root
    for task in sorted(task_list, key=key):
        if task.id not in visited:
            visit_tree(task)

    for index, task in enumerate(ordered):
        task.row = index
    return ordered


__all__ = ["organize"]
