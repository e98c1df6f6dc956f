from wo_scheduler.core.domain.enums import DependencyType, TaskStatus
from wo_scheduler.core.domain.identifiers import generate_id
from wo_scheduler.core.domain.task import Task

__all__ = [
    "generate_id",
    "TaskStatus",
    "DependencyType",
    "Task",
]
