from .scheduling import CPMTaskInfo, SchedulingEngine
from .task import TaskService, TaskStore

__all__ = [
    "TaskService",
    "TaskStore",
    "SchedulingEngine",
    "CPMTaskInfo",
]
