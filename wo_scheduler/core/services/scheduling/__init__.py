from .cascade import shift_children
from .constraints import SolveResult, solve
from .critical_path import analyze_critical_path, compute_critical_path
from .engine import ScheduleSnapshot, SchedulingEngine
from .models import CPMTaskInfo
from .sequencer import organize

__all__ = [
    "SchedulingEngine",
    "ScheduleSnapshot",
    "SolveResult",
    "CPMTaskInfo",
    "solve",
    "shift_children",
    "analyze_critical_path",
    "compute_critical_path",
    "organize",
]
