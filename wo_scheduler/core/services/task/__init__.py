from .dependency_diagnostics import DependencyDiagnostic, DependencyImpactRow
from .service import TaskService
from .store import TaskStore

__all__ = ["TaskService", "TaskStore", "DependencyDiagnostic", "DependencyImpactRow"]
