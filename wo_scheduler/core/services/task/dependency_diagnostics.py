from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from wo_scheduler.core.domain.enums import DependencyType
from wo_scheduler.core.domain.task import Task
from wo_scheduler.core.exceptions import ScheduleCycleError
from wo_scheduler.core.services.scheduling.constraints import solve
from wo_scheduler.core.services.scheduling.engine import SchedulingEngine
from wo_scheduler.core.services.scheduling.graph import describe_path, find_dependency_cycle_path
from wo_scheduler.core.services.task.store import TaskStore


@dataclass
class DependencyImpactRow:
    task_id: str
    task_title: str
    before_start: date
    before_end: date
    after_start: date
    after_end: date
    shift_days: int


@dataclass
class DependencyDiagnostic:
    is_valid: bool
    code: str
    summary: str
    detail: str
    task_id: str
    parent_id: str
    dependency_type: DependencyType
    lag_days: int
    lead_days: int
    cycle_path: list[str]
    impact_rows: list[DependencyImpactRow]
    suggestions: list[str]


class TaskDependencyDiagnosticsMixin:
    _store: TaskStore
    _engine: SchedulingEngine

    def get_dependency_diagnostics(
        self,
        task_id: str,
        parent_id: str,
        dependency_type: DependencyType = DependencyType.FINISH_TO_START,
        lag_days: int = 0,
        lead_days: int = 0,
        include_impact: bool = True,
    ) -> DependencyDiagnostic:
        """
        Check a proposed "task_id depends on parent_id" link without applying it.
        task_id may be a task that is not in the store yet (creation preview).
        """
        def invalid(code: str, summary: str, detail: str, cycle=None, suggestions=None):
            return self._invalid_diagnostic(
                code=code,
                summary=summary,
                detail=detail,
                task_id=task_id,
                parent_id=parent_id,
                dependency_type=dependency_type,
                lag_days=lag_days,
                lead_days=lead_days,
                cycle_path=cycle,
                suggestions=suggestions,
            )

        if task_id == parent_id:
            return invalid(
                "DEPENDENCY_SELF",
                "A task cannot depend on itself.",
                "Select a different parent task.",
            )
        if int(lag_days or 0) < 0 or int(lead_days or 0) < 0:
            return invalid(
                "DEPENDENCY_INVALID_OFFSET",
                "Lag and lead must be zero or positive.",
                f"Got lag={lag_days}, lead={lead_days}. Use lead days for a negative offset.",
            )

        tasks_by_id = self._store.by_id()
        if parent_id not in tasks_by_id:
            return invalid(
                "TASK_NOT_FOUND",
                "Parent task not found.",
                f"Task id '{parent_id}' does not exist in this schedule.",
            )

        cycle = find_dependency_cycle_path(tasks_by_id, task_id, parent_id)
        if cycle:
            return invalid(
                "DEPENDENCY_CYCLE",
                "This link would create a circular dependency.",
                f"Cycle path: {describe_path(tasks_by_id, cycle)}",
                cycle=cycle,
                suggestions=[
                    "Reverse the dependency direction if the work flow allows it.",
                    "Link to an earlier task in the chain instead.",
                ],
            )

        impact_rows: list[DependencyImpactRow] = []
        if include_impact and task_id in tasks_by_id:
            try:
                impact_rows = self._simulate_link_impact(task_id, parent_id, dependency_type, lag_days, lead_days)
            except ScheduleCycleError as exc:
                return invalid(
                    exc.code,
                    "The schedule already contains a circular dependency.",
                    str(exc),
                    cycle=exc.cycle,
                    suggestions=["Break the existing cycle before adding new links."],
                )

        if not impact_rows:
            return DependencyDiagnostic(
                is_valid=True,
                code="DEPENDENCY_VALID",
                summary="Dependency is valid.",
                detail="No cycle; parent exists." if not include_impact else "No task dates would change.",
                task_id=task_id,
                parent_id=parent_id,
                dependency_type=dependency_type,
                lag_days=lag_days,
                lead_days=lead_days,
                cycle_path=[],
                impact_rows=[],
                suggestions=[],
            )

        max_shift = max(abs(row.shift_days) for row in impact_rows)
        return DependencyDiagnostic(
            is_valid=True,
            code="DEPENDENCY_VALID",
            summary=f"Dependency is valid. {len(impact_rows)} task(s) would move.",
            detail=f"Largest predicted shift: {max_shift} day(s).",
            task_id=task_id,
            parent_id=parent_id,
            dependency_type=dependency_type,
            lag_days=lag_days,
            lead_days=lead_days,
            cycle_path=[],
            impact_rows=impact_rows,
            suggestions=["If the shift is too large, adjust lag/lead or use a Start-to-Start link."],
        )

    def _invalid_diagnostic(
        self,
        code: str,
        summary: str,
        detail: str,
        task_id: str,
        parent_id: str,
        dependency_type: DependencyType,
        lag_days: int,
        lead_days: int,
        cycle_path: list[str] | None = None,
        suggestions: list[str] | None = None,
    ) -> DependencyDiagnostic:
        return DependencyDiagnostic(
            is_valid=False,
            code=code,
            summary=summary,
            detail=detail,
            task_id=task_id,
            parent_id=parent_id,
            dependency_type=dependency_type,
            lag_days=lag_days,
            lead_days=lead_days,
            cycle_path=cycle_path or [],
            impact_rows=[],
            suggestions=suggestions or [],
        )

    def _simulate_link_impact(
        self,
        task_id: str,
        parent_id: str,
        dependency_type: DependencyType,
        lag_days: int,
        lead_days: int,
    ) -> list[DependencyImpactRow]:
        before = {task.id: task for task in self._store}
        preview = [Task.from_dict(task.to_dict()) for task in self._store]
        for task in preview:
            if task.id == task_id:
                task.depends_on = parent_id
                task.dependency_type = dependency_type
                task.lag_days = int(lag_days or 0)
                task.lead_days = int(lead_days or 0)
        settings = self._engine.settings
        solve(preview, max_iterations=settings.max_iterations, cycle_policy=settings.cycle_policy)

        rows: list[DependencyImpactRow] = []
        for after in preview:
            original = before[after.id]
            if original.start == after.start and original.end == after.end:
                continue
            rows.append(
                DependencyImpactRow(
                    task_id=after.id,
                    task_title=after.title,
                    before_start=original.start,
                    before_end=original.end,
                    after_start=after.start,
                    after_end=after.end,
                    shift_days=(after.start - original.start).days,
                )
            )
        rows.sort(key=lambda row: (-abs(row.shift_days), row.task_title.lower()))
        return rows


__all__ = ["DependencyImpactRow", "DependencyDiagnostic", "TaskDependencyDiagnosticsMixin"]
