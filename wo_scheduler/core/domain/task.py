from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from wo_scheduler.core.domain.dates import add_days, days_between, parse_date
from wo_scheduler.core.domain.enums import DependencyType, TaskStatus
from wo_scheduler.core.domain.identifiers import generate_id
from wo_scheduler.core.exceptions import ValidationError


@dataclass
class Task:
    id: str
    title: str
    start: date
    end: date
    depends_on: str = ""
    dependency_type: DependencyType = DependencyType.FINISH_TO_START
    lag_days: int = 0
    lead_days: int = 0
    row: int = 0

    # opaque payload, never read by the scheduling core
    status: TaskStatus = TaskStatus.TODO
    skills: list[str] = field(default_factory=list)
    color: str = ""
    remarks: str = ""
    work_order: str = ""
    aircraft_reg: str = ""

    @staticmethod
    def create(title: str, start: date, end: date, **extra) -> "Task":
        return Task(id=generate_id(), title=title, start=start, end=end, **extra)

    @property
    def duration_days(self) -> int:
        return days_between(self.start, self.end) + 1

    @property
    def net_offset(self) -> int:
        return int(self.lag_days or 0) - int(self.lead_days or 0)

    @property
    def has_dependency(self) -> bool:
        return bool(self.depends_on)

    def move_to(self, new_start: date) -> None:
        """Move the task so it begins on new_start, keeping its duration."""
        span = days_between(self.start, self.end)
        self.start = new_start
        self.end = add_days(new_start, span)

    def shift(self, delta_days: int) -> None:
        if delta_days:
            self.start = add_days(self.start, delta_days)
            self.end = add_days(self.end, delta_days)

    def set_duration(self, days: int) -> None:
        self.end = add_days(self.start, max(1, int(days)) - 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "depends_on": self.depends_on,
            "dependency_type": self.dependency_type.value,
            "lag_days": self.lag_days,
            "lead_days": self.lead_days,
            "row": self.row,
            "status": self.status.value,
            "skills": list(self.skills),
            "color": self.color,
            "remarks": self.remarks,
            "work_order": self.work_order,
            "aircraft_reg": self.aircraft_reg,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "Task":
        try:
            dependency_type = DependencyType.parse(data.get("dependency_type"))
            status = TaskStatus(data.get("status") or TaskStatus.TODO.value)
        except ValueError as exc:
            raise ValidationError(str(exc), code="TASK_INVALID_FIELD") from exc
        return Task(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            start=parse_date(data.get("start")),
            end=parse_date(data.get("end")),
            depends_on=str(data.get("depends_on") or ""),
            dependency_type=dependency_type,
            lag_days=int(data.get("lag_days") or 0),
            lead_days=int(data.get("lead_days") or 0),
            row=int(data.get("row") or 0),
            status=status,
            skills=list(data.get("skills") or []),
            color=str(data.get("color") or ""),
            remarks=str(data.get("remarks") or ""),
            work_order=str(data.get("work_order") or ""),
            aircraft_reg=str(data.get("aircraft_reg") or ""),
        )


__all__ = ["Task"]
