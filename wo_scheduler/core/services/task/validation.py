from __future__ import annotations

from datetime import date

from wo_scheduler.core.domain.dates import parse_date
from wo_scheduler.core.domain.enums import DependencyType, TaskStatus
from wo_scheduler.core.exceptions import ValidationError

# opaque fields that create_task and update_task accept as keyword payload
TASK_PAYLOAD_FIELDS = frozenset({"status", "skills", "color", "remarks", "work_order", "aircraft_reg"})


class TaskValidationMixin:
    def _validate_title(self, title: str) -> str:
        cleaned = (title or "").strip()
        if not cleaned:
            raise ValidationError("Task title cannot be empty.", code="TASK_TITLE_EMPTY")
        return cleaned

    def _validate_dates(self, start, end) -> tuple[date, date]:
        start_date = parse_date(start)
        end_date = parse_date(end)
        if end_date < start_date:
            raise ValidationError(
                f"Task end ({end_date}) cannot be before its start ({start_date}).",
                code="TASK_INVALID_DATE",
            )
        return start_date, end_date

    def _validate_dependency_type(self, value) -> DependencyType:
        try:
            return DependencyType.parse(value)
        except ValueError as exc:
            raise ValidationError(str(exc), code="DEPENDENCY_INVALID_TYPE") from exc

    def _validate_offsets(self, lag_days: int, lead_days: int) -> None:
        if int(lag_days or 0) < 0 or int(lead_days or 0) < 0:
            raise ValidationError(
                "Lag and lead must be zero or positive day counts.",
                code="DEPENDENCY_INVALID_OFFSET",
            )

    def _validate_payload(self, payload: dict) -> dict:
        unknown = set(payload) - TASK_PAYLOAD_FIELDS
        if unknown:
            raise ValidationError(
                f"Unsupported task field(s): {', '.join(sorted(unknown))}",
                code="TASK_INVALID_FIELD",
            )
        cleaned: dict = {}
        for key, value in payload.items():
            if key == "status":
                try:
                    raw = value.strip().upper() if isinstance(value, str) else value
                    cleaned[key] = TaskStatus(raw or TaskStatus.TODO.value)
                except ValueError:
                    raise ValidationError(f"Invalid task status: {value!r}", code="TASK_INVALID_FIELD") from None
            elif key == "skills":
                cleaned[key] = self._validate_skills(value)
            else:
                cleaned[key] = str(value or "").strip()
        return cleaned

    def _validate_skills(self, value) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            # "B1, B2" from a text field
            return [part.strip() for part in value.split(",") if part.strip()]
        if isinstance(value, (list, tuple, set, frozenset)):
            return [str(item).strip() for item in value if str(item).strip()]
        raise ValidationError(f"Invalid skills value: {value!r}", code="TASK_INVALID_FIELD")

    def _validate_duration(self, days: int) -> int:
        try:
            value = int(days)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid duration: {days!r}", code="TASK_INVALID_DURATION") from None
        # the duration editor never goes below one day
        return max(1, value)
