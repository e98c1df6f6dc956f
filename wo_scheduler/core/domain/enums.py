from __future__ import annotations

from enum import Enum


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    BLOCKED = "BLOCKED"
    DONE = "DONE"


class DependencyType(str, Enum):
    FINISH_TO_START = "FS"
    START_TO_START = "SS"

    @classmethod
    def parse(cls, value: "DependencyType | str | None") -> "DependencyType":
        """
        Accepts a member, its value ("FS"/"SS") or its name.
        Empty/None -> FINISH_TO_START.
        """
        if isinstance(value, cls):
            return value
        normalized = (value or "").strip().upper()
        if not normalized:
            return cls.FINISH_TO_START
        for member in cls:
            if normalized in (member.value, member.name):
                return member
        raise ValueError(f"Unknown dependency type: {value!r}")


__all__ = ["TaskStatus", "DependencyType"]
