from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

CYCLE_POLICY_STRICT = "strict"
CYCLE_POLICY_CUTOFF = "cutoff"

DEFAULT_MAX_ITERATIONS = 100
DEFAULT_HISTORY_LIMIT = 50
DEFAULT_TIMELINE_PADDING = 3


@dataclass(frozen=True)
class SchedulerSettings:
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    cycle_policy: str = CYCLE_POLICY_STRICT
    history_limit: int = DEFAULT_HISTORY_LIMIT
    timeline_padding_days: int = DEFAULT_TIMELINE_PADDING
    log_level: str = "INFO"

    @property
    def strict_cycles(self) -> bool:
        return self.cycle_policy == CYCLE_POLICY_STRICT


def _env_int(name: str, default: int, minimum: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %s", name, raw, default)
        return default
    return max(minimum, value)


def normalize_cycle_policy(value: str | None) -> str:
    policy = (value or "").strip().lower()
    if policy == CYCLE_POLICY_CUTOFF:
        return CYCLE_POLICY_CUTOFF
    return CYCLE_POLICY_STRICT


def load_settings() -> SchedulerSettings:
    raw_policy = os.getenv("WO_SCHED_CYCLE_POLICY")
    policy = normalize_cycle_policy(raw_policy)
    if raw_policy and raw_policy.strip().lower() not in (CYCLE_POLICY_STRICT, CYCLE_POLICY_CUTOFF):
        logger.warning("Unknown WO_SCHED_CYCLE_POLICY=%r, using %s", raw_policy, policy)

    return SchedulerSettings(
        max_iterations=_env_int("WO_SCHED_MAX_ITERATIONS", DEFAULT_MAX_ITERATIONS, 1),
        cycle_policy=policy,
        history_limit=_env_int("WO_SCHED_HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT, 1),
        timeline_padding_days=_env_int("WO_SCHED_TIMELINE_PADDING", DEFAULT_TIMELINE_PADDING, 0),
        log_level=(os.getenv("WO_SCHED_LOG_LEVEL") or "INFO").strip().upper() or "INFO",
    )


__all__ = [
    "CYCLE_POLICY_STRICT",
    "CYCLE_POLICY_CUTOFF",
    "SchedulerSettings",
    "load_settings",
    "normalize_cycle_policy",
]
