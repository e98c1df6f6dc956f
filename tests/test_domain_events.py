from wo_scheduler.core.events.domain_events import DomainEvents, domain_events
from wo_scheduler.core.services.scheduling import SchedulingEngine
from wo_scheduler.core.services.task import TaskStore

from helpers import make_task


def test_domain_event_signal_connect_emit_disconnect():
    seen: list[str] = []

    def _handler(schedule_id: str) -> None:
        seen.append(schedule_id)

    domain_events.schedule_changed.connect(_handler)
    domain_events.schedule_changed.emit("WO-1")
    domain_events.schedule_changed.disconnect(_handler)
    domain_events.schedule_changed.emit("WO-2")

    assert seen == ["WO-1"]


def test_engine_can_use_a_private_event_hub(settings):
    hub = DomainEvents()
    private: list[str] = []
    shared: list[str] = []

    def _on_private(schedule_id: str) -> None:
        private.append(schedule_id)

    def _on_shared(schedule_id: str) -> None:
        shared.append(schedule_id)

    hub.schedule_changed.connect(_on_private)
    domain_events.schedule_changed.connect(_on_shared)
    try:
        store = TaskStore([make_task("A", 1, 2)], schedule_id="WO-55")
        SchedulingEngine(store, settings=settings, events=hub).recompute()
    finally:
        domain_events.schedule_changed.disconnect(_on_shared)

    assert private == ["WO-55"]
    assert shared == []
