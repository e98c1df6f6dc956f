# tests/conftest.py
import pytest

from wo_scheduler.core.services.scheduling import SchedulingEngine
from wo_scheduler.core.services.task import TaskService, TaskStore
from wo_scheduler.infra.settings import SchedulerSettings

from helpers import make_task


@pytest.fixture(autouse=True)
def _isolated_data_dir(tmp_path, monkeypatch):
    # keep log files and env-driven settings away from the real user profile
    monkeypatch.setenv("WO_SCHED_DATA_DIR", str(tmp_path / "data"))
    for name in (
        "WO_SCHED_MAX_ITERATIONS",
        "WO_SCHED_CYCLE_POLICY",
        "WO_SCHED_HISTORY_LIMIT",
        "WO_SCHED_TIMELINE_PADDING",
        "WO_SCHED_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return SchedulerSettings()


@pytest.fixture
def chain_tasks():
    # A(days 1-3) -> B FS (3d) -> C FS (2d), children deliberately out of place
    return [
        make_task("A", 1, 3),
        make_task("B", 1, 3, depends_on="A"),
        make_task("C", 20, 2, depends_on="B"),
    ]


@pytest.fixture
def services(settings):
    store = TaskStore(schedule_id="WO-1001", history_limit=settings.history_limit)
    engine = SchedulingEngine(store, settings=settings)
    task_service = TaskService(store, engine)
    return {
        "store": store,
        "scheduling_engine": engine,
        "task_service": task_service,
    }
