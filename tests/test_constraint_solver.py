import logging

import pytest

from helpers import day, make_task
from wo_scheduler.core.domain import DependencyType
from wo_scheduler.core.exceptions import BusinessRuleError, ScheduleCycleError
from wo_scheduler.core.services.scheduling import solve

SS = DependencyType.START_TO_START


def test_chain_example_settles_fs_children(chain_tasks):
    a, b, c = chain_tasks
    result = solve(chain_tasks)

    assert result.converged
    assert (b.start, b.end) == (day(4), day(6))
    assert (c.start, c.end) == (day(7), day(8))
    assert a.start == day(1)
    assert result.moved_task_ids == {"B", "C"}


def test_fs_child_is_pinned_even_when_later_than_target():
    parent = make_task("P", 1, 2)
    child = make_task("K", 10, 4, depends_on="P")

    solve([parent, child])

    assert child.start == day(3)
    assert child.duration_days == 4


def test_fs_lag_and_lead_offset_the_target():
    parent = make_task("P", 1, 2)
    lagged = make_task("L", 1, 1, depends_on="P", lag=3)
    led = make_task("E", 1, 1, depends_on="P", lag=1, lead=2)

    solve([parent, lagged, led])

    assert lagged.start == day(6)
    assert led.start == day(2)


def test_ss_zero_offset_is_a_floor_only():
    parent = make_task("P", 5, 3)
    early = make_task("E", 1, 2, depends_on="P", dependency_type=SS)
    late = make_task("L", 9, 2, depends_on="P", dependency_type=SS)

    solve([parent, early, late])

    assert early.start == day(5)
    assert early.end == day(6)
    assert late.start == day(9)


def test_ss_with_lag_is_locked_regardless_of_position():
    parent = make_task("P", 5, 3)
    before = make_task("B", 1, 2, depends_on="P", dependency_type=SS, lag=2)
    after = make_task("A", 30, 2, depends_on="P", dependency_type=SS, lag=2)

    solve([parent, before, after])

    assert before.start == day(7)
    assert after.start == day(7)


def test_ss_with_equal_lag_and_lead_is_still_locked():
    parent = make_task("P", 5, 3)
    child = make_task("K", 12, 1, depends_on="P", dependency_type=SS, lag=1, lead=1)

    solve([parent, child])

    assert child.start == day(5)


def test_missing_parent_is_silently_ignored():
    orphan = make_task("O", 8, 2, depends_on="deleted-task")

    result = solve([orphan])

    assert result.converged
    assert orphan.start == day(8)


def test_solve_is_idempotent(chain_tasks):
    chain_tasks.append(make_task("S", 2, 2, depends_on="B", dependency_type=SS))
    solve(chain_tasks)
    first = [(t.start, t.end) for t in chain_tasks]

    result = solve(chain_tasks)

    assert [(t.start, t.end) for t in chain_tasks] == first
    assert result.iterations == 1
    assert result.moved_task_ids == set()


def test_children_listed_before_parents_still_converge():
    tasks = [make_task(f"T{i}", 1, 1, depends_on=f"T{i - 1}" if i else "") for i in range(150)]
    tasks.reverse()

    result = solve(tasks)

    assert result.converged
    by_id = {t.id: t for t in tasks}
    assert by_id["T149"].start == day(150)


def test_end_never_precedes_start_after_solve(chain_tasks):
    solve(chain_tasks)
    assert all(t.end >= t.start for t in chain_tasks)


def test_strict_policy_rejects_cycle_without_touching_dates():
    a = make_task("A", 1, 2, depends_on="B")
    b = make_task("B", 5, 2, depends_on="A")

    with pytest.raises(ScheduleCycleError) as exc:
        solve([a, b])

    assert isinstance(exc.value, BusinessRuleError)
    assert exc.value.code == "SCHEDULE_CYCLE"
    assert set(exc.value.cycle) == {"A", "B"}
    assert (a.start, b.start) == (day(1), day(5))


def test_self_dependency_counts_as_cycle():
    loop = make_task("X", 1, 1, depends_on="X")
    with pytest.raises(ScheduleCycleError):
        solve([loop])


def test_cutoff_policy_stops_at_cap_and_warns(caplog):
    a = make_task("A", 1, 2, depends_on="B")
    b = make_task("B", 5, 2, depends_on="A")

    with caplog.at_level(logging.WARNING):
        result = solve([a, b], max_iterations=7, cycle_policy="cutoff")

    assert not result.converged
    assert result.iterations == 7
    assert "without converging" in caplog.text
