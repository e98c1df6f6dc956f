from helpers import day, make_task
from wo_scheduler.core.domain import DependencyType
from wo_scheduler.core.services.scheduling import shift_children, solve

SS = DependencyType.START_TO_START


def test_fs_descendants_shift_by_delta(chain_tasks):
    solve(chain_tasks)
    a, b, c = chain_tasks

    shifted = shift_children(chain_tasks, "A", 2)

    assert shifted == ["B", "C"]
    assert (b.start, b.end) == (day(6), day(8))
    assert (c.start, c.end) == (day(9), day(10))
    assert a.start == day(1)


def test_ss_child_with_lag_waits_for_solver():
    parent = make_task("P", 1, 3)
    fs_child = make_task("F", 4, 2, depends_on="P")
    ss_child = make_task("S", 3, 2, depends_on="P", dependency_type=SS, lag=2)
    tasks = [parent, fs_child, ss_child]

    parent.shift(2)
    shift_children(tasks, "P", 2)

    assert fs_child.start == day(6)
    assert ss_child.start == day(3)

    solve(tasks)
    assert ss_child.start == day(5)


def test_force_moves_ss_children_and_their_subtree():
    parent = make_task("P", 1, 3)
    ss_child = make_task("S", 1, 2, depends_on="P", dependency_type=SS)
    grandchild = make_task("G", 3, 1, depends_on="S")
    tasks = [parent, ss_child, grandchild]

    shifted = shift_children(tasks, "P", -1, force=True)

    assert shifted == ["S", "G"]
    assert ss_child.start == day(0)
    assert grandchild.start == day(2)


def test_skipped_ss_child_keeps_its_subtree_in_place():
    parent = make_task("P", 1, 3)
    ss_child = make_task("S", 1, 2, depends_on="P", dependency_type=SS)
    grandchild = make_task("G", 3, 1, depends_on="S")

    assert shift_children([parent, ss_child, grandchild], "P", 4) == []
    assert grandchild.start == day(3)


def test_zero_delta_is_noop(chain_tasks):
    before = [(t.start, t.end) for t in chain_tasks]
    assert shift_children(chain_tasks, "A", 0) == []
    assert [(t.start, t.end) for t in chain_tasks] == before


def test_cycle_guard_stops_instead_of_recursing_forever():
    a = make_task("A", 1, 1, depends_on="C")
    b = make_task("B", 2, 1, depends_on="A")
    c = make_task("C", 3, 1, depends_on="B")

    shifted = shift_children([a, b, c], "A", 1)

    assert shifted == ["B", "C"]
    assert a.start == day(1)
    assert (b.start, c.start) == (day(3), day(4))
