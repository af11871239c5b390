import pytest

from cdsmodel.waitobj import COUNTER_THRESHOLD, WaitObj


class Node:
    def __init__(self, func_id):
        self.func_id = func_id


@pytest.fixture
def nodes():
    return Node(1), Node(2)


def test_add_waiting_for_records_distance(nodes):
    w = WaitObj(0)
    w.add_waiting_for(2, nodes[0], 5)
    assert w.waiting_for.contains(2)
    assert w.lookup_dist(2, nodes[0]) == 5
    assert w.lookup_dist(2, nodes[1]) == -1
    assert w.lookup_dist(3, nodes[0]) == -1


def test_distance_overwritten(nodes):
    w = WaitObj(0)
    w.add_waiting_for(1, nodes[0], 5)
    w.add_waiting_for(1, nodes[0], 2)
    assert w.lookup_dist(1, nodes[0]) == 2
    assert len(w.target_nodes(1)) == 1


def test_remove_waiting_for_node_partial_then_full(nodes):
    w = WaitObj(0)
    w.add_waiting_for(1, nodes[0], 3)
    w.add_waiting_for(1, nodes[1], 4)
    assert w.remove_waiting_for_node(1, nodes[0]) is False
    assert w.waiting_for.contains(1)
    assert w.lookup_dist(1, nodes[0]) == -1
    assert w.remove_waiting_for_node(1, nodes[1]) is True
    assert not w.waiting_for.contains(1)


def test_remove_waiting_for_clears_targets_and_counter(nodes):
    w = WaitObj(0)
    w.add_waiting_for(1, nodes[0], 3)
    w.incr_counter(1)
    w.remove_waiting_for(1)
    assert not w.waiting_for.contains(1)
    assert w.target_nodes(1).is_empty()
    assert w.lookup_dist(1, nodes[0]) == -1
    assert w.action_count(1) == 0


def test_waited_by_add_remove():
    w = WaitObj(0)
    w.add_waited_by(3)
    assert w.waited_by.contains(3)
    w.remove_waited_by(3)
    assert not w.waited_by.contains(3)


def test_incr_counter_expires_after_threshold():
    w = WaitObj(0)
    results = [w.incr_counter(1) for _ in range(COUNTER_THRESHOLD)]
    assert not any(results)
    assert w.incr_counter(1) is True
    assert w.action_count(1) == 0
    assert w.incr_counter(1) is False


def test_clear_waiting_for_keeps_waited_by(nodes):
    w = WaitObj(0)
    w.add_waiting_for(1, nodes[0], 3)
    w.add_waiting_for(2, nodes[1], 4)
    w.add_waited_by(5)
    w.clear_waiting_for()
    assert len(w.waiting_for) == 0
    assert w.target_nodes(1).is_empty()
    assert w.lookup_dist(2, nodes[1]) == -1
    assert w.waited_by.contains(5)


def test_format_empty():
    w = WaitObj(4)
    assert w.format_waiting_for() == ""
    assert w.format_waited_by() == ""


def test_format_waiting_for(nodes):
    w = WaitObj(4)
    w.add_waiting_for(1, nodes[0], 3)
    w.add_waiting_for(2, nodes[1], 7)
    assert w.format_waiting_for() == "thread 4 is waiting for: 1 2 \n"
    verbose = w.format_waiting_for(True)
    assert verbose.startswith("thread 4 is waiting for: 1 2 \n\t")
    assert "[thread 1](node 1: 3, ) " in verbose
    assert "[thread 2](node 2: 7, ) " in verbose


def test_format_waited_by():
    w = WaitObj(4)
    w.add_waited_by(6)
    assert w.format_waited_by() == "thread 4 is waited by: 6 \n"