"""Unit tests for the Node propagation engine."""

import logging

import pytest

from pushflow import NO_VALUE, InvalidConstructionError, Node


def blank():
    """A node with no producers, driven only by explicit writes."""
    return Node.follows(fn=lambda: None)


class TestNodeConstruction:
    """Construction stores producers and registers edges, nothing else."""

    @pytest.mark.unit
    @pytest.mark.node
    def test_new_node_starts_without_a_value(self):
        node = blank()
        assert node.value is NO_VALUE
        assert not node.has_value

    @pytest.mark.unit
    @pytest.mark.node
    def test_deferred_node_does_not_compute_at_construction(self):
        calls = []
        origin = blank()
        origin.set_value(1)

        Node.follows(origin, fn=lambda o: calls.append(o))

        assert calls == []

    @pytest.mark.unit
    @pytest.mark.node
    def test_eager_node_computes_at_construction(self):
        origin = blank()
        origin.set_value(3)

        follower = Node(origin, fn=lambda o: o + 1, eager=True)

        assert follower.value == 4
        assert follower.eager

    @pytest.mark.unit
    @pytest.mark.node
    def test_upstream_is_kept_in_order(self):
        a, b = blank(), blank()
        node = Node.follows(a, 100, b, fn=lambda *vals: vals)
        assert node.upstream == (a, 100, b)

    @pytest.mark.unit
    @pytest.mark.node
    def test_construction_registers_dependents_in_order(self):
        origin = blank()
        first = Node.follows(origin)
        second = Node.follows(origin, fn=lambda o: o)

        assert origin.downstream == (first, second)
        assert first.downstream == ()

    @pytest.mark.unit
    @pytest.mark.node
    def test_plain_producers_get_no_edges(self):
        captured = []
        Node.follows(captured, fn=lambda c: c)
        assert captured == []

    @pytest.mark.unit
    @pytest.mark.node
    def test_downstream_snapshot_cannot_mutate_edges(self):
        origin = blank()
        follower = Node.follows(origin)
        snapshot = origin.downstream

        snapshot += (blank(),)
        list(origin.downstream).append(blank())

        assert len(snapshot) == 2
        assert origin.downstream == (follower,)

    @pytest.mark.unit
    @pytest.mark.node
    @pytest.mark.parametrize("producer_count", [0, 2, 3])
    def test_identity_needs_exactly_one_producer(self, producer_count):
        producers = [blank() for _ in range(producer_count)]
        with pytest.raises(InvalidConstructionError):
            Node.follows(*producers)

    @pytest.mark.unit
    @pytest.mark.node
    def test_rejected_construction_leaves_no_edges(self):
        a, b = blank(), blank()
        with pytest.raises(InvalidConstructionError):
            Node.follows(a, b)
        assert a.downstream == ()
        assert b.downstream == ()

    @pytest.mark.unit
    @pytest.mark.node
    def test_non_callable_fn_is_rejected(self):
        with pytest.raises(InvalidConstructionError):
            Node.follows(blank(), fn=42)

    @pytest.mark.unit
    @pytest.mark.node
    def test_invalid_construction_is_a_type_error(self):
        with pytest.raises(TypeError):
            Node.follows()

    @pytest.mark.unit
    @pytest.mark.node
    def test_repr_shows_key_value_and_edge_counts(self):
        node = Node.follows(fn=lambda: None, key="origin")
        node.set_value(5)
        Node.follows(node)
        assert repr(node) == "Node('origin', 5, upstream=0, downstream=1)"


class TestNodeValues:
    """Explicit writes and recomputation."""

    @pytest.mark.unit
    @pytest.mark.node
    def test_set_value_stores_value(self):
        node = blank()
        node.set_value(5)
        assert node.value == 5

    @pytest.mark.unit
    @pytest.mark.node
    def test_value_setter_is_an_explicit_write(self, recorder):
        node = blank()
        node.on_change(recorder)
        node.value = 7
        assert node.value == 7
        assert recorder.values == [7]

    @pytest.mark.unit
    @pytest.mark.node
    def test_set_value_bypasses_recompute_function(self):
        def explode():
            raise AssertionError("recompute function must not run")

        node = Node.follows(fn=explode)
        node.set_value("written")
        assert node.value == "written"

    @pytest.mark.unit
    @pytest.mark.node
    def test_none_is_a_real_value(self):
        node = blank()
        node.set_value(None)
        assert node.value is None
        assert node.has_value

    @pytest.mark.unit
    @pytest.mark.node
    def test_recompute_uses_current_producer_values(self):
        before = blank()
        before.set_value(5)
        after = Node.follows(before, fn=lambda b: 1 + b)

        after.recompute()
        assert after.value == 6

        before.set_value(88)
        assert after.value == 89

    @pytest.mark.unit
    @pytest.mark.node
    def test_combination_of_nodes_and_captured_value(self):
        a_node = blank()
        a_node.set_value(1)
        b_node = blank()
        b_node.set_value(10)
        captured = 100

        combiner = Node.follows(a_node, b_node, fn=lambda a, b: a + b + captured)
        combiner.recompute()
        assert combiner.value == 111

        a_node.set_value(20000)
        assert combiner.value == 20110

    @pytest.mark.unit
    @pytest.mark.node
    def test_captured_producer_is_frozen_at_construction(self):
        a_node = blank()
        offset = 100
        node = Node.follows(a_node, offset, fn=lambda a, o: a + o)

        offset = -1
        a_node.set_value(1)

        assert offset == -1
        assert node.value == 101

    @pytest.mark.unit
    @pytest.mark.node
    def test_identity_follower_adopts_value(self):
        before = blank()
        after = Node.follows(before)
        before.set_value(88)
        assert after.value == 88

    @pytest.mark.unit
    @pytest.mark.node
    def test_recompute_passes_no_value_for_unset_producer(self):
        before = blank()
        after = Node.follows(before)
        after.recompute()
        assert after.value is NO_VALUE

    @pytest.mark.unit
    @pytest.mark.node
    def test_reading_twice_returns_identical_value(self):
        node = blank()
        payload = {"a": 1}
        node.set_value(payload)
        assert node.value is node.value is payload


class TestNodeChangeHook:
    """The single change hook."""

    @pytest.mark.unit
    @pytest.mark.node
    def test_hook_fires_on_value_setting(self, recorder):
        node = blank()
        node.on_change(recorder)
        node.set_value("new_value")
        assert recorder.values == ["new_value"]

    @pytest.mark.unit
    @pytest.mark.node
    def test_hook_fires_on_recalculation(self, recorder):
        origin = blank()
        destination = Node.follows(origin, fn=lambda o: str(o).upper())
        destination.on_change(recorder)

        origin.set_value("new_value")

        assert recorder.values == ["NEW_VALUE"]

    @pytest.mark.unit
    @pytest.mark.node
    def test_last_registered_hook_wins(self, make_recorder):
        first, second = make_recorder(), make_recorder()
        node = blank()
        node.on_change(first)
        node.on_change(second)

        node.set_value(1)

        assert first.values == []
        assert second.values == [1]

    @pytest.mark.unit
    @pytest.mark.node
    def test_on_change_works_as_decorator(self):
        node = blank()
        seen = []

        @node.on_change
        def remember(value):
            seen.append(value)

        node.set_value(3)
        assert seen == [3]
        assert callable(remember)

    @pytest.mark.unit
    @pytest.mark.node
    def test_hook_runs_before_dependents(self):
        order = []
        origin = blank()
        follower = Node.follows(origin)
        origin.on_change(lambda v: order.append("origin"))
        follower.on_change(lambda v: order.append("follower"))

        origin.set_value(1)

        assert order == ["origin", "follower"]


@pytest.mark.unit
@pytest.mark.node
def test_propagation_is_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="pushflow")
    node = Node.follows(fn=lambda: None, key="speed")
    Node.follows(node)

    node.set_value(12)

    assert "speed <- 12, notifying 1 dependent(s)" in caplog.text


@pytest.mark.unit
@pytest.mark.node
@pytest.mark.parametrize("hook", [None, 42, "print"])
def test_non_callable_hook_is_rejected_and_previous_hook_kept(hook, recorder):
    origin = blank()
    follower = Node.follows(origin)
    origin.on_change(recorder)

    with pytest.raises(InvalidConstructionError):
        origin.on_change(hook)

    origin.set_value(2)
    assert recorder.values == [2]
    assert follower.value == 2


@pytest.mark.unit
@pytest.mark.node
def test_eager_failure_at_construction_keeps_registered_edge():
    """A node whose first recompute raises still follows its producers"""
    origin = blank()
    calls = []

    def fragile(value):
        calls.append(value)
        return value + 1

    with pytest.raises(TypeError):
        Node(origin, fn=fragile, eager=True)

    assert calls == [NO_VALUE]
    assert len(origin.downstream) == 1

    origin.set_value(1)
    assert calls == [NO_VALUE, 1]
    assert origin.downstream[0].value == 2
