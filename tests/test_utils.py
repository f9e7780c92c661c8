"""
Tests for the graph exporter.
"""

import pytest

from scalargrad.engine import Value
from scalargrad.utils import draw_dot, trace


def test_trace_lists_shared_nodes_once():
    x = Value(2.0)
    y = Value(3.0)
    xy = x * y
    z = xy + x
    nodes, edges = trace(z)

    assert len(nodes) == 4
    assert set(nodes) == {x, y, xy, z}
    assert (x, xy) in edges
    assert (x, z) in edges
    assert len(edges) == 4


def test_trace_keeps_one_edge_per_operand_slot():
    x = Value(2.0)
    z = x * x
    nodes, edges = trace(z)
    assert nodes == [z, x]
    assert edges == [(x, z), (x, z)]


def test_trace_does_not_touch_gradients():
    x = Value(2.0)
    z = (x * 3).relu()
    trace(z)
    assert x.grad == 0.0
    assert z.grad == 0.0


def test_draw_dot_renders_nodes_and_ops():
    x = Value(2.0, name='x')
    y = Value(-3.0, name='y')
    z = x * y
    z.name = 'z'
    z.backward()

    dot = draw_dot(z)
    src = dot.source

    assert 'rankdir=LR' in src
    assert str(z.uuid) + '*' in src
    assert 'data 2.0000' in src
    assert 'grad -3.0000' in src
    assert '{ x |' in src


def test_draw_dot_shows_power_exponent_node():
    x = Value(3.0, name='x')
    y = x ** 2
    src = draw_dot(y, rankdir='TB').source

    assert 'rankdir=TB' in src
    assert str(y._prev[1].uuid) in src
    assert '**' in src


def test_draw_dot_rejects_bad_rankdir():
    with pytest.raises(ValueError):
        draw_dot(Value(1.0), rankdir='RL')
