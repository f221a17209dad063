"""Shared test fixtures."""

import itertools

import pytest

from pathweight.core.graph import GraphModel
from pathweight.core.weights import utils


@pytest.fixture
def single_edge_graph() -> GraphModel:
    """Fixture providing the graph 1 - 2."""
    return GraphModel.from_edges([(1, 2)])


@pytest.fixture
def triangle_graph() -> GraphModel:
    """
    Fixture providing a triangle:
    1 - 2
     \\ /
      3
    """
    return GraphModel.from_edges([(1, 2), (2, 3), (1, 3)])


@pytest.fixture
def path_graph() -> GraphModel:
    """Fixture providing the path graph 1 - 2 - 3."""
    return GraphModel.from_edges([(1, 2), (2, 3)])


@pytest.fixture
def two_component_graph() -> GraphModel:
    """Fixture providing two disjoint edges 1 - 2 and 3 - 4."""
    return GraphModel.from_edges([(1, 2), (3, 4)])


@pytest.fixture
def complete_graph() -> GraphModel:
    """Fixture providing the complete graph on nodes 1..4."""
    return GraphModel.from_edges([(1, 2), (1, 3), (1, 4), (2, 3), (2, 4), (3, 4)])


@pytest.fixture
def mixed_graph() -> GraphModel:
    """
    Fixture providing a graph with a cycle, a tail, a parallel edge,
    an isolated id (5) and a second component:

    1 - 2 - 3 - 6     7 - 8
    |   |
    0 - 4
    """
    return GraphModel.from_edges(
        [(0, 1), (1, 2), (2, 3), (2, 4), (0, 4), (3, 6), (7, 8), (2, 3)]
    )


class FakeClock:
    """Clock that moves one second forward on every reading."""

    def __init__(self):
        self.now = 0.0

    def time(self) -> float:
        self.now += 1.0
        return self.now


@pytest.fixture
def fake_clock(monkeypatch) -> FakeClock:
    """Fixture replacing the wall clock used by search budgets and memory checks."""
    clock = FakeClock()
    monkeypatch.setattr(utils, "time", clock)
    return clock


@pytest.fixture
def growing_memory(monkeypatch, fake_clock):
    """Fixture making every memory reading 100MB above the previous one."""
    usage = itertools.count(step=100 * 1024 * 1024)
    monkeypatch.setattr(utils, "get_memory_usage", lambda: next(usage))


@pytest.fixture
def tailed_clique_graph() -> GraphModel:
    """
    Fixture providing node 0 hanging off a complete graph on nodes 1..9.

    Pair (0, 1) is found in a single expansion; pair (0, 2) needs thousands.
    """
    edges = [(0, 1)] + [(a, b) for a in range(1, 10) for b in range(a + 1, 10)]
    return GraphModel.from_edges(edges)
