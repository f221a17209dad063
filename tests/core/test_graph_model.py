"""Tests for the static graph model."""

import pytest

from pathweight.core.exceptions import InvalidEdgeError, NodeNotFoundError
from pathweight.core.graph import GraphModel, edge_key


def test_from_edges_builds_symmetric_adjacency(path_graph):
    """Test that every edge is inserted in both directions."""
    assert path_graph.neighbors(1) == (2,)
    assert path_graph.neighbors(2) == (1, 3)
    assert path_graph.neighbors(3) == (2,)
    assert path_graph.has_edge(1, 2) and path_graph.has_edge(2, 1)
    assert not path_graph.has_edge(1, 3)


def test_neighbors_keep_input_order():
    """Test that adjacency order follows the input order."""
    graph = GraphModel.from_edges([(5, 3), (5, 1), (2, 5)])
    assert graph.neighbors(5) == (3, 1, 2)


def test_id_space_is_dense_and_not_remapped():
    """Test that ids are used as-is and unused ids stay isolated."""
    graph = GraphModel.from_edges([(0, 3), (3, 6)])
    assert graph.id_max == 6
    assert graph.active_nodes == (0, 3, 6)
    assert graph.has_node(4)
    assert not graph.is_active(4)
    assert graph.neighbors(4) == ()
    assert not graph.has_node(7)
    assert len(graph) == 3


def test_active_nodes_are_ascending():
    """Test that active nodes come out sorted regardless of input order."""
    graph = GraphModel.from_edges([(9, 4), (2, 7)])
    assert graph.active_nodes == (2, 4, 7, 9)


def test_duplicate_edges_are_preserved():
    """Test that parallel input edges become parallel adjacency entries."""
    graph = GraphModel.from_edges([(1, 2), (2, 1), (1, 2)])
    assert graph.neighbors(1) == (2, 2, 2)
    assert graph.degree(2) == 3
    assert graph.edge_count == 3
    assert list(graph.edges()) == [(1, 2)]


def test_edges_are_distinct_and_normalized(mixed_graph):
    """Test distinct edge iteration."""
    assert list(mixed_graph.edges()) == [(0, 1), (0, 4), (1, 2), (2, 3), (2, 4), (3, 6), (7, 8)]
    assert mixed_graph.edge_count == 8


def test_empty_graph():
    """Test a graph built from no edges."""
    graph = GraphModel.from_edges([])
    assert graph.id_max == -1
    assert graph.active_nodes == ()
    assert graph.components() == []
    assert list(graph.edges()) == []
    assert len(graph) == 0


def test_components(mixed_graph):
    """Test connected component labelling."""
    assert mixed_graph.components() == [(0, 1, 2, 3, 4, 6), (7, 8)]
    assert mixed_graph.connected(0, 6)
    assert not mixed_graph.connected(1, 8)
    assert mixed_graph.component_index(8) == 1


def test_component_index_rejects_isolated_node(mixed_graph):
    """Test that isolated nodes have no component."""
    with pytest.raises(NodeNotFoundError, match="not an active node"):
        mixed_graph.component_index(5)


def test_neighbors_of_unknown_node(path_graph):
    """Test lookups outside the id space."""
    with pytest.raises(NodeNotFoundError, match="Node 10 not in graph"):
        path_graph.neighbors(10)
    with pytest.raises(NodeNotFoundError):
        path_graph.neighbors(-1)


@pytest.mark.parametrize(
    "edges, message",
    [
        ([(1, 1)], "self-loop"),
        ([(1, -2)], "negative node id"),
        ([(1, "2")], "non-integer node id"),
        ([(1.0, 2)], "non-integer node id"),
        ([(True, 2)], "non-integer node id"),
        ([(1, 2, 3)], "exactly two endpoints"),
    ],
)
def test_invalid_edges(edges, message):
    """Test rejection of edges that do not belong in a simple undirected graph."""
    with pytest.raises(InvalidEdgeError, match=message):
        GraphModel.from_edges(edges)


def test_invalid_edge_error_message():
    """Test that invalid edges are reported as graph operation errors."""
    with pytest.raises(InvalidEdgeError) as exc_info:
        GraphModel.from_edges([(2, 0), (3, 3)])
    assert str(exc_info.value) == "Graph Operation Error: Edge 1 is a self-loop on node 3"


def test_graph_is_immutable(path_graph):
    """Test that the model cannot be modified after construction."""
    with pytest.raises(AttributeError):
        path_graph.id_max = 10


def test_edge_key():
    """Test undirected edge normalization."""
    assert edge_key(3, 1) == (1, 3)
    assert edge_key(1, 3) == (1, 3)
