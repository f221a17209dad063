"""
Static undirected graph with a dense integer id space.

This module provides the GraphModel class that represents the analysed graph
using an adjacency list indexed directly by node id. The graph is built once
from a sequence of undirected edges and is immutable afterwards, so it can be
shared freely between searches (and pickled to worker processes).

Duplicate input edges are kept as parallel adjacency entries. Ids are not
remapped: an id in ``0..id_max`` with no incident edge is simply isolated.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from .exceptions import InvalidEdgeError, NodeNotFoundError

EdgeKey = Tuple[int, int]


def edge_key(a: int, b: int) -> EdgeKey:
    """Normalize an undirected edge to its ``(low, high)`` id pair."""
    return (a, b) if a <= b else (b, a)


def _validate_edge(index: int, a: object, b: object) -> Tuple[int, int]:
    for value in (a, b):
        # bool is an int subclass but never a node id
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidEdgeError(f"Edge {index} has non-integer node id {value!r}")
        if value < 0:
            raise InvalidEdgeError(f"Edge {index} has negative node id {value}")
    if a == b:
        raise InvalidEdgeError(f"Edge {index} is a self-loop on node {a}")
    return a, b  # type: ignore[return-value]


@dataclass(frozen=True)
class GraphModel:
    """
    Immutable adjacency representation of an undirected graph.

    Attributes:
        adjacency: Neighbor ids per node id, in input order, duplicates kept
        id_max: Largest node id seen, ``-1`` for an empty graph
        active_nodes: Ascending ids of nodes with at least one incident edge
        edge_count: Number of input edges, parallel duplicates included

    Example:
        >>> graph = GraphModel.from_edges([(1, 2), (2, 3)])
        >>> graph.active_nodes
        (1, 2, 3)
        >>> list(graph.neighbors(2))
        [1, 3]
    """

    adjacency: Tuple[Tuple[int, ...], ...]
    id_max: int
    active_nodes: Tuple[int, ...]
    edge_count: int
    _component_of: Dict[int, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Label connected components."""
        object.__setattr__(
            self, "_component_of", _label_components(self.adjacency, self.active_nodes)
        )

    @classmethod
    def from_edges(cls, edges: Iterable[Sequence[int]]) -> "GraphModel":
        """
        Build a graph from undirected ``(a, b)`` pairs.

        Both directions are inserted for every edge, in input order.

        Raises:
            InvalidEdgeError: If an edge is not a pair of distinct non-negative ints
        """
        pairs: List[Tuple[int, int]] = []
        for index, edge in enumerate(edges):
            if len(edge) != 2:
                raise InvalidEdgeError(f"Edge {index} must have exactly two endpoints")
            pairs.append(_validate_edge(index, edge[0], edge[1]))

        id_max = max((max(a, b) for a, b in pairs), default=-1)
        neighbors: List[List[int]] = [[] for _ in range(id_max + 1)]
        for a, b in pairs:
            neighbors[a].append(b)
            neighbors[b].append(a)

        adjacency = tuple(tuple(row) for row in neighbors)
        active = tuple(node for node, row in enumerate(adjacency) if row)
        return cls(
            adjacency=adjacency,
            id_max=id_max,
            active_nodes=active,
            edge_count=len(pairs),
        )

    def has_node(self, node: int) -> bool:
        """Return True if ``node`` lies in the dense id space ``0..id_max``."""
        return isinstance(node, int) and 0 <= node <= self.id_max

    def _check_node(self, node: int) -> None:
        if not self.has_node(node):
            raise NodeNotFoundError(f"Node {node} not in graph (id_max={self.id_max})")

    def neighbors(self, node: int) -> Tuple[int, ...]:
        """Return the neighbor ids of ``node`` in adjacency order."""
        self._check_node(node)
        return self.adjacency[node]

    def degree(self, node: int) -> int:
        """Return the number of adjacency entries of ``node``."""
        return len(self.neighbors(node))

    def is_active(self, node: int) -> bool:
        """Return True if ``node`` has at least one incident edge."""
        return self.has_node(node) and bool(self.adjacency[node])

    def has_edge(self, a: int, b: int) -> bool:
        """Return True if ``a`` and ``b`` are adjacent."""
        return self.has_node(a) and self.has_node(b) and b in self.adjacency[a]

    def edges(self) -> Iterator[EdgeKey]:
        """Yield each distinct adjacent pair once, as ascending ``(low, high)``."""
        for node in self.active_nodes:
            for neighbor in sorted(set(self.adjacency[node])):
                if node < neighbor:
                    yield (node, neighbor)

    def components(self) -> List[Tuple[int, ...]]:
        """Return connected components of active nodes, ordered by smallest member."""
        grouped: Dict[int, List[int]] = {}
        for node in self.active_nodes:
            grouped.setdefault(self._component_of[node], []).append(node)
        return [tuple(grouped[label]) for label in sorted(grouped)]

    def component_index(self, node: int) -> int:
        """Return the component label of an active node."""
        if not self.is_active(node):
            raise NodeNotFoundError(f"Node {node} is not an active node")
        return self._component_of[node]

    def connected(self, a: int, b: int) -> bool:
        """Return True if two active nodes share a connected component."""
        return self.component_index(a) == self.component_index(b)

    def __len__(self) -> int:
        """Return the number of active nodes."""
        return len(self.active_nodes)


def _label_components(
    adjacency: Tuple[Tuple[int, ...], ...], active: Tuple[int, ...]
) -> Dict[int, int]:
    """Label every active node with the index of its connected component."""
    labels: Dict[int, int] = {}
    next_label = 0
    for root in active:
        if root in labels:
            continue
        labels[root] = next_label
        stack = [root]
        while stack:
            node = stack.pop()
            for neighbor in adjacency[node]:
                if neighbor not in labels:
                    labels[neighbor] = next_label
                    stack.append(neighbor)
        next_label += 1
    return labels
