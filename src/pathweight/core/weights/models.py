"""
Data models for path weight computation.

This module provides the result containers used throughout the weights package:
- WeightResult: Final path count plus node and edge weight tables of one run
- PathStore: Explicit list of discovered paths with lazily cached weight queries

Example:
    >>> total, node_weights, edge_weights = engine.run(graph, max_hops=13)
    >>> result = engine.run(graph)
    >>> result.edge_weight(2, 1) == result.edge_weight(1, 2)
    True
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from ..graph import EdgeKey, edge_key
from .types import EdgeWeights, NodePath, NodeWeights


@dataclass(frozen=True)
class WeightResult:
    """
    Container for the outcome of one all-pairs path weight run.

    The result unpacks as ``(total_paths, node_weights, edge_weights)``.

    Attributes:
        total_paths: Number of simple paths found over all node pairs
        node_weights: Paths through each active node, endpoints included
        edge_weights: Paths over each undirected edge, keyed ``(low, high)``
        max_hops: Hop bound the run used
        strategy: Name of the strategy that produced the result
        pairs_searched: Number of node pairs actually searched
        paths: Stored paths, only for the materializing strategy
        duration_ms: Wall-clock time of the run
    """

    total_paths: int
    node_weights: NodeWeights
    edge_weights: EdgeWeights
    max_hops: int
    strategy: str
    pairs_searched: int = 0
    paths: Optional["PathStore"] = field(default=None, compare=False, repr=False)
    duration_ms: float = field(default=0.0, compare=False)

    def __iter__(self) -> Iterator[Any]:
        """Iterate as the ``(total_paths, node_weights, edge_weights)`` triple."""
        return iter((self.total_paths, self.node_weights, self.edge_weights))

    def node_weight(self, node: int) -> int:
        """Weight of ``node``, 0 for nodes absent from the table."""
        return self.node_weights.get(node, 0)

    def edge_weight(self, a: int, b: int) -> int:
        """Weight of the undirected edge ``(a, b)``, in either orientation."""
        return self.edge_weights.get(edge_key(a, b), 0)

    @property
    def is_empty(self) -> bool:
        """True when no pair could be searched (fewer than two active nodes)."""
        return not self.node_weights

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the result to a JSON friendly dictionary.

        Returns:
            Dictionary with stringified node and edge keys
        """
        return {
            "strategy": self.strategy,
            "max_hops": self.max_hops,
            "total_paths": self.total_paths,
            "pairs_searched": self.pairs_searched,
            "duration_ms": self.duration_ms,
            "node_weights": {str(node): weight for node, weight in self.node_weights.items()},
            "edge_weights": {
                f"{a}-{b}": weight for (a, b), weight in self.edge_weights.items()
            },
        }


class PathStore:
    """
    Explicit store of every discovered path.

    Weight queries scan the stored paths and are cached per node and per edge,
    which makes inspecting a handful of nodes or edges cheap once the search is
    done. Memory grows with the total length of all stored paths.
    """

    def __init__(self, memory_manager: Optional[Any] = None):
        self._paths: List[NodePath] = []
        self._memory_manager = memory_manager
        self._node_cache: Dict[int, int] = {}
        self._edge_cache: Dict[EdgeKey, int] = {}

    def add(self, path: NodePath) -> None:
        """Store one discovered path."""
        if self._memory_manager is not None:
            self._memory_manager.check_memory()
        self._paths.append(path)
        self._node_cache.clear()
        self._edge_cache.clear()

    @property
    def paths(self) -> List[NodePath]:
        return self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[NodePath]:
        return iter(self._paths)

    def node_weight(self, node: int) -> int:
        """Number of stored paths that visit ``node``."""
        if node not in self._node_cache:
            self._node_cache[node] = sum(1 for path in self._paths if node in path)
        return self._node_cache[node]

    def edge_weight(self, a: int, b: int) -> int:
        """Number of stored paths that traverse the edge ``(a, b)`` in either direction."""
        key = edge_key(a, b)
        if key not in self._edge_cache:
            count = 0
            for path in self._paths:
                # A simple path crosses any edge at most once
                if any(edge_key(left, right) == key for left, right in zip(path, path[1:])):
                    count += 1
            self._edge_cache[key] = count
        return self._edge_cache[key]

    def fill_tables(self, node_weights: NodeWeights, edge_weights: EdgeWeights) -> None:
        """Fold every stored path into the given weight tables in one pass."""
        for path in self._paths:
            record_path(path, node_weights, edge_weights)


def record_path(path: NodePath, node_weights: NodeWeights, edge_weights: EdgeWeights) -> None:
    """Add one path to the node and edge weight tables."""
    for node in path:
        node_weights[node] = node_weights.get(node, 0) + 1
    for left, right in zip(path, path[1:]):
        key = edge_key(left, right)
        edge_weights[key] = edge_weights.get(key, 0) + 1
