"""
Utility functions and helpers for path weight computation.
"""

import gc
import logging
import os
import time
from contextlib import contextmanager
from typing import Generator, Iterable, List, Optional, Set, Tuple

import psutil

from ..exceptions import SearchBudgetExceededError
from ..graph import GraphModel
from .types import MAX_HOPS_LIMIT, EdgeWeights, NodeWeights

logger = logging.getLogger(__name__)

# Node expansions between two deadline checks inside a single pair search
DEADLINE_CHECK_INTERVAL = 4096


def validate_max_hops(max_hops: int) -> None:
    """Validate the hop bound of a run."""
    if isinstance(max_hops, bool) or not isinstance(max_hops, int):
        raise TypeError("max_hops must be an integer")
    if max_hops < 0:
        raise ValueError("max_hops must be non-negative")
    if max_hops > MAX_HOPS_LIMIT:
        raise ValueError(f"max_hops cannot exceed {MAX_HOPS_LIMIT}")


class SearchState:
    """
    Pair-local search state: the visited markers and the current path prefix.

    A fresh state is created for every node pair, so nothing leaks from one
    pair's search into the next.
    """

    __slots__ = ("visited", "path", "expansions")

    def __init__(self) -> None:
        self.visited: Set[int] = set()
        self.path: List[int] = []
        self.expansions = 0

    @contextmanager
    def visit(self, node: int) -> Generator[None, None, None]:
        """Mark ``node`` visited and on the path; undone on every exit."""
        self.visited.add(node)
        self.path.append(node)
        self.expansions += 1
        try:
            yield
        finally:
            self.path.pop()
            self.visited.discard(node)


class SearchBudget:
    """
    Optional limits on a run: number of pair searches and wall-clock time.

    The deadline is stored as an absolute ``time.time()`` value once the budget
    is started, so a started budget can be shipped to worker processes.
    """

    def __init__(
        self,
        max_pairs: Optional[int] = None,
        deadline_seconds: Optional[float] = None,
        deadline_at: Optional[float] = None,
    ):
        self.max_pairs = max_pairs
        self.deadline_seconds = deadline_seconds
        self.deadline_at = deadline_at

    def start(self) -> "SearchBudget":
        """Start the clock for the deadline, if one is configured."""
        if self.deadline_seconds is not None:
            self.deadline_at = time.time() + self.deadline_seconds
        return self

    def check_pairs(self, pair_count: int) -> None:
        """Raise if a run of ``pair_count`` pair searches exceeds the pair budget."""
        if self.max_pairs is not None and pair_count > self.max_pairs:
            raise SearchBudgetExceededError(
                f"{pair_count} node pairs to search, limit is {self.max_pairs}", 0
            )

    def check_deadline(self, pairs_searched: Optional[int] = None) -> None:
        """Raise if the deadline has passed."""
        if self.deadline_at is not None and time.time() > self.deadline_at:
            if self.deadline_seconds is not None:
                limit = f"deadline of {self.deadline_seconds}s passed"
            else:
                limit = "deadline passed"
            raise SearchBudgetExceededError(limit, pairs_searched)


class MemoryManager:
    """Memory management utilities for path enumeration."""

    def __init__(self, max_memory_mb: Optional[float] = None):
        """Initialize memory manager."""
        # Force garbage collection at start
        gc.collect()

        self.max_memory_mb = max_memory_mb
        self.max_memory = max_memory_mb * 1024 * 1024 if max_memory_mb else None
        self.start_memory = get_memory_usage()
        self._peak_memory = self.start_memory
        self._last_check = time.time()
        self._check_interval = 0.1  # Check memory every 100ms

    def check_memory(self) -> None:
        """Check if memory usage exceeds limit."""
        if not self.max_memory:
            return

        current_time = time.time()
        if current_time - self._last_check < self._check_interval:
            return
        self._last_check = current_time

        current = get_memory_usage()
        self._peak_memory = max(self._peak_memory, current)

        if current - self.start_memory > self.max_memory:
            # Try to reclaim memory
            gc.collect()
            current = get_memory_usage()

            if current - self.start_memory > self.max_memory:
                raise MemoryError(
                    f"Memory usage {current/1024/1024:.1f}MB exceeds "
                    f"limit of {self.max_memory/1024/1024:.1f}MB"
                )

    @property
    def peak_memory_mb(self) -> float:
        """Get peak memory usage in MB."""
        return self._peak_memory / 1024 / 1024


def get_memory_usage() -> int:
    """Get current memory usage in bytes."""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss


def candidate_pairs(graph: GraphModel) -> List[Tuple[int, int]]:
    """
    List the node pairs a run has to search.

    Every unordered pair ``(u, v)`` of active nodes with ``u < v`` appears once,
    in ascending order. Pairs in different connected components are left out:
    no path can join them.
    """
    pairs: List[Tuple[int, int]] = []
    for component in graph.components():
        for i, source in enumerate(component):
            for target in component[i + 1 :]:
                pairs.append((source, target))
    pairs.sort()
    return pairs


def seed_tables(graph: GraphModel) -> Tuple[NodeWeights, EdgeWeights]:
    """
    Create weight tables with a zero entry for every active node and edge.

    A graph with fewer than two active nodes has no pair to search and gets
    empty tables.
    """
    if len(graph.active_nodes) < 2:
        return {}, {}
    node_weights: NodeWeights = {node: 0 for node in graph.active_nodes}
    edge_weights: EdgeWeights = {key: 0 for key in graph.edges()}
    return node_weights, edge_weights


def merge_tables(
    node_weights: NodeWeights,
    edge_weights: EdgeWeights,
    shards: Iterable[Tuple[NodeWeights, EdgeWeights]],
) -> None:
    """Sum worker-private shard tables into the given tables."""
    for shard_nodes, shard_edges in shards:
        for node, weight in shard_nodes.items():
            node_weights[node] = node_weights.get(node, 0) + weight
        for key, weight in shard_edges.items():
            edge_weights[key] = edge_weights.get(key, 0) + weight
