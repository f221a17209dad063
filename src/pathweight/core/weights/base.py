"""
Base class for all-pairs path weight strategies.

A strategy searches every connected pair of active nodes with the same
backtracking routine and differs only in what it does with each path found.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ..exceptions import SearchBudgetExceededError
from ..graph import GraphModel
from .models import PathStore, WeightResult
from .types import DEFAULT_MAX_HOPS, EdgeWeights, NodeWeights, PathCallback
from .utils import (
    DEADLINE_CHECK_INTERVAL,
    MemoryManager,
    SearchBudget,
    SearchState,
    candidate_pairs,
    seed_tables,
    validate_max_hops,
)

logger = logging.getLogger(__name__)


class WeightStrategy(ABC):
    """Abstract base class for all-pairs path weight strategies."""

    name: str = ""

    def __init__(
        self,
        budget: Optional[SearchBudget] = None,
        memory_manager: Optional[MemoryManager] = None,
        count_boundary_paths: bool = False,
    ):
        """Initialize strategy with optional resource guards."""
        self.budget = budget or SearchBudget()
        self.memory_manager = memory_manager or MemoryManager()
        self.count_boundary_paths = count_boundary_paths

    def run(self, graph: GraphModel, max_hops: int = DEFAULT_MAX_HOPS) -> WeightResult:
        """
        Search every connected pair of active nodes and build the weight tables.

        Only paths with fewer than ``max_hops`` edges are counted, or at most
        ``max_hops`` edges when boundary paths are counted.
        """
        validate_max_hops(max_hops)
        pairs = candidate_pairs(graph)
        self.budget.check_pairs(len(pairs))
        self.budget.start()

        node_weights, edge_weights = seed_tables(graph)
        logger.debug(
            "%s strategy: %d active nodes, %d pairs to search, max_hops=%d",
            self.name,
            len(graph.active_nodes),
            len(pairs),
            max_hops,
        )

        start = time.perf_counter()
        total, store = self._search_all(graph, pairs, max_hops, node_weights, edge_weights)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.debug("%s strategy found %d paths in %.1fms", self.name, total, duration_ms)

        return WeightResult(
            total_paths=total,
            node_weights=node_weights,
            edge_weights=edge_weights,
            max_hops=max_hops,
            strategy=self.name,
            pairs_searched=len(pairs),
            paths=store,
            duration_ms=duration_ms,
        )

    @abstractmethod
    def _search_all(
        self,
        graph: GraphModel,
        pairs: List[Tuple[int, int]],
        max_hops: int,
        node_weights: NodeWeights,
        edge_weights: EdgeWeights,
    ) -> Tuple[int, Optional[PathStore]]:
        """Search all pairs, fill the tables and return the path count."""
        pass

    def _search_pairs(
        self,
        graph: GraphModel,
        pairs: List[Tuple[int, int]],
        max_hops: int,
        on_path: PathCallback,
    ) -> int:
        """Search the given pairs in order, handing every path to ``on_path``."""
        total = 0
        for searched, (source, target) in enumerate(pairs):
            self.budget.check_deadline(searched)
            self.memory_manager.check_memory()
            try:
                total += self.search_pair(graph, source, target, max_hops, on_path)
            except SearchBudgetExceededError as e:
                if e.pairs_searched is not None:
                    raise
                raise SearchBudgetExceededError(e.limit, searched) from e
        return total

    def search_pair(
        self,
        graph: GraphModel,
        source: int,
        target: int,
        max_hops: int,
        on_path: PathCallback,
    ) -> int:
        """
        Count the simple paths from ``source`` to ``target`` by backtracking.

        The hop limit is tested before the target, so a branch that reaches the
        target exactly on the cutoff hop is not counted.
        """
        validate_max_hops(max_hops)
        adjacency = graph.adjacency
        cutoff = max_hops + 1 if self.count_boundary_paths else max_hops
        budget = self.budget
        state = SearchState()

        def dfs(node: int, hop: int) -> int:
            if hop >= cutoff:
                return 0
            if node == target:
                on_path((*state.path, node))
                return 1

            found = 0
            with state.visit(node):
                if state.expansions % DEADLINE_CHECK_INTERVAL == 0:
                    budget.check_deadline()
                for neighbor in adjacency[node]:
                    if neighbor not in state.visited:
                        found += dfs(neighbor, hop + 1)
            return found

        return dfs(source, 0)
