"""Path weight computation functionality."""

import logging
from concurrent.futures import Executor
from typing import Dict, List, Mapping, Optional, Tuple, Type, Union

from ..graph import EdgeKey, GraphModel
from .algorithms import AccumulatingStrategy, MaterializingStrategy, ParallelStrategy
from .base import WeightStrategy
from .models import PathStore, WeightResult
from .ranking import top_edges_by_weight, top_nodes_by_weight
from .types import (
    DEFAULT_MAX_HOPS,
    MAX_HOPS_LIMIT,
    EdgeWeights,
    NodePath,
    NodeWeights,
    StrategyType,
)
from .utils import MemoryManager, SearchBudget

logger = logging.getLogger(__name__)

STRATEGIES: Dict[StrategyType, Type[WeightStrategy]] = {
    StrategyType.ACCUMULATING: AccumulatingStrategy,
    StrategyType.MATERIALIZING: MaterializingStrategy,
    StrategyType.PARALLEL: ParallelStrategy,
}

__all__ = [
    "DEFAULT_MAX_HOPS",
    "MAX_HOPS_LIMIT",
    "EdgeWeights",
    "NodePath",
    "NodeWeights",
    "PathStore",
    "PathWeightEngine",
    "StrategyType",
    "WeightResult",
    "WeightStrategy",
    "run",
    "top_edges_by_weight",
    "top_nodes_by_weight",
]


class PathWeightEngine:
    """
    All-pairs bounded simple-path weight engine.

    The engine picks one of the interchangeable strategies and applies the
    optional resource guards to it. Every strategy yields the same result.

    Example:
        >>> graph = GraphModel.from_edges([(1, 2), (2, 3), (1, 3)])
        >>> total, node_weights, edge_weights = PathWeightEngine().run(graph)
        >>> total
        6
    """

    def __init__(
        self,
        strategy: Union[str, StrategyType] = StrategyType.ACCUMULATING,
        *,
        max_pairs: Optional[int] = None,
        deadline_seconds: Optional[float] = None,
        max_memory_mb: Optional[float] = None,
        count_boundary_paths: bool = False,
        workers: Optional[int] = None,
        executor: Optional[Executor] = None,
    ):
        self.strategy_type = StrategyType.parse(strategy)
        self.max_pairs = max_pairs
        self.deadline_seconds = deadline_seconds
        self.max_memory_mb = max_memory_mb
        self.count_boundary_paths = count_boundary_paths
        self.workers = workers
        self.executor = executor

    def create_strategy(self) -> WeightStrategy:
        """Build a fresh strategy instance for one run."""
        options = dict(
            budget=SearchBudget(self.max_pairs, self.deadline_seconds),
            memory_manager=MemoryManager(self.max_memory_mb),
            count_boundary_paths=self.count_boundary_paths,
        )
        if self.strategy_type is StrategyType.PARALLEL:
            return ParallelStrategy(workers=self.workers, executor=self.executor, **options)
        return STRATEGIES[self.strategy_type](**options)

    def run(self, graph: GraphModel, max_hops: int = DEFAULT_MAX_HOPS) -> WeightResult:
        """
        Compute total path count plus node and edge weights for ``graph``.

        Returns:
            WeightResult, unpackable as ``(total_paths, node_weights, edge_weights)``

        Raises:
            ValueError: If ``max_hops`` is negative or above ``MAX_HOPS_LIMIT``
            SearchBudgetExceededError: If a pair budget or deadline is exceeded
            MemoryError: If the memory limit is exceeded
        """
        logger.debug("Running %s strategy", self.strategy_type.value)
        return self.create_strategy().run(graph, max_hops)

    @staticmethod
    def top_nodes_by_weight(node_weights: Mapping[int, int], n: int) -> List[Tuple[int, int]]:
        """Return the ``n`` heaviest nodes; see :func:`top_nodes_by_weight`."""
        return top_nodes_by_weight(node_weights, n)

    @staticmethod
    def top_edges_by_weight(
        edge_weights: Mapping[EdgeKey, int], n: int
    ) -> List[Tuple[EdgeKey, int]]:
        """Return the ``n`` heaviest edges; see :func:`top_edges_by_weight`."""
        return top_edges_by_weight(edge_weights, n)


def run(
    graph: GraphModel,
    max_hops: int = DEFAULT_MAX_HOPS,
    strategy: Union[str, StrategyType] = StrategyType.ACCUMULATING,
    **kwargs,
) -> WeightResult:
    """Shortcut for ``PathWeightEngine(strategy, **kwargs).run(graph, max_hops)``."""
    return PathWeightEngine(strategy, **kwargs).run(graph, max_hops)
