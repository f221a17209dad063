"""Sharded path weight accumulation across worker processes.

Each worker searches its own slice of the pair list into private tables (a
shard). The coordinator sums the shards once every worker is done, so no table
is ever written by two workers.
"""

import logging
import os
from concurrent.futures import Executor, ProcessPoolExecutor
from typing import List, Optional, Tuple

from ...graph import GraphModel
from ..base import WeightStrategy
from ..models import PathStore, record_path
from ..types import EdgeWeights, NodeWeights, StrategyType
from ..utils import MemoryManager, SearchBudget, merge_tables
from .accumulating import AccumulatingStrategy

logger = logging.getLogger(__name__)

# Shards per worker; more shards than workers evens out uneven pair costs
SHARDS_PER_WORKER = 4

Shard = Tuple[int, NodeWeights, EdgeWeights]


def _search_shard(
    graph: GraphModel,
    pairs: List[Tuple[int, int]],
    max_hops: int,
    count_boundary_paths: bool,
    deadline_at: Optional[float],
    max_memory_mb: Optional[float] = None,
) -> Shard:
    """Worker entry point: search ``pairs`` into fresh shard tables."""
    strategy = AccumulatingStrategy(
        budget=SearchBudget(deadline_at=deadline_at),
        memory_manager=MemoryManager(max_memory_mb),
        count_boundary_paths=count_boundary_paths,
    )
    node_weights: NodeWeights = {}
    edge_weights: EdgeWeights = {}
    total = strategy._search_pairs(
        graph, pairs, max_hops, lambda path: record_path(path, node_weights, edge_weights)
    )
    return total, node_weights, edge_weights


def split_pairs(pairs: List[Tuple[int, int]], shard_count: int) -> List[List[Tuple[int, int]]]:
    """Deal pairs round-robin into at most ``shard_count`` non-empty shards."""
    shard_count = max(1, min(shard_count, len(pairs)))
    return [pairs[i::shard_count] for i in range(shard_count)]


class ParallelStrategy(WeightStrategy):
    """
    Runs the accumulating search over independent node pairs concurrently.

    Pairs share only the read-only graph, so they can be searched in any order;
    summing the shard tables gives exactly the sequential result.

    Args:
        workers: Worker count for the internal process pool (default: CPU count)
        executor: Optional external executor; when given, ``workers`` only sizes
            the number of shards and the caller owns the executor's lifecycle
    """

    name = StrategyType.PARALLEL.value

    def __init__(
        self,
        workers: Optional[int] = None,
        executor: Optional[Executor] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        if workers is not None and workers <= 0:
            raise ValueError("workers must be positive")
        self.workers = workers or os.cpu_count() or 1
        self.executor = executor

    def _search_all(
        self,
        graph: GraphModel,
        pairs: List[Tuple[int, int]],
        max_hops: int,
        node_weights: NodeWeights,
        edge_weights: EdgeWeights,
    ) -> Tuple[int, Optional[PathStore]]:
        if not pairs:
            return 0, None

        shards = split_pairs(pairs, self.workers * SHARDS_PER_WORKER)
        logger.debug("Searching %d pairs in %d shards", len(pairs), len(shards))

        if self.executor is not None:
            results = self._map(self.executor, graph, shards, max_hops)
        else:
            with ProcessPoolExecutor(max_workers=self.workers) as pool:
                results = self._map(pool, graph, shards, max_hops)

        merge_tables(node_weights, edge_weights, ((nodes, edges) for _, nodes, edges in results))
        return sum(total for total, _, _ in results), None

    def _map(
        self,
        executor: Executor,
        graph: GraphModel,
        shards: List[List[Tuple[int, int]]],
        max_hops: int,
    ) -> List[Shard]:
        futures = [
            executor.submit(
                _search_shard,
                graph,
                shard,
                max_hops,
                self.count_boundary_paths,
                self.budget.deadline_at,
                self.memory_manager.max_memory_mb,
            )
            for shard in shards
        ]
        # Collected in submission order so the merge is deterministic
        results = []
        for future in futures:
            results.append(future.result())
            self.memory_manager.check_memory()
        return results
