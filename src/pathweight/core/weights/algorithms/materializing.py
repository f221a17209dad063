"""Path weight computation over explicitly stored paths."""

from typing import List, Optional, Tuple

from ...graph import GraphModel
from ..base import WeightStrategy
from ..models import PathStore
from ..types import EdgeWeights, NodeWeights, StrategyType


class MaterializingStrategy(WeightStrategy):
    """
    Stores every discovered path, then derives the weights in a second pass.

    Memory grows with the total length of all paths, so this strategy is meant
    for inspecting individual paths on small graphs. The stored paths are
    available as ``result.paths``.
    """

    name = StrategyType.MATERIALIZING.value

    def _search_all(
        self,
        graph: GraphModel,
        pairs: List[Tuple[int, int]],
        max_hops: int,
        node_weights: NodeWeights,
        edge_weights: EdgeWeights,
    ) -> Tuple[int, Optional[PathStore]]:
        store = PathStore(self.memory_manager)
        total = self._search_pairs(graph, pairs, max_hops, store.add)
        store.fill_tables(node_weights, edge_weights)
        return total, store
