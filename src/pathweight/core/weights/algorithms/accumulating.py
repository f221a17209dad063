"""On-the-fly path weight accumulation."""

from typing import List, Optional, Tuple

from ...graph import GraphModel
from ..base import WeightStrategy
from ..models import PathStore, record_path
from ..types import EdgeWeights, NodePath, NodeWeights, StrategyType


class AccumulatingStrategy(WeightStrategy):
    """
    Folds every path into the weight tables the moment it is found.

    Paths are never kept, so extra memory is bounded by the tables themselves
    no matter how many paths the graph holds. This is the default strategy.
    """

    name = StrategyType.ACCUMULATING.value

    def _search_all(
        self,
        graph: GraphModel,
        pairs: List[Tuple[int, int]],
        max_hops: int,
        node_weights: NodeWeights,
        edge_weights: EdgeWeights,
    ) -> Tuple[int, Optional[PathStore]]:
        def record(path: NodePath) -> None:
            record_path(path, node_weights, edge_weights)

        return self._search_pairs(graph, pairs, max_hops, record), None
