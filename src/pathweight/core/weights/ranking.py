"""Ranking of weight tables into deterministic top-N lists."""

from heapq import nsmallest
from typing import List, Mapping, Tuple

from ..graph import EdgeKey


def top_nodes_by_weight(node_weights: Mapping[int, int], n: int) -> List[Tuple[int, int]]:
    """
    Return the ``n`` heaviest ``(node, weight)`` pairs.

    Sorted by weight descending; equal weights are ordered by node id ascending.
    """
    if n <= 0:
        return []
    return nsmallest(n, node_weights.items(), key=lambda item: (-item[1], item[0]))


def top_edges_by_weight(
    edge_weights: Mapping[EdgeKey, int], n: int
) -> List[Tuple[EdgeKey, int]]:
    """
    Return the ``n`` heaviest ``((a, b), weight)`` pairs.

    Sorted by weight descending; equal weights are ordered by ``(a, b)`` ascending.
    """
    if n <= 0:
        return []
    return nsmallest(n, edge_weights.items(), key=lambda item: (-item[1], item[0]))
