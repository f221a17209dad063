"""
Plain-text ranking reports.

Node reports hold one ``node-<id> : <weight>`` line per ranked node, edge
reports one ``edge-<a>-<b> : <weight>`` line per ranked edge, heaviest first.
A report over an empty ranking is empty.
"""

import logging
from pathlib import Path
from typing import List, Union

from ..core.weights import WeightResult, top_edges_by_weight, top_nodes_by_weight

logger = logging.getLogger(__name__)


def format_node_report(result: WeightResult, top_n: int = 10) -> List[str]:
    """Render the ``top_n`` heaviest nodes as report lines."""
    return [
        f"node-{node} : {weight}"
        for node, weight in top_nodes_by_weight(result.node_weights, top_n)
    ]


def format_edge_report(result: WeightResult, top_n: int = 10) -> List[str]:
    """Render the ``top_n`` heaviest edges as report lines."""
    return [
        f"edge-{a}-{b} : {weight}"
        for (a, b), weight in top_edges_by_weight(result.edge_weights, top_n)
    ]


def format_report(result: WeightResult, top_n: int = 10, rank: str = "nodes") -> List[str]:
    """Render a node or edge report."""
    if rank == "nodes":
        return format_node_report(result, top_n)
    if rank == "edges":
        return format_edge_report(result, top_n)
    raise ValueError(f"rank must be 'nodes' or 'edges', got {rank!r}")


def write_report(lines: List[str], path: Union[str, Path]) -> Path:
    """
    Write report lines to ``path``, creating parent directories as needed.

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
    logger.debug("Wrote %d report lines to %s", len(lines), path)
    return path
