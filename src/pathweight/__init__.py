"""
pathweight - Topological weights of graph nodes and edges

This package counts, for every pair of nodes of an undirected graph, the simple
paths between them up to a hop bound, and ranks nodes and edges by how many of
those paths run through them. It includes:

- A static graph model built from edge lists
- Interchangeable path weight strategies (accumulating, materializing, parallel)
- Edge-list parsing, ranking reports and batch processing
- A command line interface
"""

__version__ = "0.1.0"

# Version compatibility check
import sys

if sys.version_info < (3, 10):
    raise RuntimeError("pathweight requires Python 3.10 or higher")

# Import commonly used components for easier access
from .config import AnalysisConfig
from .core.graph import GraphModel
from .core.weights import PathWeightEngine, WeightResult

__all__ = [
    "AnalysisConfig",
    "GraphModel",
    "PathWeightEngine",
    "WeightResult",
]
