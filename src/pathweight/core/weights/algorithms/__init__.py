"""Path weight strategies."""

from .accumulating import AccumulatingStrategy
from .materializing import MaterializingStrategy
from .parallel import ParallelStrategy

__all__ = [
    "AccumulatingStrategy",
    "MaterializingStrategy",
    "ParallelStrategy",
]
