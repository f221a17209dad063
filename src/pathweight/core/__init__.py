"""Core graph and path weight functionality."""

from .exceptions import (
    ConfigurationError,
    GraphOperationError,
    InputFileError,
    InvalidEdgeError,
    NodeNotFoundError,
    ParseError,
    SearchBudgetExceededError,
    ValidationError,
)
from .graph import EdgeKey, GraphModel, edge_key
from .weights import (
    DEFAULT_MAX_HOPS,
    PathWeightEngine,
    StrategyType,
    WeightResult,
    top_edges_by_weight,
    top_nodes_by_weight,
)

__all__ = [
    "ConfigurationError",
    "DEFAULT_MAX_HOPS",
    "EdgeKey",
    "GraphModel",
    "GraphOperationError",
    "InputFileError",
    "InvalidEdgeError",
    "NodeNotFoundError",
    "ParseError",
    "PathWeightEngine",
    "SearchBudgetExceededError",
    "StrategyType",
    "ValidationError",
    "WeightResult",
    "edge_key",
    "top_edges_by_weight",
    "top_nodes_by_weight",
]
