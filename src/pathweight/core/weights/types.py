"""Type definitions for path weight computation."""

from enum import Enum
from typing import Callable, Dict, Tuple

from ..graph import EdgeKey

# Paths with this many edges or more are pruned unless boundary paths are counted
DEFAULT_MAX_HOPS = 13

# Upper bound on max_hops; the search recurses once per hop
MAX_HOPS_LIMIT = 500


class StrategyType(Enum):
    """Enumeration of path weight strategies."""

    ACCUMULATING = "accumulating"  # Single pass, weights folded in as paths are found
    MATERIALIZING = "materializing"  # Stores every path, weights derived afterwards
    PARALLEL = "parallel"  # Sharded accumulation across worker processes

    @classmethod
    def parse(cls, value: "str | StrategyType") -> "StrategyType":
        """Resolve a strategy from its enum member or its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown strategy {value!r} (expected one of: {choices})")


# Type alias for a discovered path, as an ordered tuple of node ids
NodePath = Tuple[int, ...]

# Type alias for per-node path counts
NodeWeights = Dict[int, int]

# Type alias for per-edge path counts, keyed by normalized (low, high) id pair
EdgeWeights = Dict[EdgeKey, int]

# Type alias for the callback invoked with every discovered path
PathCallback = Callable[[NodePath], None]
