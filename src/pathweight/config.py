"""
Configuration for path weight analysis runs.

Settings come from three places, later ones winning: the defaults below, an
optional JSON config file validated against ``CONFIG_SCHEMA``, and command line
options.

Example config file::

    {
        "max_hops": 8,
        "top_n": 20,
        "rank": "edges",
        "strategy": "parallel",
        "workers": 4
    }
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate

from .core.exceptions import ConfigurationError
from .core.weights import DEFAULT_MAX_HOPS, MAX_HOPS_LIMIT, PathWeightEngine, StrategyType

DEFAULT_TOP_N = 10
RANK_KINDS = ("nodes", "edges")

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "max_hops": {"type": "integer", "minimum": 0, "maximum": MAX_HOPS_LIMIT},
        "top_n": {"type": "integer", "minimum": 0},
        "rank": {"enum": list(RANK_KINDS)},
        "strategy": {"enum": [member.value for member in StrategyType]},
        "workers": {"type": ["integer", "null"], "minimum": 1},
        "max_pairs": {"type": ["integer", "null"], "minimum": 0},
        "deadline_seconds": {"type": ["number", "null"], "exclusiveMinimum": 0},
        "max_memory_mb": {"type": ["number", "null"], "exclusiveMinimum": 0},
        "count_boundary_paths": {"type": "boolean"},
    },
}


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Settings of one analysis run (or of every file of a batch).

    Attributes:
        max_hops: Hop bound; paths need fewer edges than this to count
        top_n: Number of entries in a report
        rank: Whether reports rank ``"nodes"`` or ``"edges"``
        strategy: Engine strategy name
        workers: Worker processes for the parallel strategy
        max_pairs: Refuse graphs needing more pair searches than this
        deadline_seconds: Wall-clock limit of one run
        max_memory_mb: Memory growth limit of one run
        count_boundary_paths: Also count paths of exactly ``max_hops`` edges
    """

    max_hops: int = DEFAULT_MAX_HOPS
    top_n: int = DEFAULT_TOP_N
    rank: str = "nodes"
    strategy: str = StrategyType.ACCUMULATING.value
    workers: Optional[int] = None
    max_pairs: Optional[int] = None
    deadline_seconds: Optional[float] = None
    max_memory_mb: Optional[float] = None
    count_boundary_paths: bool = False

    def __post_init__(self):
        """Validate settings."""
        if isinstance(self.max_hops, bool) or not isinstance(self.max_hops, int):
            raise ConfigurationError("max_hops must be an integer")
        if self.max_hops < 0:
            raise ConfigurationError("max_hops must be non-negative")
        if self.max_hops > MAX_HOPS_LIMIT:
            raise ConfigurationError(f"max_hops cannot exceed {MAX_HOPS_LIMIT}")

        if isinstance(self.top_n, bool) or not isinstance(self.top_n, int):
            raise ConfigurationError("top_n must be an integer")
        if self.top_n < 0:
            raise ConfigurationError("top_n must be non-negative")

        if self.rank not in RANK_KINDS:
            raise ConfigurationError(f"rank must be one of {', '.join(RANK_KINDS)}")

        try:
            StrategyType.parse(self.strategy)
        except ValueError as e:
            raise ConfigurationError(str(e))

        if self.workers is not None and self.workers <= 0:
            raise ConfigurationError("workers must be positive")
        if self.max_pairs is not None and self.max_pairs < 0:
            raise ConfigurationError("max_pairs cannot be negative")
        if self.deadline_seconds is not None and self.deadline_seconds <= 0:
            raise ConfigurationError("deadline_seconds must be positive")
        if self.max_memory_mb is not None and self.max_memory_mb <= 0:
            raise ConfigurationError("max_memory_mb must be positive")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisConfig":
        """
        Build a config from a mapping, validated against ``CONFIG_SCHEMA``.

        Raises:
            ConfigurationError: If the mapping does not match the schema
        """
        try:
            validate(instance=data, schema=CONFIG_SCHEMA)
        except JsonSchemaError as e:
            raise ConfigurationError(f"Invalid config: {e.message}")
        return cls(**data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "AnalysisConfig":
        """
        Load a config from a JSON file.

        Raises:
            ConfigurationError: If the file is missing, unreadable or not valid JSON
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise ConfigurationError(f"Config file not found: {path}")
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file {path}: {e}")
        return cls.from_dict(data)

    def with_overrides(self, **overrides: Any) -> "AnalysisConfig":
        """Return a copy with the given settings replaced; ``None`` values are ignored."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"Unknown settings: {', '.join(sorted(unknown))}")
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)

    def build_engine(self) -> PathWeightEngine:
        """Create the engine these settings describe."""
        return PathWeightEngine(
            self.strategy,
            max_pairs=self.max_pairs,
            deadline_seconds=self.deadline_seconds,
            max_memory_mb=self.max_memory_mb,
            count_boundary_paths=self.count_boundary_paths,
            workers=self.workers,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
