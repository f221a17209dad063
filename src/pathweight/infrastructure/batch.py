"""
Batch analysis of a directory of edge lists.

Every file under the input directory is analysed on its own and gets one
report under the output directory, at the same relative path. A file that
fails to load, exceeds its budget or cannot have its report written is logged
and recorded; the remaining files are still processed.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Union

from ..config import AnalysisConfig
from ..core.exceptions import InputFileError, ParseError, SearchBudgetExceededError
from ..core.weights import PathWeightEngine, WeightResult
from .edge_list import load_graph
from .report import format_report, write_report

logger = logging.getLogger(__name__)


@dataclass
class FileOutcome:
    """Outcome of analysing a single input file."""

    input_path: Path
    output_path: Optional[Path] = None
    result: Optional[WeightResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchSummary:
    """Outcomes of one batch run, in processing order."""

    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.ok]

    @property
    def failed(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]


def analyze_file(
    path: Union[str, Path],
    config: AnalysisConfig,
    engine: Optional[PathWeightEngine] = None,
) -> WeightResult:
    """
    Load one edge list and compute its weights.

    Raises:
        InputFileError: If the file cannot be read
        ParseError: If the file holds a malformed line
        SearchBudgetExceededError: If the configured budget is exceeded
    """
    graph = load_graph(path)
    engine = engine or config.build_engine()
    result = engine.run(graph, config.max_hops)
    logger.info("%s : %d", Path(path).name, result.total_paths)
    return result


class BatchRunner:
    """
    Runs one analysis per file of an input directory tree.

    Args:
        input_dir: Root directory of edge-list files
        output_dir: Root directory for reports, mirroring ``input_dir``
        config: Settings shared by every file
    """

    def __init__(
        self,
        input_dir: Union[str, Path],
        output_dir: Union[str, Path],
        config: Optional[AnalysisConfig] = None,
    ):
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir)
        self.config = config or AnalysisConfig()

    def iter_inputs(self) -> Iterator[Path]:
        """Yield every regular file under the input directory, in sorted order."""
        if not self.input_dir.is_dir():
            raise InputFileError(f"Input directory not found: {self.input_dir}")
        for path in sorted(self.input_dir.rglob("*")):
            if path.is_file():
                yield path

    def output_path_for(self, input_path: Path) -> Path:
        """Map an input file to its report path under the output directory."""
        return self.output_dir / input_path.relative_to(self.input_dir)

    def run(self) -> BatchSummary:
        """Analyse every input file and write its report."""
        summary = BatchSummary()
        engine = self.config.build_engine()

        for input_path in self.iter_inputs():
            outcome = FileOutcome(input_path=input_path)
            try:
                outcome.result = analyze_file(input_path, self.config, engine)
                lines = format_report(outcome.result, self.config.top_n, self.config.rank)
                outcome.output_path = write_report(lines, self.output_path_for(input_path))
            except (InputFileError, ParseError, SearchBudgetExceededError, MemoryError) as e:
                logger.error("Skipping %s: %s", input_path, e)
                outcome.error = str(e)
            except OSError as e:
                logger.error("Cannot write report for %s: %s", input_path, e)
                outcome.error = str(e)
            summary.outcomes.append(outcome)

        logger.info(
            "Batch finished: %d succeeded, %d failed",
            len(summary.succeeded),
            len(summary.failed),
        )
        return summary
