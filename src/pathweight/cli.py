"""Command Line Interface for path weight analysis.

This module provides a CLI that ranks the nodes (or edges) of undirected graphs
by the number of bounded-length simple paths running through them.

The CLI supports the following commands:
    - analyze: Analyse a single edge-list file and print or write its report
    - batch: Analyse every file under a directory, mirroring it into an output directory

Settings can be given as options or as a JSON config file passed with
``--config @path/to/config.json``; options override the file.

Example Usage:
    python -m pathweight analyze graph/real/net1.txt --top-n 5
    python -m pathweight batch graph/real result/real --max-hops 10
    python -m pathweight batch graph result --config @analysis.json --rank edges
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import RANK_KINDS, AnalysisConfig
from .core.exceptions import (
    ConfigurationError,
    InputFileError,
    ParseError,
    SearchBudgetExceededError,
)
from .core.weights import StrategyType
from .infrastructure.batch import BatchRunner, analyze_file
from .infrastructure.report import format_report, write_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)


def load_config(args: argparse.Namespace) -> AnalysisConfig:
    """Build the run configuration from an optional config file and CLI options.

    Args:
        args: Parsed command line arguments.

    Returns:
        AnalysisConfig: Settings with CLI options applied over the file.

    Raises:
        ConfigurationError: If the file or any option is invalid.
    """
    config = AnalysisConfig()
    if args.config:
        # Accept both '@file.json' and a bare path
        config = AnalysisConfig.from_file(args.config.removeprefix("@"))

    return config.with_overrides(
        max_hops=args.max_hops,
        top_n=args.top_n,
        rank=args.rank,
        strategy=args.strategy,
        workers=args.workers,
        max_pairs=args.max_pairs,
        deadline_seconds=args.deadline,
        max_memory_mb=args.max_memory_mb,
        count_boundary_paths=True if args.count_boundary_paths else None,
    )


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the analysis options shared by all commands."""
    parser.add_argument("--config", help="JSON config file, optionally prefixed with '@'")
    parser.add_argument("--max-hops", type=int, help="Paths need fewer edges than this (default 13)")
    parser.add_argument("--top-n", type=int, help="Number of ranked entries per report (default 10)")
    parser.add_argument("--rank", choices=RANK_KINDS, help="Rank nodes or edges (default nodes)")
    parser.add_argument(
        "--strategy",
        choices=[member.value for member in StrategyType],
        help="Path weight strategy (default accumulating)",
    )
    parser.add_argument("--workers", type=int, help="Worker processes for the parallel strategy")
    parser.add_argument("--max-pairs", type=int, help="Refuse graphs needing more pair searches")
    parser.add_argument("--deadline", type=float, help="Time limit per graph, in seconds")
    parser.add_argument("--max-memory-mb", type=float, help="Memory growth limit per graph")
    parser.add_argument(
        "--count-boundary-paths",
        action="store_true",
        help="Also count paths with exactly max-hops edges",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default INFO)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(
        prog="pathweight", description="Rank graph nodes or edges by bounded simple-path counts"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    analyze = subparsers.add_parser("analyze", help="Analyse a single edge-list file")
    analyze.add_argument("edge_file", help="Edge-list file, one 'source target' pair per line")
    analyze.add_argument("--output", help="Write the report here instead of stdout")
    add_common_arguments(analyze)

    batch = subparsers.add_parser("batch", help="Analyse every file under a directory")
    batch.add_argument("input_dir", help="Directory of edge-list files")
    batch.add_argument("output_dir", help="Directory for reports, mirroring input_dir")
    add_common_arguments(batch)

    return parser


def run_analyze(args: argparse.Namespace, config: AnalysisConfig) -> int:
    """Handle the analyze command."""
    try:
        result = analyze_file(args.edge_file, config)
    except (InputFileError, ParseError, SearchBudgetExceededError, MemoryError) as e:
        logger.error("%s: %s", args.edge_file, e)
        return EXIT_FAILED

    lines = format_report(result, config.top_n, config.rank)
    if args.output:
        try:
            write_report(lines, args.output)
        except OSError as e:
            logger.error("Cannot write report to %s: %s", args.output, e)
            return EXIT_FAILED
    else:
        for line in lines:
            print(line)
    return EXIT_OK


def run_batch(args: argparse.Namespace, config: AnalysisConfig) -> int:
    """Handle the batch command."""
    try:
        summary = BatchRunner(args.input_dir, args.output_dir, config).run()
    except InputFileError as e:
        logger.error("%s", e)
        return EXIT_FAILED
    return EXIT_FAILED if summary.failed else EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI application.

    Returns:
        int: Process exit code.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_CONFIG

    configure_logging(args.log_level)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        logger.error("%s", e)
        return EXIT_CONFIG

    if args.command == "analyze":
        return run_analyze(args, config)
    return run_batch(args, config)


if __name__ == "__main__":
    sys.exit(main())
