"""Input, output and batch processing around the path weight engine."""

from .batch import BatchRunner, BatchSummary, FileOutcome, analyze_file
from .edge_list import load_graph, parse_edge_line, parse_edge_lines, read_edge_list
from .report import format_edge_report, format_node_report, format_report, write_report

__all__ = [
    "BatchRunner",
    "BatchSummary",
    "FileOutcome",
    "analyze_file",
    "format_edge_report",
    "format_node_report",
    "format_report",
    "load_graph",
    "parse_edge_line",
    "parse_edge_lines",
    "read_edge_list",
    "write_report",
]
