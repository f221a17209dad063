"""
Edge-list input parsing.

An edge list holds one undirected edge per line as two whitespace-separated
non-negative integers (``source target``). Blank lines are ignored. Any other
line aborts the load with a ParseError: a report is never produced over a
partially loaded graph. Duplicate edges are kept and become parallel adjacency
entries.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..core.exceptions import InputFileError, InvalidEdgeError, ParseError
from ..core.graph import GraphModel

logger = logging.getLogger(__name__)

Edge = Tuple[int, int]


def parse_edge_line(line: str, line_number: int) -> Optional[Edge]:
    """
    Decode one edge-list line.

    Returns:
        The ``(source, target)`` pair, or None for a blank line

    Raises:
        ParseError: If the line is not two distinct non-negative integers
    """
    text = line.rstrip("\r\n")
    fields = text.split()
    if not fields:
        return None
    if len(fields) != 2:
        raise ParseError(line_number, text, f"expected 2 fields, got {len(fields)}")

    try:
        source, target = int(fields[0]), int(fields[1])
    except ValueError:
        raise ParseError(line_number, text, "node ids must be integers")

    if source < 0 or target < 0:
        raise ParseError(line_number, text, "node ids must be non-negative")
    if source == target:
        raise ParseError(line_number, text, "self-loops are not supported")
    return source, target


def parse_edge_lines(lines: Iterable[str]) -> List[Edge]:
    """Decode every line of an edge list, skipping blank lines."""
    edges: List[Edge] = []
    for line_number, line in enumerate(lines, start=1):
        edge = parse_edge_line(line, line_number)
        if edge is not None:
            edges.append(edge)
    return edges


def read_edge_list(path: Union[str, Path]) -> List[Edge]:
    """
    Read all edges from an edge-list file.

    Raises:
        InputFileError: If the file cannot be opened or decoded
        ParseError: If a line is malformed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            edges = parse_edge_lines(f)
    except OSError as e:
        raise InputFileError(f"Cannot read edge list {path}: {e}")
    except UnicodeDecodeError as e:
        raise InputFileError(f"Edge list {path} is not valid UTF-8 text: {e}")

    logger.debug("Read %d edges from %s", len(edges), path)
    return edges


def load_graph(path: Union[str, Path]) -> GraphModel:
    """Read an edge-list file and build its graph."""
    edges = read_edge_list(path)
    try:
        return GraphModel.from_edges(edges)
    except InvalidEdgeError as e:
        # parse_edge_line already rejects everything from_edges would
        raise InputFileError(f"Edge list {path} holds an invalid edge: {e}")
