"""
Custom exceptions for the path weight analysis system.

This module defines the hierarchy of custom exceptions used throughout the system
to handle the error conditions of graph loading and path enumeration. Each
exception type corresponds to a specific category of failure that may occur
while building a graph, searching it, or configuring an analysis run.
"""

from typing import Optional


class ValidationError(Exception):
    """
    Raised when input data validation fails.

    This exception is raised when input data fails to meet the required validation
    criteria, such as malformed edge-list lines.
    """

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"


class ParseError(ValidationError):
    """
    Raised when a line of an edge list cannot be decoded into an edge.

    The whole load is aborted on the first bad line so that no report is ever
    produced over a partially loaded graph.

    Attributes:
        line_number: 1-based line number of the offending line
        line: The offending line, without its trailing newline
        reason: Short description of what is wrong with the line

    Examples:
        * ``"1 2 3"`` (three fields)
        * ``"a b"`` (non-integer fields)
        * ``"-1 4"`` (negative node id)
    """

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}: {line!r}")


class InputFileError(Exception):
    """
    Raised when an input file cannot be read.

    Examples:
        * File does not exist
        * Permission denied
        * File is not valid text
    """


class ConfigurationError(Exception):
    """
    Raised when analysis configuration is invalid.

    Examples:
        * Negative hop bound
        * Unknown engine strategy
        * Config file that does not match the schema
    """

    def __str__(self) -> str:
        """Format configuration error message."""
        return f"Configuration Error: {super().__str__()}"


class GraphOperationError(Exception):
    """
    Raised when graph operations fail.

    This exception is raised when building or searching the graph encounters
    errors, such as invalid edges or an exhausted search budget.
    """

    def __str__(self) -> str:
        """Format graph operation error message."""
        return f"Graph Operation Error: {super().__str__()}"


class InvalidEdgeError(GraphOperationError):
    """
    Raised when an edge cannot be part of a simple undirected graph.

    Examples:
        * Negative node id
        * Non-integer node id
        * Self-loop ``(a, a)``
    """


class NodeNotFoundError(GraphOperationError):
    """Raised when a node id lies outside the graph's id space."""


class SearchBudgetExceededError(GraphOperationError):
    """
    Raised when a path search exceeds its configured resource budget.

    Attributes:
        pairs_searched: Number of node pairs fully searched before the stop
        limit: Human readable description of the budget that was hit
    """

    def __init__(self, limit: str, pairs_searched: Optional[int] = None):
        self.limit = limit
        self.pairs_searched = pairs_searched
        message = f"search budget exceeded: {limit}"
        if pairs_searched is not None:
            message += f" after {pairs_searched} pairs"
        super().__init__(message)

    def __reduce__(self):
        # Rebuilt from its fields when it crosses a process boundary
        return (self.__class__, (self.limit, self.pairs_searched))
