"""Exceptions raised while loading and querying a genome."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


class LineageError(Exception):
    """Base exception for gene-lineage errors."""


@dataclass
class FileOpenError(LineageError):
    """Raised when a genome file cannot be opened."""

    path: Path

    def __str__(self) -> str:
        return f"cannot open {self.path}"


@dataclass
class MalformedFileError(LineageError):
    """Raised when a genome file breaks the file format.

    ``line`` is 1-based and None when the problem is not tied to one line.
    """

    reason: str
    line: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.reason
        return f"line {self.line}: {self.reason}"


class QueryError(LineageError):
    """Base exception for recoverable query errors."""


@dataclass
class UnknownGeneError(QueryError):
    """Raised when a query names a gene that is not in the graph."""

    name: str

    def __str__(self) -> str:
        return f"{self.name} not found."


@dataclass
class InvalidBudgetError(QueryError):
    """Raised when a budget argument is not an integer."""

    token: str

    def __str__(self) -> str:
        return f"{self.token} is not a valid cost."
