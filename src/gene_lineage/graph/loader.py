"""Two-pass genome file loader.

File format (whitespace-separated tokens)::

    <N>
    <name> <k> [<target-name> <cost>]*k      (N lines)

A mutation may name a gene declared further down the file, so loading
takes two passes over the same handle:

- Pass 1 reads every gene name and fixes the name -> index mapping.
  Mutation tokens are skipped.
- Pass 2 rewinds, re-reads the file and resolves each mutation target by
  name against the genes from pass 1.

Strict mode additionally checks the gene alphabet and name length,
duplicate names, negative costs, and that the file has exactly N lines
after the first.
"""
from __future__ import annotations

import re
from collections import deque
from pathlib import Path
from typing import TextIO

from ..errors import FileOpenError, MalformedFileError
from ..logging import get_logger
from .models import LoaderConfig
from .store import GeneGraph

logger = get_logger(__name__)

GENE_NAME_PATTERN = re.compile(r"[ACGT]{1,4}")


class _TokenStream:
    """Whitespace tokens of a file, tracking the current line number."""

    def __init__(self, handle: TextIO) -> None:
        self._lines = enumerate(handle, start=1)
        self._pending: deque[str] = deque()
        self.line = 0

    def _fill(self) -> bool:
        while not self._pending:
            try:
                self.line, text = next(self._lines)
            except StopIteration:
                return False
            self._pending.extend(text.split())
        return True

    def word(self, what: str) -> str:
        if not self._fill():
            raise MalformedFileError(f"unexpected end of file, expected {what}", self.line or None)
        return self._pending.popleft()

    def integer(self, what: str) -> int:
        token = self.word(what)
        try:
            return int(token)
        except ValueError:
            raise MalformedFileError(f"{what} must be an integer, got {token!r}", self.line) from None

    def count_lines(self) -> int:
        """Consume the rest of the file and return its total line count."""
        for number, _ in self._lines:
            self.line = number
        return self.line


def validate_gene_name(name: str) -> bool:
    """Check a strict-mode gene name: 1-4 characters over A, C, G, T."""
    return GENE_NAME_PATTERN.fullmatch(name) is not None


def _read_gene_count(tokens: _TokenStream) -> int:
    count = tokens.integer("gene count")
    if count < 0:
        raise MalformedFileError(f"gene count must not be negative, got {count}", tokens.line)
    return count


def _read_mutation_count(tokens: _TokenStream, name: str, config: LoaderConfig) -> int:
    count = tokens.integer(f"mutation count for {name}")
    if not 0 <= count <= config.max_mutations:
        raise MalformedFileError(
            f"mutation count for {name} must be between 0 and {config.max_mutations}, got {count}",
            tokens.line,
        )
    return count


def _read_genes(handle: TextIO, config: LoaderConfig) -> GeneGraph:
    """Pass 1: create one gene per record, skipping mutation tokens."""
    tokens = _TokenStream(handle)
    expected = _read_gene_count(tokens)
    graph = GeneGraph()

    for _ in range(expected):
        name = tokens.word("gene name")
        if config.strict:
            if not validate_gene_name(name):
                raise MalformedFileError(f"invalid gene name {name!r}", tokens.line)
            if name in graph:
                raise MalformedFileError(f"duplicate gene name {name!r}", tokens.line)

        count = _read_mutation_count(tokens, name, config)
        for _ in range(count):
            tokens.word(f"mutation target for {name}")
            tokens.word(f"mutation cost for {name}")

        graph.add_gene(name)

    if config.strict:
        body_lines = tokens.count_lines() - 1
        if body_lines != expected:
            raise MalformedFileError(f"expected {expected} gene lines, found {body_lines}")

    return graph


def _read_mutations(handle: TextIO, graph: GeneGraph, config: LoaderConfig) -> None:
    """Pass 2: resolve every mutation target against the loaded genes."""
    tokens = _TokenStream(handle)
    _read_gene_count(tokens)

    for gene in graph.nodes():
        tokens.word("gene name")
        count = _read_mutation_count(tokens, gene.name, config)

        for _ in range(count):
            target_name = tokens.word(f"mutation target for {gene.name}")
            cost = tokens.integer(f"mutation cost for {gene.name}")
            if config.strict and cost < 0:
                raise MalformedFileError(
                    f"mutation cost from {gene.name} to {target_name} must not be negative",
                    tokens.line,
                )

            target = graph.find(target_name)
            if target is None:
                raise MalformedFileError(f"unknown mutation target {target_name!r}", tokens.line)
            graph.add_mutation(gene, target, cost)


def load_genome(path: str | Path, config: LoaderConfig | None = None) -> GeneGraph:
    """Load a genome file into a GeneGraph.

    Args:
        path: Genome file to read
        config: Validation mode and mutation bound (defaults to loose, one edge)

    Returns:
        The loaded graph

    Raises:
        FileOpenError: The file cannot be opened
        MalformedFileError: The file breaks the format for the chosen mode
    """
    path = Path(path)
    config = config or LoaderConfig.lineage()

    try:
        handle = path.open(encoding="utf-8")
    except OSError as e:
        raise FileOpenError(path) from e

    try:
        with handle:
            graph = _read_genes(handle, config)
            handle.seek(0)
            _read_mutations(handle, graph, config)
    except UnicodeDecodeError as e:
        logger.warning("genome_malformed", path=str(path), reason="not valid UTF-8")
        raise MalformedFileError("file is not valid UTF-8 text") from e
    except MalformedFileError as e:
        logger.warning("genome_malformed", path=str(path), reason=e.reason, line=e.line)
        raise

    logger.info(
        "genome_loaded",
        path=str(path),
        mode=config.mode.value,
        genes=graph.size(),
        mutations=graph.edge_count,
    )
    return graph
