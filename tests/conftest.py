"""Shared genome fixtures."""
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from gene_lineage.graph import GeneGraph, LoaderConfig, load_genome

CHAIN = """4
AAA 1 BBB 2
BBB 1 CCC 3
CCC 1 DDD 4
DDD 0
"""

CYCLE = """3
X 1 Y 1
Y 1 Z 1
Z 1 X 1
"""

DEAD_END = """2
A 0
B 1 A 5
"""

BRANCHING = """4
A 2 G 3 C 1
G 1 T 0
C 0
T 3 A 2 G 7 C 4
"""


@pytest.fixture
def write_genome(tmp_path: Path) -> Callable[[str], Path]:
    """Write genome text to a fresh file and return its path."""
    counter = iter(range(1000))

    def _write(text: str) -> Path:
        path = tmp_path / f"genome_{next(counter)}.txt"
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def chain_path(write_genome) -> Path:
    return write_genome(CHAIN)


@pytest.fixture
def cycle_path(write_genome) -> Path:
    return write_genome(CYCLE)


@pytest.fixture
def dead_end_path(write_genome) -> Path:
    return write_genome(DEAD_END)


@pytest.fixture
def branching_path(write_genome) -> Path:
    return write_genome(BRANCHING)


@pytest.fixture
def chain_graph(chain_path) -> GeneGraph:
    return load_genome(chain_path)


@pytest.fixture
def cycle_graph(cycle_path) -> GeneGraph:
    return load_genome(cycle_path)


@pytest.fixture
def dead_end_graph(dead_end_path) -> GeneGraph:
    return load_genome(dead_end_path)


@pytest.fixture
def branching_graph(branching_path) -> GeneGraph:
    return load_genome(branching_path, LoaderConfig.mutations())
