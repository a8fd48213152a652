"""Gene graph records and query result models.

Provides the value types shared by the loader, the store and the
traversal engine:
- Gene and Mutation records (edges reference targets by stable index)
- Loader configuration (validation mode, edge bound)
- Tagged query results (reached / dead end / cycle)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ValidationMode(str, Enum):
    """How strictly a genome file is checked while loading."""
    LOOSE = "loose"  # Structure only, assumes well-formed data
    STRICT = "strict"  # Alphabet, lengths, duplicates, costs, line count


class WalkOutcome(str, Enum):
    """How a lineage walk ended."""
    REACHED = "reached"
    DEAD_END = "dead_end"
    CYCLE = "cycle"
    SAME_GENE = "same_gene"  # Source equals target, no edge consumed


@dataclass(frozen=True)
class Mutation:
    """A directed, costed edge to another gene in the same graph."""
    target: int  # Index of the target gene in load order
    cost: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"target": self.target, "cost": self.cost}


@dataclass
class Gene:
    """A named gene sequence and its outgoing mutations."""
    name: str
    index: int
    mutations: list[Mutation] = field(default_factory=list)

    @property
    def edge(self) -> Mutation | None:
        """The mutation followed by a lineage walk."""
        return self.mutations[0] if self.mutations else None

    @property
    def mutation_count(self) -> int:
        return len(self.mutations)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "index": self.index,
            "mutations": [m.to_dict() for m in self.mutations],
        }


@dataclass(frozen=True)
class Step:
    """One consumed edge of a walk."""
    source: Gene
    mutation: Mutation
    target: Gene


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """Folded result of a walk.

    ``value`` is only meaningful when ``reached`` is true.
    """
    outcome: WalkOutcome
    value: T | None = None

    @property
    def reached(self) -> bool:
        return self.outcome == WalkOutcome.REACHED


class LoaderConfig(BaseModel):
    """Options controlling how a genome file is loaded."""
    mode: ValidationMode = ValidationMode.LOOSE
    max_mutations: int = Field(default=1, ge=1)

    @classmethod
    def lineage(cls) -> LoaderConfig:
        """Single-edge, loosely checked files."""
        return cls(mode=ValidationMode.LOOSE, max_mutations=1)

    @classmethod
    def mutations(cls) -> LoaderConfig:
        """Multi-edge, strictly validated files."""
        return cls(mode=ValidationMode.STRICT, max_mutations=5)

    @property
    def strict(self) -> bool:
        return self.mode == ValidationMode.STRICT
