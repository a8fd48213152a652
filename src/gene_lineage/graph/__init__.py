"""Gene graph storage, loading and traversal.

Provides:
- Gene/Mutation records and a name-addressable graph store
- Two-pass genome file loader with loose and strict validation
- Fold-parameterized lineage walks (reachability, steps, cost, path)
"""
from .loader import (
    GENE_NAME_PATTERN,
    load_genome,
    validate_gene_name,
)
from .models import (
    Gene,
    LoaderConfig,
    Mutation,
    QueryResult,
    Step,
    ValidationMode,
    WalkOutcome,
)
from .store import GeneGraph
from .traversal import (
    PATH,
    PATH_SEPARATOR,
    REACHABLE,
    STEP_COUNT,
    TOTAL_COST,
    Fold,
    LineageTraversal,
    direct_mutation,
)

__all__ = [
    # Records and store
    "Gene",
    "Mutation",
    "Step",
    "GeneGraph",
    # Loading
    "LoaderConfig",
    "ValidationMode",
    "GENE_NAME_PATTERN",
    "load_genome",
    "validate_gene_name",
    # Traversal
    "Fold",
    "LineageTraversal",
    "QueryResult",
    "WalkOutcome",
    "REACHABLE",
    "STEP_COUNT",
    "TOTAL_COST",
    "PATH",
    "PATH_SEPARATOR",
    "direct_mutation",
]
