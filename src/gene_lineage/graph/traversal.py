"""Lineage walks over the gene graph.

Every lineage query is the same walk from a source toward a target,
folded differently:
- can-evolve: does the walk reach the target?
- evolution-steps: how many mutations does it take?
- evolution-cost: what do those mutations cost in total?
- evolution-path: which genes does it pass through?

The walk follows each gene's first mutation, so on a functional graph
(at most one mutation per gene) it is the unique lineage. A per-walk
visited set stops it when it enters a cycle.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .models import Gene, Mutation, QueryResult, Step, WalkOutcome
from .store import GeneGraph

T = TypeVar("T")

PATH_SEPARATOR = " -> "


@dataclass(frozen=True)
class Fold(Generic[T]):
    """Projection of a walk onto a single value.

    ``identity`` builds the starting accumulator from the source gene and
    ``step`` folds in one consumed mutation.
    """
    identity: Callable[[Gene], T]
    step: Callable[[T, Step], T]


REACHABLE: Fold[bool] = Fold(identity=lambda src: False, step=lambda acc, step: True)
STEP_COUNT: Fold[int] = Fold(identity=lambda src: 0, step=lambda acc, step: acc + 1)
TOTAL_COST: Fold[int] = Fold(identity=lambda src: 0, step=lambda acc, step: acc + step.mutation.cost)
PATH: Fold[str] = Fold(
    identity=lambda src: src.name,
    step=lambda acc, step: acc + PATH_SEPARATOR + step.target.name,
)


class LineageTraversal:
    """Walk engine for lineage queries.

    Example:
        >>> traversal = LineageTraversal(graph)
        >>> traversal.evolution_steps(graph.get("AAA"), graph.get("DDD")).value
        3
    """

    def __init__(self, graph: GeneGraph) -> None:
        self.graph = graph

    def walk(self, src: Gene, tgt: Gene) -> tuple[WalkOutcome, list[Step]]:
        """Follow mutations from ``src`` until ``tgt`` is entered.

        The edge into the target is included; a walk never leaves the
        target. Target identity is by name.
        """
        steps: list[Step] = []
        visited: set[int] = set()
        current = src

        while True:
            mutation = current.edge
            if mutation is None:
                return WalkOutcome.DEAD_END, steps

            following = self.graph.target_of(mutation)
            if following.name == tgt.name:
                steps.append(Step(source=current, mutation=mutation, target=following))
                return WalkOutcome.REACHED, steps

            if current.index in visited:
                return WalkOutcome.CYCLE, steps

            visited.add(current.index)
            steps.append(Step(source=current, mutation=mutation, target=following))
            current = following

    def run(self, src: Gene, tgt: Gene, fold: Fold[T], *, reached_in_place: bool = False) -> QueryResult[T]:
        """Walk from ``src`` to ``tgt`` and fold the consumed mutations.

        When ``src`` and ``tgt`` share a name the walk does not start:
        the result is reached with the identity value if
        ``reached_in_place`` is set, otherwise not reached.
        """
        if src.name == tgt.name:
            if reached_in_place:
                return QueryResult(WalkOutcome.REACHED, fold.identity(src))
            return QueryResult(WalkOutcome.SAME_GENE)

        outcome, steps = self.walk(src, tgt)
        if outcome != WalkOutcome.REACHED:
            return QueryResult(outcome)

        acc = fold.identity(src)
        for step in steps:
            acc = fold.step(acc, step)
        return QueryResult(outcome, acc)

    def can_evolve(self, src: Gene, tgt: Gene) -> bool:
        return bool(self.run(src, tgt, REACHABLE).value)

    def evolution_steps(self, src: Gene, tgt: Gene) -> QueryResult[int]:
        return self.run(src, tgt, STEP_COUNT)

    def evolution_cost(self, src: Gene, tgt: Gene) -> QueryResult[int]:
        return self.run(src, tgt, TOTAL_COST)

    def within_budget(self, src: Gene, tgt: Gene, budget: int) -> bool:
        """True when ``tgt`` is reachable for a total cost of at most ``budget``."""
        result = self.evolution_cost(src, tgt)
        return result.reached and result.value <= budget

    def evolution_path(self, src: Gene, tgt: Gene) -> QueryResult[str]:
        return self.run(src, tgt, PATH, reached_in_place=True)


def direct_mutation(graph: GeneGraph, src: Gene, tgt: Gene) -> Mutation | None:
    """Find a single mutation from ``src`` straight to ``tgt``.

    When several mutations name the target, the last listed one wins.
    """
    for mutation in reversed(src.mutations):
        if graph.target_of(mutation).name == tgt.name:
            return mutation
    return None
