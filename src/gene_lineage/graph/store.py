"""In-memory graph store for loaded genes."""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..errors import UnknownGeneError
from .models import Gene, Mutation

if TYPE_CHECKING:
    from collections.abc import Iterator


class GeneGraph:
    """All genes of one genome file, addressable by name.

    Genes are kept in load order; a gene's ``index`` is its position in
    that order and is what mutations use to reference their targets.

    Example:
        >>> graph = GeneGraph.from_names(["AAA", "BBB"])
        >>> graph.find("BBB").index
        1
    """

    def __init__(self) -> None:
        self._genes: list[Gene] = []
        self._by_name: dict[str, Gene] = {}

    @classmethod
    def from_names(cls, names: list[str]) -> GeneGraph:
        graph = cls()
        for name in names:
            graph.add_gene(name)
        return graph

    def add_gene(self, name: str) -> Gene:
        """Append a gene with no mutations.

        On a repeated name the first declaration stays the lookup target.
        """
        gene = Gene(name=name, index=len(self._genes))
        self._genes.append(gene)
        self._by_name.setdefault(name, gene)
        return gene

    def add_mutation(self, source: Gene, target: Gene, cost: int) -> Mutation:
        """Attach an edge from ``source`` to ``target``."""
        mutation = Mutation(target=target.index, cost=cost)
        source.mutations.append(mutation)
        return mutation

    def find(self, name: str) -> Gene | None:
        """Get a gene by name, or None."""
        return self._by_name.get(name)

    def get(self, name: str) -> Gene:
        """Get a gene by name, raising UnknownGeneError when absent."""
        gene = self.find(name)
        if gene is None:
            raise UnknownGeneError(name)
        return gene

    def target_of(self, mutation: Mutation) -> Gene:
        return self._genes[mutation.target]

    def size(self) -> int:
        return len(self._genes)

    def nodes(self) -> Iterator[Gene]:
        """Iterate genes in load order."""
        return iter(self._genes)

    @property
    def edge_count(self) -> int:
        return sum(g.mutation_count for g in self._genes)

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Gene]:
        return self.nodes()

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __repr__(self) -> str:
        return f"GeneGraph(genes={self.size()}, mutations={self.edge_count})"
