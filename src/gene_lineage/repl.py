"""Interactive query loop.

Reads whitespace-delimited tokens from an input stream: a command token,
then that command's arguments (which may sit on later lines). Each
answer is written to the output stream followed by a blank line.
"""
from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import TextIO

from .errors import InvalidBudgetError, QueryError, UnknownGeneError
from .graph.models import Gene
from .graph.store import GeneGraph
from .graph.traversal import LineageTraversal, direct_mutation
from .logging import get_logger

logger = get_logger(__name__)

PROMPT = "Enter a query: "
QUIT = "q"


class EndOfInput(Exception):
    """Raised when the input stream runs out mid-command."""


class TokenReader:
    """Pulls whitespace-delimited tokens from a stream, a line at a time."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending: deque[str] = deque()

    def next_token(self) -> str | None:
        """Next token, or None at end of input."""
        while not self._pending:
            line = self._stream.readline()
            if not line:
                return None
            self._pending.extend(line.split())
        return self._pending.popleft()

    def require(self) -> str:
        token = self.next_token()
        if token is None:
            raise EndOfInput
        return token


Handler = Callable[["QueryDispatcher"], str]


@dataclass(frozen=True)
class Command:
    """A query the dispatcher can run."""
    name: str
    usage: str
    handler: Handler


class QueryDispatcher:
    """Prompt, read a command, answer it, repeat.

    Example:
        >>> dispatcher = QueryDispatcher(graph, LINEAGE_COMMANDS, sys.stdin, sys.stdout)
        >>> dispatcher.run()
    """

    def __init__(
        self,
        graph: GeneGraph,
        commands: dict[str, Command],
        stdin: TextIO,
        stdout: TextIO,
    ) -> None:
        self.graph = graph
        self.commands = commands
        self.traversal = LineageTraversal(graph)
        self.tokens = TokenReader(stdin)
        self.out = stdout

    def read_args(self, count: int) -> list[str]:
        return [self.tokens.require() for _ in range(count)]

    def resolve(self, name: str) -> Gene:
        return self.graph.get(name)

    def read_genes(self) -> tuple[Gene, Gene]:
        """Read a source and a target name, then resolve both."""
        src_name, tgt_name = self.read_args(2)
        return self.resolve(src_name), self.resolve(tgt_name)

    def read_genes_and_budget(self) -> tuple[Gene, Gene, int]:
        src_name, tgt_name, budget = self.read_args(3)
        return self.resolve(src_name), self.resolve(tgt_name), parse_budget(budget)

    def _emit(self, text: str) -> None:
        if text:
            self.out.write(text + "\n")
        self.out.write("\n")

    def dispatch(self, token: str) -> str:
        """Run one command and return its answer text."""
        command = self.commands.get(token)
        if command is None:
            return f"{token} not recognized."

        logger.debug("query_dispatched", command=command.name)
        try:
            return command.handler(self)
        except UnknownGeneError as e:
            logger.info("gene_not_found", command=command.name, name=e.name)
            return str(e)
        except QueryError as e:
            return str(e)

    def run(self) -> int:
        """Answer queries until ``q`` or end of input.

        Returns:
            Number of commands read, excluding ``q``
        """
        handled = 0
        while True:
            self.out.write(PROMPT)
            self.out.flush()

            token = self.tokens.next_token()
            if token is None or token == QUIT:
                return handled

            try:
                answer = self.dispatch(token)
            except EndOfInput:
                return handled

            self._emit(answer)
            handled += 1


def parse_budget(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise InvalidBudgetError(token) from None


# =============================================================================
# Lineage queries
# =============================================================================


def _evolve(d: QueryDispatcher) -> str:
    src, tgt = d.read_genes()
    if d.traversal.can_evolve(src, tgt):
        return f"{src.name} can evolve into {tgt.name}"
    return f"{src.name} cannot evolve into {tgt.name}"


def _evolution_steps(d: QueryDispatcher) -> str:
    src, tgt = d.read_genes()
    result = d.traversal.evolution_steps(src, tgt)
    steps = result.value if result.reached else -1
    return f"It will take {steps} evolutionary steps to get from {src.name} to {tgt.name}"


def _evolution_within_budget(d: QueryDispatcher) -> str:
    src, tgt, budget = d.read_genes_and_budget()
    verb = "can" if d.traversal.within_budget(src, tgt, budget) else "cannot"
    return f"{src.name} {verb} evolve into {tgt.name} with at most {budget} evolutionary cost"


def _evolution_path(d: QueryDispatcher) -> str:
    src, tgt = d.read_genes()
    result = d.traversal.evolution_path(src, tgt)
    if not result.reached:
        return f"There is no path from {src.name} to {tgt.name}"
    return result.value


LINEAGE_COMMANDS: dict[str, Command] = {
    "e": Command("e", "e <src> <tgt>", _evolve),
    "es": Command("es", "es <src> <tgt>", _evolution_steps),
    "ene": Command("ene", "ene <src> <tgt> <budget>", _evolution_within_budget),
    "path": Command("path", "path <src> <tgt>", _evolution_path),
}


# =============================================================================
# Mutation queries
# =============================================================================


def describe_genome(graph: GeneGraph) -> list[str]:
    """Listing of every gene and its mutations, in load order."""
    lines: list[str] = []
    for gene in graph.nodes():
        lines.append(f"== {gene.name} ==")
        lines.append("Mutations:")
        if not gene.mutations:
            lines.append("None")
            continue
        for mutation in gene.mutations:
            lines.append(f"{graph.target_of(mutation).name} - Cost: {mutation.cost}")
    return lines


def _print_genome(d: QueryDispatcher) -> str:
    return "\n".join(describe_genome(d.graph))


def _mutate(d: QueryDispatcher) -> str:
    src, tgt = d.read_genes()
    if direct_mutation(d.graph, src, tgt) is None:
        return f"{src.name} cannot mutate into {tgt.name}"
    return f"{src.name} can mutate into {tgt.name}"


def _mutation_within_budget(d: QueryDispatcher) -> str:
    src, tgt, budget = d.read_genes_and_budget()
    mutation = direct_mutation(d.graph, src, tgt)
    if mutation is None:
        return f"{src.name} cannot mutate into {tgt.name}"
    if mutation.cost <= budget:
        return f"{src.name} can mutate into {tgt.name} with evolutionary cost {budget}"
    return f"{src.name} can mutate into {tgt.name} but not with evolutionary cost {budget}"


MUTATION_COMMANDS: dict[str, Command] = {
    "p": Command("p", "p", _print_genome),
    "m": Command("m", "m <src> <tgt>", _mutate),
    "me": Command("me", "me <src> <tgt> <budget>", _mutation_within_budget),
}
