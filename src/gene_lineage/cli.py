"""CLI interface for gene-lineage.

Two programs share one loader and one query loop:
- ``gene-lineage FILE``: single-mutation genomes, lineage queries
- ``gene-mutations FILE``: strictly validated multi-mutation genomes
"""
from __future__ import annotations

import sys
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from .errors import FileOpenError, MalformedFileError
from .graph import GeneGraph, LoaderConfig, ValidationMode, load_genome
from .logging import configure_logging
from .repl import LINEAGE_COMMANDS, MUTATION_COMMANDS, QUIT, Command, QueryDispatcher

EXIT_FAILURE = 1
EXIT_MALFORMED = 3


class LogLevelName(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _usage(commands: dict[str, Command]) -> str:
    return ", ".join([c.usage for c in commands.values()] + [QUIT])


lineage_app = typer.Typer(
    name="gene-lineage",
    help=f"Answer lineage queries over a genome file. Queries: {_usage(LINEAGE_COMMANDS)}",
    add_completion=False,
)
mutations_app = typer.Typer(
    name="gene-mutations",
    help=f"Explore direct mutations in a genome file. Queries: {_usage(MUTATION_COMMANDS)}",
    add_completion=False,
)
err_console = Console(stderr=True)


def _fail(message: str, code: int) -> typer.Exit:
    err_console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)
    return typer.Exit(code)


def _load(file: Path, config: LoaderConfig) -> GeneGraph:
    try:
        return load_genome(file, config)
    except FileOpenError:
        raise _fail(f"ERROR: Error opening file, please check file name: {file}", EXIT_FAILURE) from None
    except MalformedFileError:
        raise _fail("Invalid file format. Exiting program.", EXIT_MALFORMED) from None


def _serve(
    file: Path | None,
    strict: bool,
    max_mutations: int,
    log_level: LogLevelName,
    commands: dict[str, Command],
) -> None:
    if file is None:
        raise _fail("ERROR: A filename must be specified as the first argument.", EXIT_FAILURE)

    configure_logging(log_level.value)
    config = LoaderConfig(
        mode=ValidationMode.STRICT if strict else ValidationMode.LOOSE,
        max_mutations=max_mutations,
    )
    graph = _load(file, config)
    QueryDispatcher(graph, commands, sys.stdin, sys.stdout).run()


@lineage_app.command()
def lineage(
    file: Path = typer.Argument(None, help="Genome file to load", show_default=False),
    strict: bool = typer.Option(False, "--strict/--loose", help="Validate the genome file strictly"),
    max_mutations: int = typer.Option(1, "--max-mutations", "-k", min=1, help="Maximum mutations per gene"),
    log_level: LogLevelName = typer.Option(LogLevelName.WARNING, "--log-level", help="Log level for stderr logs"),
):
    """Load FILE and answer e, es, ene and path queries from standard input."""
    _serve(file, strict, max_mutations, log_level, LINEAGE_COMMANDS)


@mutations_app.command()
def mutations(
    file: Path = typer.Argument(None, help="Genome file to load", show_default=False),
    strict: bool = typer.Option(True, "--strict/--loose", help="Validate the genome file strictly"),
    max_mutations: int = typer.Option(5, "--max-mutations", "-k", min=1, help="Maximum mutations per gene"),
    log_level: LogLevelName = typer.Option(LogLevelName.WARNING, "--log-level", help="Log level for stderr logs"),
):
    """Load FILE and answer p, m and me queries from standard input."""
    _serve(file, strict, max_mutations, log_level, MUTATION_COMMANDS)


if __name__ == "__main__":
    lineage_app()
