from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from gene_lineage.cli import EXIT_MALFORMED, lineage_app, mutations_app

runner = CliRunner()


def test_lineage_session(chain_path: Path) -> None:
    result = runner.invoke(
        lineage_app,
        [str(chain_path)],
        input="e AAA DDD\npath AAA DDD\nbogus\nq\n",
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert result.stdout == (
        "Enter a query: AAA can evolve into DDD\n\n"
        "Enter a query: AAA -> BBB -> CCC -> DDD\n\n"
        "Enter a query: bogus not recognized.\n\n"
        "Enter a query: "
    )


def test_lineage_end_of_input(cycle_path: Path) -> None:
    result = runner.invoke(lineage_app, [str(cycle_path)], input="es X X\n", catch_exceptions=False)

    assert result.exit_code == 0
    assert "It will take -1 evolutionary steps to get from X to X" in result.stdout


def test_missing_argument() -> None:
    result = runner.invoke(lineage_app, [], catch_exceptions=False)

    assert result.exit_code == 1
    assert "A filename must be specified" in result.output


def test_unopenable_file(tmp_path: Path) -> None:
    missing = tmp_path / "nope.txt"
    result = runner.invoke(lineage_app, [str(missing)], catch_exceptions=False)

    assert result.exit_code == 1
    assert "Error opening file, please check file name" in result.output


def test_mutations_session(branching_path: Path) -> None:
    result = runner.invoke(
        mutations_app,
        [str(branching_path)],
        input="m A G\nme A G 2\nq\n",
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert "A can mutate into G\n\n" in result.stdout
    assert "A can mutate into G but not with evolutionary cost 2\n\n" in result.stdout


def test_mutations_rejects_malformed(write_genome) -> None:
    path = write_genome("2\nAAXA 0\nC 0\n")
    result = runner.invoke(mutations_app, [str(path)], input="q\n", catch_exceptions=False)

    assert result.exit_code == EXIT_MALFORMED == 3
    assert "Invalid file format. Exiting program." in result.output


def test_mutations_loose_flag_accepts_any_name(write_genome) -> None:
    path = write_genome("2\nhello 1 world 4\nworld 0\n")
    result = runner.invoke(mutations_app, [str(path), "--loose"], input="p\nq\n", catch_exceptions=False)

    assert result.exit_code == 0
    assert "== hello ==\nMutations:\nworld - Cost: 4\n" in result.stdout


def test_lineage_strict_flag(write_genome) -> None:
    path = write_genome("1\nfoo 0\n")
    result = runner.invoke(lineage_app, [str(path), "--strict"], input="q\n", catch_exceptions=False)

    assert result.exit_code == 3


def test_lineage_rejects_multiple_mutations(branching_path: Path) -> None:
    """A K=1 load fails on genes with several mutations."""
    result = runner.invoke(lineage_app, [str(branching_path)], input="q\n", catch_exceptions=False)

    assert result.exit_code == 3


def test_lineage_max_mutations_option(branching_path: Path) -> None:
    result = runner.invoke(
        lineage_app,
        [str(branching_path), "--max-mutations", "5"],
        input="path A T\nq\n",
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert "A -> G -> T\n\n" in result.stdout
