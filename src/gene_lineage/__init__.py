"""gene-lineage - interactive queries over a gene mutation graph.

Loads a genome file (gene sequences and the costed mutations between
them) and answers reachability, step-count, cost and path queries.
"""

__version__ = "0.1.0"

# Lazy imports so library use does not pull in typer
def __getattr__(name: str):
    if name == "graph":
        from gene_lineage import graph
        return graph
    if name == "repl":
        from gene_lineage import repl
        return repl
    if name == "cli":
        from gene_lineage import cli
        return cli
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
