"""Structlog-based logging for gene-lineage.

Log lines go to standard error through stdlib logging; standard output
carries only the query protocol.
"""
from __future__ import annotations

from typing import Literal

import logging
import structlog

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level: LogLevel = "WARNING") -> None:
    logging.basicConfig(format="%(message)s", level=getattr(logging, level))
    logging.getLogger().setLevel(getattr(logging, level))
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level)),
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Level may change after import when the CLI parses --log-level
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "gene_lineage"):
    return structlog.get_logger(name)


# Initialize default config
configure_logging()
