"""Structured logging configuration using structlog.

Discovery lookups bind their target (group-version, kind) into structlog
contextvars so every line emitted while resolving carries it.
"""

from __future__ import annotations

import logging
import sys

import structlog


def setup_logging(level: str = "info", fmt: str = "json", force: bool = False) -> None:
    """Configure structlog for JSON (or console, for local use) output to stderr.

    Leaves an existing structlog configuration alone unless *force* is set, so
    an embedding application keeps its own processors and level.
    """
    if structlog.is_configured() and not force:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)
    renderer: structlog.types.Processor
    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
