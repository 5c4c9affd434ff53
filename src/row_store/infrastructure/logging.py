"""Structured logging for the row store.

Events are emitted through structlog as ``event`` plus key/value context,
e.g. ``page_allocated page_index=3 allocated=4``. Output goes to stderr so
that it never interleaves with the rows the REPL prints on stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.types import Processor

LOG_FORMATS = ("json", "console")


def _renderer(log_format: str, stream: TextIO) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def setup_logging(
    level: str = "WARNING",
    log_format: str = "console",
    stream: TextIO | None = None,
) -> None:
    """
    Configure structlog for the process.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: 'json' for one object per line, 'console' for humans
        stream: Output stream (defaults to sys.stderr)

    Raises:
        ValueError: If level or log_format is unknown
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")
    if log_format not in LOG_FORMATS:
        raise ValueError(f"log_format must be one of {LOG_FORMATS}, got {log_format!r}")

    stream = stream or sys.stderr

    # Third-party libraries (uvicorn, opentelemetry) log through stdlib logging
    logging.basicConfig(format="%(message)s", stream=stream, level=numeric_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        _renderer(log_format, stream),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a bound logger.

    The last dotted part of ``name`` is bound as ``component``, so events
    from ``row_store.domain.services.table`` carry ``component=table``.

    Args:
        name: Logger name (module name typically)
        **initial_context: Extra context bound to every event

    Returns:
        A bound structlog logger
    """
    if name:
        initial_context.setdefault("component", name.rsplit(".", 1)[-1])
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
