"""Structured logging for the query engine.

Application code logs through structlog. The relational operators in
``domain.services`` use the standard ``logging`` module, so ``setup_logging``
configures both at the same level.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Any, Generator

import structlog
from structlog.types import Processor

_LOG_FORMATS = ("json", "console")


def _renderer(log_format: str) -> Processor:
    if log_format not in _LOG_FORMATS:
        raise ValueError(f"log_format must be one of {_LOG_FORMATS}, got {log_format!r}")
    if log_format == "console":
        return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    return structlog.processors.JSONRenderer()


def setup_logging(level: str = "INFO", log_format: str = "json") -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Level name such as ``"DEBUG"`` or ``"warning"``.
        log_format: ``"json"`` for one JSON object per line, ``"console"``
            for human-readable output.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            _renderer(log_format),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """Return a structlog logger, optionally pre-bound with context."""
    logger = structlog.get_logger(name)
    return logger.bind(**initial_context) if initial_context else logger


@contextmanager
def query_context(query: str, **extra: Any) -> Generator[None, None, None]:
    """Tag every log line emitted inside the block with the query name."""
    with structlog.contextvars.bound_contextvars(query=query, **extra):
        yield
