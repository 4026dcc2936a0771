"""Structured logging for livesnips.

Loggers are standalone structlog loggers built with ``structlog.wrap_logger``;
creating one never touches the global structlog configuration. Output goes to
a log file when one is configured and to stderr otherwise, so command output
on stdout stays clean.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TextIO, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger, Processor

type LogFormatType = Literal["json", "text"]

_LEVELS = logging.getLevelNamesMapping()


def _resolve_level(level: str | None) -> int:
    """Pick the effective level.

    ``LIVESNIPS_DEBUG`` forces DEBUG. Otherwise an explicit ``level`` wins over
    ``LIVESNIPS_LOG_LEVEL``; unknown names fall back to INFO.
    """
    if os.getenv("LIVESNIPS_DEBUG"):
        return logging.DEBUG
    if level is None:
        level = os.getenv("LIVESNIPS_LOG_LEVEL", "info")
    return _LEVELS.get(level.upper(), logging.INFO)


def _processors(log_format: LogFormatType) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_format == "json":
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def _open_sink(log_file: str) -> TextIO:
    if not log_file:
        return sys.stderr
    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path.open("a", encoding="utf-8")


def create_logger(
    *,
    level: str | None = None,
    log_format: LogFormatType = "text",
    log_file: str = "",
) -> FilteringBoundLogger:
    """Create a standalone filtering logger.

    Args:
        level: Level name (debug, info, warning, error). None defers to
            ``LIVESNIPS_LOG_LEVEL``.
        log_format: ``json`` for one JSON object per line, ``text`` for
            console rendering.
        log_file: File to append to. Empty writes to stderr.
    """
    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            structlog.PrintLogger(file=_open_sink(log_file)),
            processors=_processors(log_format),
            wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(level)),
            context_class=dict,
        ),
    )


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
) -> FilteringBoundLogger:
    """Create the logger used by the command line, bound to ``command`` if set."""
    logger = create_logger(level=level, log_format=log_format, log_file=log_file)
    return logger.bind(command=command) if command else logger
