"""Helpers shared by the livesnips commands."""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Never

import orjson

if TYPE_CHECKING:
    from rich.console import Console

type FormattableData = dict[str, object]

__all__ = [
    "ExitCode",
    "FormattableData",
    "exit_with_error",
    "format_json",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Process exit codes of the livesnips commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Serialize command output, two-space indented unless ``indent`` is off."""
    return orjson.dumps(data, option=orjson.OPT_INDENT_2 if indent else None).decode()


def get_error_console() -> Console:
    from rich.console import Console

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Report ``message`` on the error console and exit with ``code``.

    Raises:
        SystemExit: Always.
    """
    (console or get_error_console()).print(f"[red]Error:[/red] {message}")
    raise SystemExit(code)
