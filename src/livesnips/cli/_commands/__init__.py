"""livesnips CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._context import CLIContext, OutputFormat
from ._expand import expand_command
from ._library import check_command, dir_command, list_command, template_to_dict
from ._shared import (
    ExitCode,
    FormattableData,
    exit_with_error,
    format_json,
    get_error_console,
)

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "OutputFormat",
    "exit_with_error",
    "format_json",
    "get_error_console",
    "register_commands",
    "template_to_dict",
]


def register_commands(app: App) -> None:
    app.command(dir_command, name="dir")
    app.command(list_command, name="list")
    app.command(check_command, name="check")
    app.command(expand_command, name="expand")
