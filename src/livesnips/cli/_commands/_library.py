# pyright: reportUnusedCallResult=false
# ruff: noqa: D415, A002, FBT002
"""Snippet library commands: dir, list and check."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter
from rich.console import Console
from rich.table import Table

from livesnips.compiler import LIBRARY_SUFFIX, discover_libraries, load_library
from livesnips.exceptions import CompileError
from livesnips.session import SnippetRegistry

from ._context import CLIContext, OutputFormat
from ._shared import ExitCode, exit_with_error, format_json, get_error_console

if TYPE_CHECKING:
    from livesnips.compiler import Template

__all__ = ["check_command", "dir_command", "list_command", "template_to_dict"]

_MAX_DESCRIPTION_LENGTH = 40


def _resolve_dir(directory: Path | None) -> Path:
    if directory is not None:
        return directory
    return CLIContext.get_current().config.snippet_path


def template_to_dict(language: str, template: Template) -> dict[str, object]:
    """Convert a template to a serializable dictionary."""
    return {
        "language": language,
        "trigger": template.display_trigger,
        "description": template.description,
        "flags": "".join(sorted(template.flags)),
        "priority": template.priority,
        "placeholders": template.placeholders,
        "context": (
            template.context_filter.expression if template.context_filter else None
        ),
        "source": str(template.source) if template.source else None,
        "line": template.line,
    }


def _format_table(rows: list[dict[str, object]]) -> Table:
    table = Table("Language", "Trigger", "Description", "Flags", "Priority")
    for row in rows:
        description = str(row["description"]) or "-"
        if len(description) > _MAX_DESCRIPTION_LENGTH:
            description = description[: _MAX_DESCRIPTION_LENGTH - 3] + "..."
        table.add_row(
            str(row["language"]),
            str(row["trigger"]),
            description,
            str(row["flags"]) or "-",
            str(row["priority"]),
        )
    return table


def dir_command(
    *,
    create: Annotated[
        bool, Parameter(name="--create", help="Create the directory if missing")
    ] = False,
) -> None:
    """Show the snippet library directory

    Exit codes:
        0: Success
        4: The directory could not be created
    """
    directory = CLIContext.get_current().config.snippet_path
    if create:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            exit_with_error(f"Creating {directory}: {e}", ExitCode.IO_ERROR)
    print(directory)


def list_command(
    language: str | None = None,
    /,
    *,
    all_: Annotated[
        bool, Parameter(name=["--all", "-a"], help="Include hidden templates")
    ] = False,
    format: Annotated[
        OutputFormat, Parameter(name=["--format", "-f"], help="Output format")
    ] = OutputFormat.TABLE,
    directory: Annotated[
        Path | None, Parameter(name="--dir", help="Snippet directory to read")
    ] = None,
) -> None:
    """List snippet templates

    Lists the templates that apply to LANGUAGE (its own library followed by
    the shared ``all`` library), or every library when no language is given.

    Exit codes:
        0: Success
        1: A library failed to compile and strict mode is enabled
    """
    ctx = CLIContext.get_current()
    registry = SnippetRegistry()
    result = registry.load(_resolve_dir(directory), logger=ctx.logger)

    error_console = get_error_console()
    for error in result.errors:
        error_console.print(f"[yellow]Warning:[/yellow] {error}")
    if result.errors and ctx.config.strict:
        exit_with_error("Snippet libraries failed to compile", ExitCode.LOAD_ERROR)

    if language is not None:
        groups = [(language, registry.templates_for(language))]
    else:
        groups = list(registry)

    rows = [
        template_to_dict(name, template)
        for name, templates in groups
        for template in templates
        if all_ or not template.hidden
    ]

    if format == OutputFormat.JSON:
        print(format_json({"templates": rows}))
        return
    if not rows:
        print("No snippet templates found.")
        return
    Console().print(_format_table(rows))


def check_command(
    *paths: Path,
) -> None:
    """Compile snippet libraries and report errors

    Checks the given ``.hsnips`` files, or every library in the snippet
    directory when none are given.

    Exit codes:
        0: Every library compiled
        2: At least one library failed to compile
        3: A given file does not exist
    """
    ctx = CLIContext.get_current()
    files = list(paths) or discover_libraries(ctx.config.snippet_path)
    if not files:
        print(f"No {LIBRARY_SUFFIX} files found.")
        return

    failures = 0
    for path in files:
        if not path.is_file():
            exit_with_error(f"File not found: {path}", ExitCode.NOT_FOUND)
        try:
            templates = load_library(path)
        except CompileError as e:
            failures += 1
            print(f"error {e}")
            if ctx.logger is not None:
                ctx.logger.warning("library_check_failed", file=str(path), error=str(e))
            continue
        print(f"ok    {path} ({len(templates)} templates)")

    if failures:
        exit_with_error(
            f"{failures} of {len(files)} libraries failed to compile",
            ExitCode.VALIDATION_ERROR,
        )
