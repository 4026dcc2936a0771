# pyright: reportUnusedCallResult=false
# ruff: noqa: D415
"""Expand command: run a snippet against text in an in-memory document."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from rich.table import Table

from livesnips.host import MemoryDocument, MemoryEditor
from livesnips.session import SnippetSession

from ._context import CLIContext
from ._shared import ExitCode, exit_with_error, get_error_console

__all__ = ["expand_command"]


def _parts_table(rows: list[dict[str, object]]) -> Table:
    table = Table("#", "Type", "Id", "Range", "Content")
    for row in rows:
        start, end = row["start"], row["end"]
        table.add_row(
            str(row["index"]),
            str(row["type"]),
            "-" if row["id"] is None else str(row["id"]),
            f"{start} - {end}",
            repr(row["content"]),
        )
    return table


def expand_command(
    language: str,
    text: str,
    /,
    *,
    placeholder: Annotated[
        list[str] | None,
        Parameter(
            name=["--placeholder", "-p"],
            help="Text typed into each placeholder in turn",
        ),
    ] = None,
    directory: Annotated[
        Path | None, Parameter(name="--dir", help="Snippet directory to read")
    ] = None,
) -> None:
    """Expand the snippet triggered by the end of TEXT

    TEXT is placed in a LANGUAGE document with the cursor at its end. An
    automatic match expands directly; otherwise the first exact candidate
    (or the first candidate) is expanded. Each --placeholder value is typed
    into the selected placeholder before moving to the next one, and the
    resulting document is printed.

    Exit codes:
        0: Success
        3: No template matches the text
    """
    ctx = CLIContext.get_current()
    error_console = get_error_console()

    document = MemoryDocument.from_text(
        text,
        uri="memory://expand",
        language_id=language,
        word_pattern=ctx.config.word_pattern,
    )
    editor = MemoryEditor(document)
    session = SnippetSession(
        ctx.config,
        warn=lambda message: error_console.print(f"[yellow]Warning:[/yellow] {message}"),
        logger=ctx.logger,
    )
    session.attach(editor)
    session.load(directory if directory is not None else ctx.config.snippet_path)

    cursor = editor.cursor
    result = session.match(editor, cursor)
    match = result.expansion
    if match is None:
        exact = [candidate for candidate in result.candidates if candidate.exact]
        match = (exact or list(result.candidates) or [None])[0]
    if match is None:
        exit_with_error(f"No snippet matches {text!r}", ExitCode.NOT_FOUND)

    instance = session.expand(editor, match)
    if instance is None:
        exit_with_error("The editor refused the expansion", ExitCode.INTERNAL_ERROR)

    for value in placeholder or []:
        selected = instance.selected_range()
        if selected is None or session.active_instance(document) is not instance:
            break
        editor.replace_text(selected, value)
        session.next_placeholder(editor)

    print(document.get_text())
    if ctx.verbose:
        error_console.print(_parts_table(instance.describe()))
