"""Snippet library compilation.

A library file is scanned line by line. ``global``/``endglobal`` regions hold
Python definitions shared by every snippet in the file, ``priority <n>`` and
``context <expr>`` lines apply to the next snippet only, and
``snippet``/``endsnippet`` pairs hold snippet bodies. Inside a body, a double
backtick toggles between literal text and Python code.
"""

from __future__ import annotations

import textwrap
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from livesnips.exceptions import CompileError, ContextFilterError
from livesnips.expressions import ContextFilter
from livesnips.text import TABSTOP_PATTERN

from ._header import is_header_line, parse_header
from ._program import CodeInstruction, Generator, GlobalEnvironment, LiteralInstruction
from ._template import Template, parse_flags

if TYPE_CHECKING:
    from types import CodeType

    from structlog.typing import FilteringBoundLogger

    from ._header import SnippetHeader
    from ._program import Instruction

CODE_DELIMITER = "``"
LIBRARY_SUFFIX = ".hsnips"
GLOBAL_LANGUAGE = "all"

type _Lines = deque[tuple[int, str]]


def _count_placeholders(text: str) -> int:
    return sum(1 for _ in TABSTOP_PATTERN.finditer(text))


def _compile_source(
    source: str, *, filename: str, line: int, path: Path | None
) -> tuple[CodeType, bool]:
    """Compile a code block, preferring expression mode.

    Returns:
        Tuple of (code object, True if compiled as an expression).
    """
    try:
        return compile(source, filename, "eval"), True
    except SyntaxError:
        pass
    try:
        return compile(source, filename, "exec"), False
    except SyntaxError as e:
        msg = f"Invalid Python in code block: {e.msg}"
        offending = line + (e.lineno or 1) - 1
        raise CompileError(msg, path=path, line=offending, content=e.text) from e


def _merge_literals(instructions: list[Instruction]) -> tuple[Instruction, ...]:
    merged: list[Instruction] = []
    for instruction in instructions:
        if isinstance(instruction, LiteralInstruction):
            if not instruction.text:
                continue
            if merged and isinstance(merged[-1], LiteralInstruction):
                merged[-1] = LiteralInstruction(merged[-1].text + instruction.text)
                continue
        merged.append(instruction)
    return tuple(merged)


@dataclass(slots=True)
class _BodyCompiler:
    """Compiles the lines of one snippet body into instructions."""

    header: SnippetHeader
    header_line: int
    path: Path | None
    instructions: list[Instruction] = field(default_factory=list)
    placeholders: int = 0
    code_blocks: int = 0

    @property
    def filename(self) -> str:
        if self.path is not None:
            return str(self.path)
        return f"<snippet {self.header.description or self.header.trigger}>"

    def compile(self, lines: _Lines) -> tuple[Instruction, ...]:
        code_lines: list[str] = []
        code_start = self.header_line
        is_code = False
        closed = False

        while lines:
            number, line = lines.popleft()

            if is_code:
                if CODE_DELIMITER not in line:
                    code_lines.append(line)
                    continue
                code, rest = line.split(CODE_DELIMITER, 1)
                code_lines.append(code)
                lines.appendleft((number, rest))
                self._emit_code(code_lines, code_start)
                code_lines = []
                is_code = False
            elif line.startswith("endsnippet"):
                closed = True
                break
            elif CODE_DELIMITER not in line:
                self._emit_literal(line)
                self.instructions.append(LiteralInstruction("\n"))
            else:
                text, rest = line.split(CODE_DELIMITER, 1)
                self._emit_literal(text)
                lines.appendleft((number, rest))
                code_start = number
                is_code = True

        if is_code:
            msg = "Unterminated code block"
            raise CompileError(msg, path=self.path, line=code_start)
        if not closed:
            msg = "Snippet body is missing endsnippet"
            raise CompileError(msg, path=self.path, line=self.header_line)

        # The last literal line has no newline of its own.
        if self.instructions and self.instructions[-1] == LiteralInstruction("\n"):
            self.instructions.pop()

        return _merge_literals(self.instructions)

    def _emit_literal(self, text: str) -> None:
        self.placeholders += _count_placeholders(text)
        self.instructions.append(LiteralInstruction(text))

    def _emit_code(self, code_lines: list[str], start_line: int) -> None:
        source = textwrap.dedent("\n".join(code_lines)).strip()
        code, is_expression = _compile_source(
            source, filename=self.filename, line=start_line, path=self.path
        )
        self.instructions.append(
            CodeInstruction(
                index=self.code_blocks,
                source=source,
                code=code,
                is_expression=is_expression,
            )
        )
        self.code_blocks += 1


@dataclass(slots=True)
class _PendingTemplate:
    header: SnippetHeader
    line: int
    instructions: tuple[Instruction, ...]
    placeholders: int
    priority: int
    context_filter: ContextFilter | None


def _parse_priority(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return 0


def parse_library(text: str, *, path: Path | None = None) -> list[Template]:
    """Compile the text of a snippet library.

    Args:
        text: Library source.
        path: File the source came from, used in error messages.

    Returns:
        Templates in definition order.

    Raises:
        CompileError: If any header, code block or context expression is
            malformed, or a region is left unterminated.
    """
    lines: _Lines = deque(
        enumerate((line.removesuffix("\r") for line in text.split("\n")), start=1)
    )
    global_lines: list[str] = []
    global_start: int | None = None
    pending: list[_PendingTemplate] = []
    priority = 0
    context_filter: ContextFilter | None = None

    while lines:
        number, line = lines.popleft()

        if global_start is not None:
            if line.startswith("endglobal"):
                global_start = None
            else:
                global_lines.append(line)
        elif line.startswith("global"):
            global_start = number
        elif line.startswith("priority "):
            priority = _parse_priority(line.removeprefix("priority "))
        elif line.startswith("context "):
            expression = line.removeprefix("context ").strip()
            try:
                context_filter = ContextFilter.compile(expression)
            except ContextFilterError as e:
                raise CompileError(str(e), path=path, line=number, content=line) from e
        elif is_header_line(line):
            try:
                header = parse_header(line)
            except ValueError as e:
                raise CompileError(str(e), path=path, line=number, content=line) from e

            body = _BodyCompiler(header=header, header_line=number, path=path)
            instructions = body.compile(lines)
            pending.append(
                _PendingTemplate(
                    header=header,
                    line=number,
                    instructions=instructions,
                    placeholders=body.placeholders,
                    priority=priority,
                    context_filter=context_filter,
                )
            )
            priority = 0
            context_filter = None

    if global_start is not None:
        msg = "Global region is missing endglobal"
        raise CompileError(msg, path=path, line=global_start)

    environment = _compile_global("\n".join(global_lines), path=path)
    return [
        Template(
            trigger=item.header.trigger,
            description=item.header.description,
            generator=Generator(
                instructions=item.instructions,
                environment=environment,
                description=item.header.description,
            ),
            regexp=item.header.regexp,
            flags=parse_flags(item.header.flags),
            priority=item.priority,
            placeholders=item.placeholders,
            context_filter=item.context_filter,
            source=path,
            line=item.line,
        )
        for item in pending
    ]


def _compile_global(source: str, *, path: Path | None) -> GlobalEnvironment:
    source = textwrap.dedent(source)
    if not source.strip():
        return GlobalEnvironment()
    filename = str(path) if path is not None else "<global>"
    try:
        code = compile(source, filename, "exec")
    except SyntaxError as e:
        msg = f"Invalid Python in global region: {e.msg}"
        raise CompileError(msg, path=path, line=e.lineno, content=e.text) from e
    return GlobalEnvironment(source=source, code=code)


def load_library(path: Path) -> list[Template]:
    """Read and compile one library file.

    Raises:
        CompileError: If the file cannot be read or compiled.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Failed to read snippet library: {e}"
        raise CompileError(msg, path=path) from e
    return parse_library(text, path=path)


@dataclass(frozen=True, slots=True)
class LibraryLoadResult:
    """Templates loaded from a directory, keyed by language identifier.

    Attributes:
        templates: Compiled templates per language. The ``all`` key holds
            templates shared by every language.
        errors: One error per library file that failed to compile.
    """

    templates: dict[str, list[Template]] = field(default_factory=dict)
    errors: list[CompileError] = field(default_factory=list)


def discover_libraries(directory: Path) -> list[Path]:
    """Find snippet library files in a directory, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted(
        (p for p in directory.iterdir() if p.suffix.lower() == LIBRARY_SUFFIX),
        key=lambda p: p.name,
    )


def load_directory(
    directory: Path, *, logger: FilteringBoundLogger | None = None
) -> LibraryLoadResult:
    """Compile every library in a directory.

    A file that fails to compile is logged and reported in the result; the
    remaining files still load.
    """
    if logger is None:
        logger = structlog.get_logger("livesnips.compiler")

    result = LibraryLoadResult()
    for library in discover_libraries(directory):
        language = library.stem
        try:
            templates = load_library(library)
        except CompileError as e:
            logger.warning(
                "library_compile_failed",
                file=str(library),
                line=e.line,
                content=e.content,
                error=str(e),
            )
            result.errors.append(e)
            continue

        result.templates.setdefault(language, []).extend(templates)
        logger.debug("library_loaded", file=str(library), templates=len(templates))

    return result
