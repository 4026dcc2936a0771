"""Structured snippet programs and the generator that runs them.

The compiler turns each snippet body into an ordered list of instructions:
literal text, or a code block compiled once to a Python code object. A
Generator walks the instructions for every invocation, inside a namespace
seeded by the library's ``global`` region.
"""

from __future__ import annotations

import builtins
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from livesnips.exceptions import GeneratorError

from ._runtime import SnippetUtils
from ._template import BlockRef, GeneratorResult, Section, stringify_block

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import CodeType


@dataclass(frozen=True, slots=True)
class LiteralInstruction:
    """Append literal text (tab-stop markers untouched) to the sections."""

    text: str


@dataclass(frozen=True, slots=True)
class CodeInstruction:
    """Evaluate a code block and append a reference to its value.

    Attributes:
        index: Position of this block among the snippet's code blocks.
        source: The dedented source, kept for error messages.
        code: Compiled code object.
        is_expression: True if ``code`` was compiled in ``eval`` mode; the
            block value is the expression value. Otherwise the block value is
            whatever the statements assigned to ``rv``.
    """

    index: int
    source: str
    code: CodeType = field(repr=False)
    is_expression: bool


type Instruction = LiteralInstruction | CodeInstruction


@dataclass(frozen=True, slots=True)
class GlobalEnvironment:
    """Definitions shared by every snippet of one library file."""

    source: str = ""
    code: CodeType | None = field(default=None, repr=False)

    def namespace(self) -> dict[str, object]:
        """Build a fresh namespace with the global region executed in it."""
        namespace: dict[str, object] = {
            "__builtins__": builtins,
            "__name__": "livesnips.snippet",
        }
        if self.code is not None:
            exec(self.code, namespace)  # noqa: S102
        return namespace


@dataclass(frozen=True, slots=True)
class Generator:
    """Runs a compiled snippet program.

    Implements the generator protocol: called with the placeholder contents,
    the trigger match groups, the workspace and file identifiers and a
    SnippetUtils, it returns the expansion sections and block values.
    """

    instructions: tuple[Instruction, ...]
    environment: GlobalEnvironment = field(default_factory=GlobalEnvironment)
    description: str = ""

    def __call__(
        self,
        placeholder_contents: Sequence[str],
        match_groups: Sequence[str],
        workspace_id: str,
        file_id: str,
        utils: SnippetUtils | None = None,
    ) -> GeneratorResult:
        """Run the program.

        Raises:
            GeneratorError: If the global region or any code block raises.
        """
        if utils is None:
            utils = SnippetUtils()

        try:
            namespace = self.environment.namespace()
        except Exception as e:
            msg = f"Global definitions failed: {e}"
            raise GeneratorError(msg, description=self.description, cause=e) from e

        namespace.update(
            t=list(placeholder_contents),
            m=list(match_groups),
            workspace=workspace_id,
            path=file_id,
            utils=utils,
        )

        sections: list[Section] = []
        blocks: list[str] = []
        for instruction in self.instructions:
            if isinstance(instruction, LiteralInstruction):
                sections.append(instruction.text)
                continue

            value = self._run_block(instruction, namespace)
            blocks.append(utils.format(stringify_block(value)))
            sections.append(BlockRef(block=instruction.index))

        return GeneratorResult(sections=sections, blocks=blocks)

    def _run_block(
        self, instruction: CodeInstruction, namespace: dict[str, object]
    ) -> object:
        namespace["rv"] = ""
        try:
            if instruction.is_expression:
                return eval(instruction.code, namespace)  # noqa: S307
            exec(instruction.code, namespace)  # noqa: S102
        except Exception as e:
            msg = f"Code block {instruction.index} failed: {e}"
            raise GeneratorError(msg, description=self.description, cause=e) from e
        return namespace.get("rv")
