"""Compiled snippet templates and the generator protocol."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple, Protocol

from livesnips.enums import SnippetFlag

if TYPE_CHECKING:
    import re
    from collections.abc import Sequence
    from pathlib import Path

    from livesnips.expressions import ContextFilter

    from ._runtime import SnippetUtils


@dataclass(frozen=True, slots=True)
class BlockRef:
    """Reference from a generator section to one of its block values."""

    block: int


type Section = str | BlockRef


def stringify_block(value: object) -> str:
    """Render a code block value as text; None renders as the empty string."""
    return "" if value is None else str(value)


class GeneratorResult(NamedTuple):
    """Output of one generator invocation.

    Attributes:
        sections: Literal strings and block references, in document order.
        blocks: The stringified value computed at each code block.
    """

    sections: list[Section]
    blocks: list[str]


class GeneratorFunction(Protocol):
    """Maps placeholder contents to the sections of an expansion."""

    def __call__(
        self,
        placeholder_contents: Sequence[str],
        match_groups: Sequence[str],
        workspace_id: str,
        file_id: str,
        utils: SnippetUtils,
    ) -> GeneratorResult | tuple[Sequence[Section], Sequence[object]]: ...


@dataclass(frozen=True, slots=True)
class Template:
    """A compiled snippet definition.

    Exactly one of ``trigger`` (a literal) and ``regexp`` (a pattern) is set.

    Attributes:
        trigger: Literal trigger text, empty for pattern triggers.
        description: Display label.
        generator: Produces the expansion sections and block values.
        regexp: Compiled pattern trigger, or None.
        flags: Behaviour flags from the header.
        priority: Ordering among simultaneous matches, higher first.
        placeholders: Number of tab-stop markers in the literal text.
        context_filter: Predicate over the lexical context, or None.
        source: Library file the template was compiled from, if any.
        line: 1-based header line in ``source``, if any.
    """

    trigger: str
    description: str
    generator: GeneratorFunction = field(repr=False)
    regexp: re.Pattern[str] | None = None
    flags: frozenset[SnippetFlag] = frozenset()
    priority: int = 0
    placeholders: int = 0
    context_filter: ContextFilter | None = field(default=None, repr=False)
    source: Path | None = None
    line: int | None = None

    def __post_init__(self) -> None:
        if bool(self.trigger) == (self.regexp is not None):
            msg = "A template needs exactly one of a literal trigger or a pattern"
            raise ValueError(msg)

    @property
    def automatic(self) -> bool:
        return SnippetFlag.AUTOMATIC in self.flags

    @property
    def multiline(self) -> bool:
        return SnippetFlag.MULTILINE in self.flags

    @property
    def inword(self) -> bool:
        return SnippetFlag.INWORD in self.flags

    @property
    def wordboundary(self) -> bool:
        return SnippetFlag.WORDBOUNDARY in self.flags

    @property
    def beginningofline(self) -> bool:
        return SnippetFlag.BEGINNINGOFLINE in self.flags

    @property
    def hidden(self) -> bool:
        return SnippetFlag.HIDDEN in self.flags

    @property
    def display_trigger(self) -> str:
        if self.regexp is not None:
            return f"`{self.regexp.pattern}`"
        return self.trigger


def parse_flags(flags: str) -> frozenset[SnippetFlag]:
    """Convert header flag characters to flags, ignoring unknown characters."""
    known = {flag.value: flag for flag in SnippetFlag}
    return frozenset(known[char] for char in flags if char in known)
