"""Literal trigger matching policies.

Each policy answers two questions for a literal trigger: does the context
match it exactly, and does it match partially (the user is still typing it).
Both answers are the replacement range, or None. The policy for a template is
picked from its flags by ``policy_for``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar, Protocol

from livesnips.text import Range

if TYPE_CHECKING:
    from livesnips.compiler import Template

    from ._context import MatchContext


class PolicyKind(StrEnum):
    INWORD = "inword"
    WORDBOUNDARY = "wordboundary"
    BEGINNINGOFLINE = "beginningofline"
    DEFAULT = "default"


class MatchPolicy(Protocol):
    kind: ClassVar[PolicyKind]

    def test_exact(self, trigger: str, ctx: MatchContext) -> Range | None: ...

    def test_partial(self, trigger: str, ctx: MatchContext) -> Range | None: ...


def _range_before_cursor(ctx: MatchContext, length: int) -> Range:
    return Range(ctx.position.translate(0, -length), ctx.position)


def longest_trigger_prefix(context: str, trigger: str) -> str:
    """Return the longest prefix of ``trigger`` that ends ``context``.

    Example:
        >>> longest_trigger_prefix("a-", "->")
        '-'
    """
    for end in range(len(trigger), 0, -1):
        prefix = trigger[:end]
        if context.endswith(prefix):
            return prefix
    return ""


@dataclass(frozen=True, slots=True)
class InWordPolicy:
    """Triggers may end anywhere inside a word."""

    kind: ClassVar[PolicyKind] = PolicyKind.INWORD

    def test_exact(self, trigger: str, ctx: MatchContext) -> Range | None:
        if ctx.context.endswith(trigger):
            return _range_before_cursor(ctx, len(trigger))
        return None

    def test_partial(self, trigger: str, ctx: MatchContext) -> Range | None:
        prefix = longest_trigger_prefix(ctx.context, trigger)
        if prefix:
            return _range_before_cursor(ctx, len(prefix))
        return None


@dataclass(frozen=True, slots=True)
class WordBoundaryPolicy:
    """Triggers must be the whole word before the cursor."""

    kind: ClassVar[PolicyKind] = PolicyKind.WORDBOUNDARY

    def test_exact(self, trigger: str, ctx: MatchContext) -> Range | None:
        if ctx.word_context == trigger:
            return ctx.word_range
        return None

    def test_partial(self, trigger: str, ctx: MatchContext) -> Range | None:
        if ctx.word_context and trigger.startswith(ctx.word_context):
            return ctx.word_range
        return None


@dataclass(frozen=True, slots=True)
class BeginningOfLinePolicy:
    """Triggers must be the first non-whitespace text on the line."""

    kind: ClassVar[PolicyKind] = PolicyKind.BEGINNINGOFLINE

    def test_exact(self, trigger: str, ctx: MatchContext) -> Range | None:
        if ctx.is_line_start and ctx.context == trigger:
            return ctx.context_range
        return None

    def test_partial(self, trigger: str, ctx: MatchContext) -> Range | None:
        if ctx.is_line_start and ctx.context and trigger.startswith(ctx.context):
            return ctx.context_range
        return None


@dataclass(frozen=True, slots=True)
class DefaultPolicy:
    """Triggers must be the whole whitespace-delimited context."""

    kind: ClassVar[PolicyKind] = PolicyKind.DEFAULT

    def test_exact(self, trigger: str, ctx: MatchContext) -> Range | None:
        if ctx.context == trigger:
            return ctx.context_range
        return None

    def test_partial(self, trigger: str, ctx: MatchContext) -> Range | None:
        if ctx.context and trigger.startswith(ctx.context):
            return ctx.context_range
        return None


_POLICIES: dict[PolicyKind, MatchPolicy] = {
    PolicyKind.INWORD: InWordPolicy(),
    PolicyKind.WORDBOUNDARY: WordBoundaryPolicy(),
    PolicyKind.BEGINNINGOFLINE: BeginningOfLinePolicy(),
    PolicyKind.DEFAULT: DefaultPolicy(),
}


def policy_for(template: Template) -> MatchPolicy:
    """Select the matching policy for a literal-trigger template."""
    if template.inword:
        return _POLICIES[PolicyKind.INWORD]
    if template.wordboundary:
        return _POLICIES[PolicyKind.WORDBOUNDARY]
    if template.beginningofline:
        return _POLICIES[PolicyKind.BEGINNINGOFLINE]
    return _POLICIES[PolicyKind.DEFAULT]
