"""Trigger matching.

Given a document and a cursor, decide which templates apply and what text
they would replace. An automatic template that matches exactly wins outright
and is expanded directly; otherwise every exact or partial match becomes a
completion candidate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from livesnips.exceptions import ContextFilterError
from livesnips.text import Position, Range

from ._context import DEFAULT_LONG_CONTEXT_LINES, MatchContext
from ._policies import policy_for

if TYPE_CHECKING:
    from collections.abc import Sequence

    from structlog.typing import FilteringBoundLogger

    from livesnips.compiler import Template
    from livesnips.host import ScopeProvider, TextDocument

EXPAND_COMMAND = "livesnips.expand"


@dataclass(frozen=True, slots=True)
class ExpandCommand:
    """Opaque command a host runs when a completion item is accepted."""

    command: str
    title: str
    arguments: tuple[object, ...] = ()


@dataclass(frozen=True, slots=True)
class CompletionItem:
    """A completion entry for the host UI.

    Attributes:
        label: Text shown in the completion list.
        range: Where the (empty) insert text goes, collapsed at the end of
            the replacement range.
        detail: The template description.
        insert_text: Always empty; the command performs the expansion.
        command: Command that expands the match.
    """

    label: str
    range: Range
    detail: str
    insert_text: str
    command: ExpandCommand


@dataclass(frozen=True, slots=True)
class SnippetMatch:
    """One template matching the cursor context.

    Attributes:
        template: The matching template.
        label: Trigger text, or the full matched text for pattern triggers.
        range: Text the expansion replaces.
        groups: Pattern match groups, group 0 first. Empty for literals.
        exact: True for a full match, False for a partial one.
    """

    template: Template
    label: str
    range: Range
    groups: tuple[str, ...] = ()
    exact: bool = True

    def to_completion_item(self) -> CompletionItem:
        return CompletionItem(
            label=self.label,
            range=Range(self.range.end, self.range.end),
            detail=self.template.description,
            insert_text="",
            command=ExpandCommand(command=EXPAND_COMMAND, title="expand", arguments=(self,)),
        )


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of a match call: one automatic expansion or a candidate list."""

    expansion: SnippetMatch | None = None
    candidates: tuple[SnippetMatch, ...] = field(default_factory=tuple)

    @property
    def is_automatic(self) -> bool:
        return self.expansion is not None

    def completion_items(self) -> list[CompletionItem]:
        return [candidate.to_completion_item() for candidate in self.candidates]


def _match_pattern(template: Template, ctx: MatchContext) -> SnippetMatch | None:
    if template.regexp is None:
        return None
    text = ctx.long_context if template.multiline else ctx.line
    # In multiline mode ``$`` also matches at inner line ends; only a match
    # reaching the cursor counts.
    match = template.regexp.search(text)
    while match is not None and match.end() != len(text):
        match = template.regexp.search(text, match.start() + 1)
    if match is None:
        return None

    line_start = text.rfind("\n", 0, match.start()) + 1
    line_offset = text.count("\n", match.start())
    start = Position(ctx.position.line - line_offset, match.start() - line_start)
    groups = (match.group(0), *(group or "" for group in match.groups()))
    return SnippetMatch(
        template=template,
        label=match.group(0),
        range=Range(start, ctx.position),
        groups=groups,
        exact=True,
    )


def _match_literal(template: Template, ctx: MatchContext) -> SnippetMatch | None:
    policy = policy_for(template)
    if (range_ := policy.test_exact(template.trigger, ctx)) is not None:
        return SnippetMatch(template=template, label=template.trigger, range=range_)
    if (range_ := policy.test_partial(template.trigger, ctx)) is not None:
        return SnippetMatch(
            template=template, label=template.trigger, range=range_, exact=False
        )
    return None


def _accepts_context(
    template: Template, ctx: MatchContext, logger: FilteringBoundLogger
) -> bool:
    if template.context_filter is None:
        return True
    try:
        return template.context_filter.evaluate(ctx.scope_context)
    except ContextFilterError as e:
        logger.warning(
            "context_filter_failed",
            description=template.description,
            expression=e.expression,
            error=str(e),
        )
        return False


def order_templates(templates: Sequence[Template]) -> list[Template]:
    """Sort templates by descending priority, keeping definition order on ties."""
    indexed = sorted(enumerate(templates), key=lambda item: (-item[1].priority, item[0]))
    return [template for _, template in indexed]


def match_templates(
    document: TextDocument,
    position: Position,
    templates: Sequence[Template],
    *,
    scope_provider: ScopeProvider | None = None,
    long_context_lines: int = DEFAULT_LONG_CONTEXT_LINES,
    logger: FilteringBoundLogger | None = None,
) -> MatchResult:
    """Match templates against the text before the cursor.

    Templates are scanned in descending priority. The first automatic
    template that matches exactly is returned on its own. Otherwise each
    template contributes at most one candidate; hidden templates are never
    listed. Templates whose context filter rejects the cursor context are
    skipped.

    Args:
        document: The document being edited.
        position: The cursor.
        templates: Candidate templates.
        scope_provider: Scope lookup for context filters.
        long_context_lines: Lines of history searched by multiline patterns.
        logger: Logger for filter failures.

    Returns:
        The match result.
    """
    if logger is None:
        logger = structlog.get_logger("livesnips.matching")

    ctx = MatchContext.derive(
        document,
        position,
        long_context_lines=long_context_lines,
        scope_provider=scope_provider,
    )

    candidates: list[SnippetMatch] = []
    for template in order_templates(templates):
        if template.regexp is not None:
            match = _match_pattern(template, ctx)
        else:
            match = _match_literal(template, ctx)

        if match is None or not _accepts_context(template, ctx, logger):
            continue

        if template.automatic and match.exact:
            logger.debug("automatic_match", trigger=match.label, range=str(match.range))
            return MatchResult(expansion=match)

        if not template.hidden:
            candidates.append(match)

    return MatchResult(candidates=tuple(candidates))
