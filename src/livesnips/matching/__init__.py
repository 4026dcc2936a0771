"""Trigger matching for snippet templates."""

from ._context import DEFAULT_LONG_CONTEXT_LINES, MatchContext
from ._matcher import (
    EXPAND_COMMAND,
    CompletionItem,
    ExpandCommand,
    MatchResult,
    SnippetMatch,
    match_templates,
    order_templates,
)
from ._policies import (
    BeginningOfLinePolicy,
    DefaultPolicy,
    InWordPolicy,
    MatchPolicy,
    PolicyKind,
    WordBoundaryPolicy,
    longest_trigger_prefix,
    policy_for,
)

__all__ = [
    "DEFAULT_LONG_CONTEXT_LINES",
    "EXPAND_COMMAND",
    "BeginningOfLinePolicy",
    "CompletionItem",
    "DefaultPolicy",
    "ExpandCommand",
    "InWordPolicy",
    "MatchContext",
    "MatchPolicy",
    "MatchResult",
    "PolicyKind",
    "SnippetMatch",
    "WordBoundaryPolicy",
    "longest_trigger_prefix",
    "match_templates",
    "order_templates",
    "policy_for",
]
