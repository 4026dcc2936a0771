"""Context filter expressions.

A ``context <expr>`` line in a snippet library attaches a filter to the next
snippet. Filters are rule-engine expressions evaluated against a
ScopeContext, for example::

    context 'comment' in scopes and language == 'python'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import rule_engine
from rule_engine import errors as rule_errors

from livesnips.exceptions import ContextFilterError

if TYPE_CHECKING:
    from ._context import ScopeContext


def _create_rule_context() -> rule_engine.Context:
    """Create the rule-engine context used for every filter.

    Unknown symbols resolve to null instead of failing, so filters written
    for a richer host still compile.
    """
    return rule_engine.Context(default_value=None)


@dataclass(frozen=True, slots=True)
class ContextFilter:
    """A compiled predicate over the lexical context at the cursor.

    Compiles the expression once and evaluates it against any number of
    contexts.
    """

    expression: str
    _rule: rule_engine.Rule | None = field(default=None, repr=False, compare=False)

    @classmethod
    def compile(cls, expression: str) -> ContextFilter:
        """Compile a filter expression.

        Args:
            expression: The rule-engine expression. Empty or whitespace-only
                expressions accept every context.

        Returns:
            A ContextFilter instance.

        Raises:
            ContextFilterError: If the expression is syntactically invalid.
        """
        if not expression.strip():
            return cls(expression=expression, _rule=None)

        try:
            rule = rule_engine.Rule(expression, context=_create_rule_context())
        except rule_errors.RuleSyntaxError as e:
            msg = f"Invalid context expression syntax: {e.message}"
            raise ContextFilterError(msg, expression=expression, cause=e) from e
        except rule_errors.EngineError as e:
            msg = f"Invalid context expression: {e.message}"
            raise ContextFilterError(msg, expression=expression, cause=e) from e
        return cls(expression=expression, _rule=rule)

    def __call__(self, context: ScopeContext) -> bool:
        return self.evaluate(context)

    def evaluate(self, context: ScopeContext) -> bool:
        """Evaluate the filter.

        Args:
            context: The lexical context at the cursor.

        Returns:
            True if the snippet may be offered in this context.

        Raises:
            ContextFilterError: If evaluation fails.
        """
        if self._rule is None:
            return True

        try:
            return bool(self._rule.matches(context.as_dict()))
        except rule_errors.EngineError as e:
            msg = f"Context expression evaluation failed: {e.message}"
            raise ContextFilterError(msg, expression=self.expression, cause=e) from e
