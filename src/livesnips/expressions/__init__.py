"""Context filter expressions for snippets."""

from ._context import ScopeContext
from ._filter import ContextFilter

__all__ = ["ContextFilter", "ScopeContext"]
