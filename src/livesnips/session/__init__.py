"""Session state tying templates, instances and the host together."""

from ._registry import SnippetRegistry
from ._selection import SelectionMemory
from ._session import MAX_WARNINGS, SnippetSession

__all__ = ["MAX_WARNINGS", "SelectionMemory", "SnippetRegistry", "SnippetSession"]
