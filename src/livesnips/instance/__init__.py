"""Live snippet instances and their parts."""

from ._instance import VISUAL_MARKER, SnippetInstance
from ._part import SnippetPart
from ._stack import InstanceStack

__all__ = ["VISUAL_MARKER", "InstanceStack", "SnippetInstance", "SnippetPart"]
