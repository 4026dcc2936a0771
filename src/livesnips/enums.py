"""Enumeration types for livesnips."""

from enum import Enum, StrEnum, auto


class SnippetFlag(StrEnum):
    """Behaviour flags that can follow a snippet header.

    The value of each member is the flag character used in library files.
    """

    AUTOMATIC = "A"
    MULTILINE = "M"
    INWORD = "i"
    WORDBOUNDARY = "w"
    BEGINNINGOFLINE = "b"
    HIDDEN = "H"


class GrowthType(Enum):
    """How a dynamic range boundary reacts to an edit touching it.

    GROW lets the end boundary absorb text inserted exactly at it. FIX_LEFT
    keeps the end boundary in place for such insertions. FIX_RIGHT shifts the
    start boundary along with text inserted exactly at it.
    """

    GROW = auto()
    FIX_LEFT = auto()
    FIX_RIGHT = auto()


class PartType(StrEnum):
    """Kinds of parts that make up a live snippet expansion."""

    PLACEHOLDER = "placeholder"
    BLOCK = "block"


class InstanceState(StrEnum):
    """Lifecycle states of a snippet instance."""

    INSTANTIATING = "instantiating"
    ACTIVE = "active"
    ABANDONED = "abandoned"
