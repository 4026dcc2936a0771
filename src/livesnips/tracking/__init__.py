"""Edit-tracking ranges used by live snippet instances."""

from livesnips.enums import GrowthType

from ._dynamic_range import ChangeInfo, DynamicRange, PositionDelta, get_range_delta

__all__ = [
    "ChangeInfo",
    "DynamicRange",
    "GrowthType",
    "PositionDelta",
    "get_range_delta",
]
