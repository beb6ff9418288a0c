from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

"""Point and RejectedRow models.

A Point is a validated geographic position plus the row it came from. A
RejectedRow describes why a row produced no point; it is diagnostic only and
never returned by the point resolver itself.
"""

__all__ = [
    "Point",
    "RejectReason",
    "RejectedRow",
]


@dataclass(frozen=True)
class Point:
    """Validated point (-90 <= lat <= 90, -180 <= lng <= 180, not (0, 0))."""
    lat: float
    lng: float
    source_row: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Read-only view so a shared row cannot be mutated through a point
        if not isinstance(self.source_row, MappingProxyType):
            object.__setattr__(self, "source_row", MappingProxyType(dict(self.source_row)))


class RejectReason(Enum):
    """Why a row yielded no point.

    - NO_MAPPING: mapping absent or a column name is empty
    - MALFORMED_COMBINED: combined cell split into fewer than two parts
    - UNPARSEABLE_LAT / UNPARSEABLE_LNG: the parser rejected the cell
    - OUT_OF_RANGE: latitude or longitude outside the valid range
    - ORIGIN_SENTINEL: both coordinates are zero
    """
    NO_MAPPING = "NO_MAPPING"
    MALFORMED_COMBINED = "MALFORMED_COMBINED"
    UNPARSEABLE_LAT = "UNPARSEABLE_LAT"
    UNPARSEABLE_LNG = "UNPARSEABLE_LNG"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    ORIGIN_SENTINEL = "ORIGIN_SENTINEL"


@dataclass(frozen=True)
class RejectedRow:
    """Diagnostic record for a dropped row."""
    row_index: int  # 0-based position in the input rows
    reason: RejectReason
    lat_raw: str  # text the latitude was parsed from ("" when not reached)
    lng_raw: str
