from __future__ import annotations

from dataclasses import dataclass

"""ClusterAggregate model (render-time only, never persisted)."""

__all__ = [
    "ClusterAggregate",
]


@dataclass(frozen=True)
class ClusterAggregate:
    """Display value for one cluster glyph.

    When ``is_sum`` is True ``value`` is the sum of the members' numeric
    highlight values; otherwise it is the member count.
    """
    value: float
    is_sum: bool
    point_count: int
    numeric_members: int = 0
