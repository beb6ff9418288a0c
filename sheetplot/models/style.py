from __future__ import annotations

from dataclasses import dataclass, field

"""Style models for categorical marker coloring."""

__all__ = [
    "StyleRule",
    "StyleConfig",
]


@dataclass(frozen=True)
class StyleRule:
    """Categorical color rule for one column.

    ``color_map`` maps each distinct stringified cell value to a palette color.
    Stable for the lifetime of the rule; rebuilding may reassign colors if the
    row order or content changed.
    """
    column: str
    color_map: dict[str, str] = field(default_factory=dict)
    type: str = "categorical"

    def color_for(self, value: str) -> str | None:
        return self.color_map.get(value)


@dataclass(frozen=True)
class StyleConfig:
    """Active styling state. Both fields None means every marker uses the default color."""
    active_column: str | None = None
    rule: StyleRule | None = None

    @property
    def is_active(self) -> bool:
        return self.active_column is not None and self.rule is not None
