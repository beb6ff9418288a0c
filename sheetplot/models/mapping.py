from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""ColumnMapping model.

Names the latitude and longitude columns of a dataset. When both names are
equal the coordinates share one delimiter-separated cell (combined-column mode).
"""

__all__ = [
    "ColumnMapping",
]


@dataclass(frozen=True)
class ColumnMapping:
    """Latitude/longitude column pair for one loaded dataset."""
    lat_column: str
    lng_column: str

    @property
    def is_combined(self) -> bool:
        """Both coordinates live in the same cell."""
        return self.lat_column == self.lng_column

    @property
    def is_complete(self) -> bool:
        return bool(self.lat_column) and bool(self.lng_column)

    @classmethod
    def from_dict(cls, data: Any) -> ColumnMapping | None:
        """Build from an untrusted ``{"latColumn": ..., "lngColumn": ...}`` payload.

        Both camelCase (external services) and snake_case keys are accepted.
        Returns None when the payload is not a dict or a name is not a string.
        """
        if not isinstance(data, dict):
            return None
        lat = data.get("latColumn", data.get("lat_column"))
        lng = data.get("lngColumn", data.get("lng_column"))
        if not isinstance(lat, str) or not isinstance(lng, str):
            return None
        return cls(lat_column=lat, lng_column=lng)

    def to_dict(self) -> dict[str, str]:
        return {"latColumn": self.lat_column, "lngColumn": self.lng_column}
