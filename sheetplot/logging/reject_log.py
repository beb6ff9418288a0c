from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from ..models.point import RejectedRow

"""Reject log: JSON Lines record of rows that produced no point.

Only written when requested (``--reject-log``). Rows are still dropped silently
by the resolver; this file is a troubleshooting aid for dirty spreadsheets.

- One file per run: ``logs/rejects-YYYYMMDD-HHMMSS.log`` (UTC)
- Fixed record keys, no extras
- Buffered in memory, appended on flush()
"""

__all__ = [
    "RejectRecord",
    "RejectLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


@dataclass(frozen=True)
class RejectRecord:
    """One dropped row.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: Source path or URL the row came from
        row: 1-based data row number (header excluded)
        reason: RejectReason value, UPPER_SNAKE_CASE
        lat_raw: Latitude text as seen by the parser
        lng_raw: Longitude text as seen by the parser
    """
    timestamp: str
    source: str
    row: int
    reason: str
    lat_raw: str
    lng_raw: str

    @staticmethod
    def create(source: str, rejected: RejectedRow) -> RejectRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return RejectRecord(
            timestamp=ts,
            source=source,
            row=rejected.row_index + 1,
            reason=rejected.reason.value,
            lat_raw=rejected.lat_raw,
            lng_raw=rejected.lng_raw,
        )

    def to_json_line(self) -> str:
        return json.dumps(
            {
                "timestamp": self.timestamp,
                "source": self.source,
                "row": self.row,
                "reason": self.reason,
                "lat_raw": self.lat_raw,
                "lng_raw": self.lng_raw,
            },
            ensure_ascii=False,
        )


class RejectLogBuffer:
    """In-memory buffer of reject records. flush() appends JSON Lines.

    The file path is fixed on first access; single-threaded use only.
    """
    def __init__(self, logs_dir: Path = LOGS_DIR) -> None:
        self._records: list[RejectRecord] = []
        self._logs_dir = logs_dir
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"rejects-{stamp}.log"
        return self._file_path

    def append(self, record: RejectRecord) -> None:
        self._records.append(record)

    def extend(self, source: str, rejected: list[RejectedRow]) -> None:
        for r in rejected:
            self._records.append(RejectRecord.create(source, r))

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the file path, or None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
