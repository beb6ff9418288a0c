from __future__ import annotations

from ..models.plot_result import RunResult

"""SUMMARY line rendering.

Format:
SUMMARY sources={total} ok={ok} failed={failed} rows={rows} plotted={plotted}
dropped={dropped} elapsed_sec={elapsed}
"""

__all__ = [
    "format_seconds",
    "render_summary_line",
]


def format_seconds(seconds: float) -> str:
    """Compact seconds: integers without decimals, tiny values without scientific notation."""
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> render_summary_line(RunResult(1, 0, 10, 8, t, t, 2.0))
        'SUMMARY sources=1 ok=1 failed=0 rows=10 plotted=8 dropped=2 elapsed_sec=2'
    """
    total = result.ok_sources + result.failed_sources
    return (
        f"SUMMARY sources={total} "
        f"ok={result.ok_sources} "
        f"failed={result.failed_sources} "
        f"rows={result.total_rows} "
        f"plotted={result.plotted_rows} "
        f"dropped={result.dropped_rows} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )
