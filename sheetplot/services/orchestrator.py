from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import PlotConfig
from ..geo.points import rejected_rows
from ..logging.reject_log import RejectLogBuffer
from ..mapping.resolver import resolve_mapping_with_origin
from ..models.plot_result import PlotResult, RunResult, SourceStat
from ..sheet.reader import SourceError, read_table
from .export import unique_output_name, write_geojson
from .inference import InferenceClient, identify_columns, sheet_insights
from .progress import ProgressTracker
from .session import PlotSession

"""Pipeline orchestration.

build_plot() runs one source through load -> column mapping -> point
resolution -> styling. process_sources() repeats it over several sources,
writes GeoJSON output and aggregates the run statistics. A failing source is
recorded and skipped; it never aborts the run.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ProcessingError",
    "build_plot",
    "process_sources",
]


class ProcessingError(Exception):
    """Raised when user-supplied options do not fit the loaded source."""


def _check_column(headers: Sequence[str], column: str, what: str) -> None:
    if column not in headers:
        raise ProcessingError(f"{what} column not found: {column!r} (headers={list(headers)})")


def build_plot(
    source: str,
    config: PlotConfig,
    client: InferenceClient | None = None,
    *,
    lat_column: str | None = None,
    lng_column: str | None = None,
    swap: bool = False,
    style_column: str | None = None,
    sheet: str | None = None,
) -> PlotResult:
    """Load one source and resolve its points.

    ``lat_column`` / ``lng_column`` override the resolved mapping per axis
    (the same name for both selects combined-column mode). ``swap`` is applied
    after the overrides.

    Raises:
        SourceError: The source could not be read
        ProcessingError: An override or style column is not a header
    """
    started = time.perf_counter()
    table = read_table(
        source,
        sheet=sheet,
        null_sentinels=config.null_sentinels,
        timeout=config.inference.timeout_seconds,
    )
    headers = table.headers

    hint = identify_columns(headers, table.rows, client)
    mapping, origin = resolve_mapping_with_origin(headers, hint)
    if hint is not None and origin == "heuristic":
        logger.info(f"ignoring inferred mapping with unknown columns: {hint.to_dict()}")

    session = PlotSession(
        headers=headers,
        rows=table.rows,
        mapping=mapping,
        palette=config.palette,
        default_color=config.default_color,
        highlight_field=config.highlight_field,
    )
    if lat_column:
        _check_column(headers, lat_column, "latitude")
        session.set_mapping_column("lat", lat_column)
        origin = "override"
    if lng_column:
        _check_column(headers, lng_column, "longitude")
        session.set_mapping_column("lng", lng_column)
        origin = "override"
    if swap:
        session.swap()
    if style_column:
        _check_column(headers, style_column, "style")
        session.apply_style(style_column)

    logger.debug(
        f"{source}: mapping={session.mapping.to_dict() if session.mapping else None} "
        f"origin={origin} plotted={session.plotted_rows} dropped={session.dropped_rows}"
    )

    return PlotResult(
        source=source,
        headers=headers,
        rows=table.rows,
        mapping=session.mapping,
        points=session.points,
        style=session.style,
        insights=sheet_insights(table.rows, client),
        mapping_origin=origin,
        elapsed_seconds=time.perf_counter() - started,
    )


def process_sources(
    sources: Sequence[str],
    config: PlotConfig,
    client: InferenceClient | None = None,
    *,
    lat_column: str | None = None,
    lng_column: str | None = None,
    swap: bool = False,
    style_column: str | None = None,
    out_dir: Path | None = None,
    reject_log: RejectLogBuffer | None = None,
) -> RunResult:
    """Plot every source, writing ``<out_dir>/<name>.geojson`` per successful source.

    Sources sharing a name get numbered files (``cities.geojson``,
    ``cities-2.geojson``). A source whose output cannot be written is
    recorded as failed.
    """
    start_time = datetime.now(UTC)
    started = time.perf_counter()
    stats: list[SourceStat] = []
    results: list[PlotResult] = []
    taken_names: set[str] = set()

    with ProgressTracker(len(sources)) as progress:
        for source in sources:
            progress.start_source(Path(source).name or source)
            t0 = time.perf_counter()
            try:
                result = build_plot(
                    source,
                    config,
                    client,
                    lat_column=lat_column,
                    lng_column=lng_column,
                    swap=swap,
                    style_column=style_column,
                )
            except (SourceError, ProcessingError) as e:
                logger.error(f"{source}: {e}")
                stats.append(SourceStat(source, "failed", 0, 0, time.perf_counter() - t0, error=str(e)))
                progress.finish_source()
                continue

            output_path = None
            if out_dir is not None:
                name = unique_output_name(result.source, taken_names)
                try:
                    output_path = str(
                        write_geojson(
                            result,
                            out_dir,
                            highlight_field=config.highlight_field,
                            default_color=config.default_color,
                            theme=config.theme,
                            filename=name,
                        )
                    )
                except OSError as e:
                    logger.error(f"{source}: cannot write output: {e}")
                    stats.append(SourceStat(source, "failed", 0, 0, time.perf_counter() - t0, error=str(e)))
                    progress.finish_source()
                    continue
                taken_names.add(name)
            if reject_log is not None:
                reject_log.extend(source, rejected_rows(result.rows, result.mapping))

            lat, lng = (result.mapping.lat_column, result.mapping.lng_column) if result.mapping else ("", "")
            logger.info(
                f"{source}: plotted {result.plotted_rows}/{result.total_rows} rows "
                f"(lat={lat!r} lng={lng!r} via {result.mapping_origin})"
            )
            if result.total_rows and not result.plotted_rows:
                logger.warning(f"{source}: no valid coordinates found; check the column mapping")

            results.append(result)
            stats.append(
                SourceStat(
                    source,
                    "ok",
                    result.total_rows,
                    result.plotted_rows,
                    time.perf_counter() - t0,
                    output_path=output_path,
                )
            )
            progress.finish_source(plotted=result.plotted_rows, dropped=result.dropped_rows)

    ok = [s for s in stats if s.status == "ok"]
    return RunResult(
        ok_sources=len(ok),
        failed_sources=len(stats) - len(ok),
        total_rows=sum(s.total_rows for s in ok),
        plotted_rows=sum(s.plotted_rows for s in ok),
        start_time=start_time,
        end_time=datetime.now(UTC),
        elapsed_seconds=time.perf_counter() - started,
        source_stats=stats,
        results=results,
    )
