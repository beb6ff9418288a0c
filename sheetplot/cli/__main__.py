from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from sheetplot.config.loader import ConfigError, PlotConfig, load_config
from sheetplot.logging.init import log_summary, setup_logging
from sheetplot.logging.reject_log import RejectLogBuffer
from sheetplot.mapping.resolver import heuristic_mapping
from sheetplot.services.inference import InferenceClient, client_from_config, identify_columns
from sheetplot.services.orchestrator import process_sources
from sheetplot.services.summary import format_seconds, render_summary_line
from sheetplot.sheet.reader import SourceError, read_table

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config
- Plot every source given on the command line
- Write one GeoJSON file per source into output_dir
- Print the SUMMARY line and exit with the run status
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env via python-dotenv; a broken file only warns."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sheetplot", description="Plot spreadsheet rows as map points")
    p.add_argument("sources", nargs="*", help="CSV/XLSX path, CSV URL or Google Sheets URL")
    p.add_argument("--config", type=Path, default=None, help="YAML config (default config/sheetplot.yml)")
    p.add_argument("--lat", dest="lat_column", help="Latitude column (overrides detection)")
    p.add_argument("--lng", dest="lng_column", help="Longitude column (overrides detection)")
    p.add_argument("--swap", action="store_true", help="Swap latitude and longitude columns")
    p.add_argument("--style-column", help="Color markers by the distinct values of this column")
    p.add_argument("--out-dir", type=Path, default=None, help="GeoJSON output directory (overrides config)")
    p.add_argument("--reject-log", action="store_true", help="Write dropped rows to logs/rejects-*.log")
    p.add_argument("--no-inference", action="store_true", help="Skip the external inference service")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print headers, detected mapping & first rows then exit")
    return p.parse_args(argv)


def _build_client(cfg: PlotConfig, disabled: bool) -> InferenceClient | None:
    if disabled:
        return None
    inf = cfg.inference
    return client_from_config(inf.endpoint, inf.api_key, inf.timeout_seconds)


def _inspect_data(sources: list[str], cfg: PlotConfig, client: InferenceClient | None) -> int:
    code = EXIT_SUCCESS_ALL
    for source in sources:
        print(f"SOURCE: {source}")
        try:
            table = read_table(source, null_sentinels=cfg.null_sentinels, timeout=cfg.inference.timeout_seconds)
        except SourceError as e:
            print(f"  read_error: {e}")
            code = EXIT_PARTIAL_FAILURE
            continue
        hint = identify_columns(table.headers, table.rows, client)
        print(f"  headers={table.headers} rows={len(table.rows)}")
        print(f"  hint={hint.to_dict() if hint else None} heuristic={heuristic_mapping(table.headers).to_dict()}")
        print("  sample_rows=", table.rows[:INSPECT_SAMPLE_ROWS])
    return code


def main(argv: list[str] | None = None) -> int:
    # Only read sys.argv when no explicit list was given (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    logger = setup_logging(debug=args.debug)
    logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if not args.sources:
        logger.error("no sources given")
        return EXIT_FATAL

    client = _build_client(cfg, args.no_inference)
    if client is None:
        logger.debug("inference disabled -> heuristic column detection only")

    if args.inspect_data:
        return _inspect_data(args.sources, cfg, client)

    reject_log = RejectLogBuffer() if args.reject_log else None
    out_dir = args.out_dir if args.out_dir is not None else Path(cfg.output_dir)
    result = process_sources(
        args.sources,
        cfg,
        client,
        lat_column=args.lat_column,
        lng_column=args.lng_column,
        swap=args.swap,
        style_column=args.style_column,
        out_dir=out_dir,
        reject_log=reject_log,
    )

    if reject_log is not None:
        path = reject_log.flush()
        if path is not None:
            logger.info(f"rejected rows written to {path}")
    logger.debug(f"median source time={format_seconds(result.median_source_seconds)}s")

    # render_summary_line includes the label; log_summary adds it again
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))

    if result.failed_sources > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
