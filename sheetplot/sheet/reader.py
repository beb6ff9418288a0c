from __future__ import annotations

import io
import re
import zipfile
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs, urlparse

import pandas as pd
import requests

from ..models.row_data import Row, cell_text

"""Tabular source reader.

Loads a CSV file, an Excel workbook, a remote CSV URL or a shared Google Sheet
into ``headers`` + ``rows``. Every cell is kept as text; coordinate parsing and
numeric coercion happen later, on demand.

Rules:
- The first row is the header row; header names are stripped.
- Rows where every cell is empty are skipped.
- Cells whose upper-cased text is a configured null sentinel become "".
"""

__all__ = [
    "SourceError",
    "TableData",
    "google_sheet_csv_url",
    "normalize_frame",
    "read_table",
]

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}
DEFAULT_TIMEOUT_SECONDS = 20.0

_SHEET_ID = re.compile(r"/spreadsheets/d/([a-zA-Z0-9_-]+)")


class SourceError(Exception):
    """Raised when a tabular source cannot be fetched or parsed."""


@dataclass
class TableData:
    source: str
    headers: list[str]
    rows: list[Row] = field(default_factory=list)  # column name -> text


def google_sheet_csv_url(url: str) -> str | None:
    """Rewrite a Google Sheets share/edit URL to its CSV export URL.

    Returns None when ``url`` is not a Google Sheets document URL. The ``gid``
    (tab id) is taken from the query string or the fragment when present.
    """
    parsed = urlparse(url)
    if parsed.netloc != "docs.google.com":
        return None
    m = _SHEET_ID.search(parsed.path)
    if m is None:
        return None
    gid = None
    for part in (parsed.query, parsed.fragment):
        values = parse_qs(part).get("gid")
        if values:
            gid = values[0]
            break
    export = f"https://docs.google.com/spreadsheets/d/{m.group(1)}/export?format=csv"
    if gid:
        export += f"&gid={gid}"
    return export


def _is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def _fetch_csv_text(url: str, timeout: float) -> str:
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise SourceError(f"failed to fetch {url}: {e}") from e
    if "text/html" in resp.headers.get("Content-Type", ""):
        # Google answers private sheets with a sign-in page instead of CSV
        raise SourceError(f"source did not return CSV (is the sheet shared publicly?): {url}")
    return resp.text


def normalize_frame(
    df: pd.DataFrame, source: str, null_sentinels: Iterable[str] | None = None
) -> TableData:
    """Turn a raw DataFrame (header already applied) into TableData."""
    sentinels = {s.strip().upper() for s in null_sentinels} if null_sentinels else set()
    headers = [str(c).strip() for c in df.columns.tolist()]
    rows: list[Row] = []
    for raw in df.itertuples(index=False, name=None):
        row: Row = {}
        for col, val in zip(headers, raw, strict=False):
            text = cell_text(val)
            if sentinels and text.strip().upper() in sentinels:
                text = ""
            row[col] = text
        if all(v.strip() == "" for v in row.values()):
            continue
        rows.append(row)
    return TableData(source=source, headers=headers, rows=rows)


def read_table(
    source: str | Path,
    *,
    sheet: str | None = None,
    null_sentinels: Iterable[str] | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> TableData:
    """Read a tabular source into TableData.

    Parameters
    ----------
    source: local .csv/.xlsx path, http(s) CSV URL or Google Sheets URL
    sheet: workbook sheet name (Excel only, default the first sheet)
    null_sentinels: cell texts treated as empty (case-insensitive)
    timeout: HTTP timeout in seconds for remote sources

    Raises
    ------
    SourceError: the source is missing, unreachable or not parseable
    """
    name = str(source)
    read_opts: dict[str, Any] = {"dtype": str, "keep_default_na": False}
    try:
        if _is_url(name):
            url = google_sheet_csv_url(name) or name
            df = pd.read_csv(io.StringIO(_fetch_csv_text(url, timeout)), **read_opts)
        else:
            path = Path(name)
            if not path.exists():
                raise SourceError(f"source not found: {path}")
            if path.suffix.lower() in EXCEL_SUFFIXES:
                df = pd.read_excel(path, sheet_name=sheet if sheet is not None else 0, **read_opts)
            else:
                df = pd.read_csv(path, **read_opts)
    except SourceError:
        raise
    except (ValueError, OSError, zipfile.BadZipFile, pd.errors.ParserError) as e:
        raise SourceError(f"failed to parse {name}: {e}") from e
    return normalize_frame(df, name, null_sentinels)
