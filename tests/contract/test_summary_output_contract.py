from __future__ import annotations

import re
from pathlib import Path

from sheetplot.cli import main as cli_main

SUMMARY_RE = re.compile(
    r"^SUMMARY sources=(\d+) ok=(\d+) failed=(\d+) rows=(\d+) plotted=(\d+) dropped=(\d+) elapsed_sec=[0-9.]+$",
    re.MULTILINE,
)


def test_summary_line_is_last_and_matches_format(temp_workdir: Path, cities_csv: Path, capsys):
    cli_main([str(cities_csv)])
    lines = capsys.readouterr().out.strip().splitlines()
    m = SUMMARY_RE.match(lines[-1])
    assert m is not None, lines[-1]
    assert m.groups() == ("1", "1", "0", "6", "4", "2")
