from __future__ import annotations

import math
from typing import Any

"""Row representation for SheetPlot.

A row is a plain ``dict`` keyed by column header. Cells are kept loosely typed
and coerced to text on demand at every parse boundary via :func:`cell_text`.
"""

__all__ = [
    "Row",
    "cell_text",
]

Row = dict[str, Any]


def cell_text(value: Any) -> str:
    """Coerce a single cell to its text form.

    ``None`` and NaN (pandas' empty cell) become ``""``. Integral floats drop the
    trailing ``.0`` so ``5.0`` reads the same as the spreadsheet's ``5``.
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    return str(value)
