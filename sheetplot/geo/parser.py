from __future__ import annotations

import re

"""Scalar coordinate parser.

Turns one free-text cell ("48,85", "S 33.86", "-74.0060") into signed decimal
degrees. The parser never raises: anything it cannot read yields None.

Known limitation: any ``S`` or ``W`` anywhere in the text flips the sign, so a
label such as "West Dock 12" parses as -12. Range and origin checks happen in
the point resolver, not here.
"""

__all__ = [
    "parse_coordinate",
]

_NEGATIVE_MARKERS = ("S", "W")
_NON_NUMERIC = re.compile(r"[^0-9.\-]")
# Longest leading decimal literal, the remainder is ignored ("12.5.3" -> 12.5)
_LEADING_NUMBER = re.compile(r"^-?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_coordinate(raw: str) -> float | None:
    """Parse a single coordinate cell.

    Steps:
    1. Trim and uppercase; empty text is rejected.
    2. Negative when the text holds a south/west marker or starts with ``-``.
    3. A lone comma with no period is a decimal comma ("48,85" -> "48.85").
    4. Drop everything except digits, periods and minus signs.
    5. Read the leading number; nothing readable is rejected.
    6. Apply the sign from step 2 to the absolute value.

    Args:
        raw: Cell text (already coerced with ``cell_text``)

    Returns:
        Signed decimal degrees, or None when the text is rejected
    """
    text = raw.strip().upper()
    if not text:
        return None

    negative = any(m in text for m in _NEGATIVE_MARKERS) or text.startswith("-")

    if text.count(",") == 1 and "." not in text:
        text = text.replace(",", ".")

    cleaned = _NON_NUMERIC.sub("", text)
    match = _LEADING_NUMBER.match(cleaned)
    if match is None:
        return None
    try:
        value = abs(float(match.group(0)))
    except ValueError:  # pragma: no cover (regex guarantees a float literal)
        return None
    return -value if negative else value
