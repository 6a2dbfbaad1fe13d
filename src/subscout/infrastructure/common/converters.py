"""Type conversion utilities for loosely typed provider payloads."""

from __future__ import annotations

import re
from typing import Any

_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


def to_int(raw: Any) -> int | None:
    """Convert an int or numeric string to int, None if invalid.

    Handles:
        - None -> None
        - True/False -> None
        - 42 -> 42
        - "42" -> 42
        - " 42 " -> 42
        - "" / "abc" / 4.2 -> None
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        text = raw.strip()
        if not text.isdigit():
            return None
        return int(text)
    return None


def to_year(raw: Any) -> int | None:
    """Extract a year from ``2010``, ``"2010"`` or a range like ``"2010-2014"``.

    Zero and unparseable values mean "unknown" and return None.
    """
    if isinstance(raw, str):
        match = _LEADING_INT_RE.match(raw)
        value = int(match.group(1)) if match else None
    else:
        value = to_int(raw)
    return value or None
