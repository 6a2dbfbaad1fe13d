"""Common infrastructure utilities."""

from __future__ import annotations

from .converters import to_int, to_year
from .http import get_json

__all__ = [
    "get_json",
    "to_int",
    "to_year",
]
