"""Release name parser using guessit for title/year/episode extraction."""

from __future__ import annotations

import os
import re
from typing import Any

import structlog
from guessit import guessit
from guessit.api import GuessitException

from subscout.domain.entities.media import ReleaseInfo

log = structlog.get_logger(__name__)

_FALLBACK_SEPARATOR_RE = re.compile(r"[._]+")


def _first(value: Any) -> Any:
    """guessit returns lists for multi-episode/multi-season files."""
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _as_int(value: Any) -> int | None:
    value = _first(value)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_str(value: Any) -> str | None:
    value = _first(value)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def fallback_title(file_name: str) -> str:
    """Lightly cleaned base name: no extension, separators to spaces."""
    base, _ext = os.path.splitext(file_name)
    return " ".join(_FALLBACK_SEPARATOR_RE.sub(" ", base).split())


def parse_release(file_name: str) -> ReleaseInfo:
    """Parse a video file name into ``ReleaseInfo``.

    Never raises for unparseable names: the title falls back to the
    cleaned base name and every other field stays None.
    """
    try:
        guess = guessit(file_name)
    except GuessitException:
        log.warning("release_parse_failed", file_name=file_name, exc_info=True)
        return ReleaseInfo(title=fallback_title(file_name))

    title = _as_str(guess.get("title"))
    if not title:
        log.debug("release_parse_no_title", file_name=file_name)
        return ReleaseInfo(title=fallback_title(file_name))

    return ReleaseInfo(
        title=title,
        year=_as_int(guess.get("year")),
        season=_as_int(guess.get("season")),
        episode=_as_int(guess.get("episode")),
        resolution=_as_str(guess.get("screen_size")),
        source=_as_str(guess.get("source")),
        release_group=_as_str(guess.get("release_group")),
    )
