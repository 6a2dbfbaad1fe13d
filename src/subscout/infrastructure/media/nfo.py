"""Sidecar NFO reading."""

from __future__ import annotations

import re
from pathlib import Path

import structlog

log = structlog.get_logger(__name__)

IMDB_ID_RE = re.compile(r"tt\d{7,}")

_NFO_SUFFIXES = (".nfo", ".NFO", ".Nfo")


def nfo_path_for(video_path: str | Path) -> Path | None:
    """Return the existing ``<stem>.nfo`` beside *video_path*, if any."""
    video = Path(video_path)
    for suffix in _NFO_SUFFIXES:
        candidate = video.with_suffix(suffix)
        if candidate.is_file():
            return candidate
    return None


def extract_imdb_id(text: str) -> str | None:
    """Return the first ``tt`` + 7 or more digits ID in *text*."""
    match = IMDB_ID_RE.search(text)
    return match.group(0) if match else None


def read_nfo_imdb_id(nfo_path: str | Path) -> str | None:
    """Read *nfo_path* and return the IMDb ID it mentions.

    A missing file is not an error and returns None.
    """
    try:
        text = Path(nfo_path).read_text(encoding="utf-8", errors="replace")
    except FileNotFoundError:
        return None
    return extract_imdb_id(text)


def find_nfo_imdb_id(video_path: str | Path) -> str | None:
    """IMDb ID from the video's sidecar NFO, or None.

    Read errors other than "not found" are logged and treated as no hint;
    the sidecar is supporting evidence, not the primary file.
    """
    nfo = nfo_path_for(video_path)
    if nfo is None:
        return None
    try:
        imdb_id = read_nfo_imdb_id(nfo)
    except OSError:
        log.warning("nfo_read_failed", path=str(nfo), exc_info=True)
        return None
    if imdb_id:
        log.debug("nfo_imdb_id_found", path=str(nfo), imdb_id=imdb_id)
    return imdb_id
