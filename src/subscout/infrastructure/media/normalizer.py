"""Filename normalization for video/subtitle matching.

Reduces a file name to a lowercase, space-separated comparison key by
removing the extension, separators, subtitle flags, a trailing language
tag and release/quality noise. The key is only ever compared for
equality; it is never shown or stored.
"""

from __future__ import annotations

import os
import re

from subscout.infrastructure.media.languages import (
    LanguageTable,
    default_language_table,
)
from subscout.infrastructure.media.subtitle_tags import FORCED_TAGS, HEARING_IMPAIRED_TAGS

_SEPARATOR_RE = re.compile(r"[._\-]")

_FLAG_TAGS = HEARING_IMPAIRED_TAGS | FORCED_TAGS

RELEASE_TAGS: tuple[str, ...] = (
    # Multi-word
    "directors cut",
    "extended cut",
    "web dl",
    "web cap",
    "blu ray",
    # Sources
    "webrip",
    "web",
    "hdtv",
    "hdrip",
    "bdrip",
    "brrip",
    "bluray",
    "dvdrip",
    "dvdr",
    # Resolutions
    "480p",
    "720p",
    "1080p",
    "2160p",
    "4k",
    "uhd",
    "sd",
    # Video codecs
    "x264",
    "h264",
    "x265",
    "h265",
    "hevc",
    # Audio codecs
    "aac",
    "ac3",
    "eac3",
    "dts",
    "truehd",
    # Release types
    "remux",
    "repack",
    "proper",
    "internal",
    "limited",
    "extended",
    "uncut",
)

# Longest first so "extended cut" goes before "extended".
_TAG_SEQUENCES: tuple[tuple[str, ...], ...] = tuple(
    tuple(tag.split())
    for tag in sorted(set(RELEASE_TAGS), key=lambda t: (-len(t), t))
)


def _remove_sequence(tokens: list[str], seq: tuple[str, ...]) -> list[str]:
    width = len(seq)
    out: list[str] = []
    i = 0
    while i < len(tokens):
        if tuple(tokens[i : i + width]) == seq:
            i += width
            continue
        out.append(tokens[i])
        i += 1
    return out


def _strip_release_tags(tokens: list[str]) -> list[str]:
    for seq in _TAG_SEQUENCES:
        tokens = _remove_sequence(tokens, seq)
    return tokens


def _strip_trailing_language(tokens: list[str], languages: LanguageTable) -> list[str]:
    if len(tokens) >= 2:
        first, second = tokens[-2], tokens[-1]
        if f"{first}-{second}" in languages or f"{first} {second}" in languages:
            return tokens[:-2]
    if tokens and tokens[-1] in languages:
        return tokens[:-1]
    return tokens


def _reduce(tokens: list[str], languages: LanguageTable) -> list[str]:
    tokens = [t for t in tokens if t not in _FLAG_TAGS]
    tokens = _strip_trailing_language(tokens, languages)
    # Second pass catches tags that only became whole after the first.
    tokens = _strip_release_tags(_strip_release_tags(tokens))
    return [t for t in tokens if not (len(t) == 1 and t.isdigit())]


def normalize_filename(filename: str, languages: LanguageTable | None = None) -> str:
    """Return the comparison key for *filename*.

    Idempotent: ``normalize_filename(normalize_filename(x)) ==
    normalize_filename(x)``. The reduction is repeated until stable so a
    language tag uncovered by tag removal is stripped in the same call.
    """
    table = languages if languages is not None else default_language_table()

    base, _ext = os.path.splitext(filename)
    tokens = _SEPARATOR_RE.sub(" ", base).lower().split()

    while True:
        reduced = _reduce(tokens, table)
        if reduced == tokens:
            break
        tokens = reduced

    return " ".join(tokens)
