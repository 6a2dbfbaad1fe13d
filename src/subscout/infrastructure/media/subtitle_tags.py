"""Language and flag detection from subtitle file names."""

from __future__ import annotations

import re
from typing import NamedTuple

from subscout.infrastructure.media.languages import (
    LanguageTable,
    default_language_table,
)

SUBTITLE_EXTENSIONS: tuple[str, ...] = (".srt", ".sub", ".ass", ".ssa", ".vtt", ".txt")

HEARING_IMPAIRED_TAGS = frozenset({"sdh", "hi", "hearingimpaired"})
FORCED_TAGS = frozenset({"forced", "frc"})

_TOKEN_SPLIT_RE = re.compile(r"[._\- ]+")


class SubtitleFlags(NamedTuple):
    hearing_impaired: bool
    forced: bool


def _strip_subtitle_extension(lower_name: str) -> str:
    for ext in SUBTITLE_EXTENSIONS:
        if lower_name.endswith(ext):
            return lower_name[: -len(ext)]
    return lower_name


def tokenize(filename: str) -> list[str]:
    """Lowercase *filename*, drop a subtitle extension, split on separators."""
    base = _strip_subtitle_extension(filename.lower())
    return [token for token in _TOKEN_SPLIT_RE.split(base) if token]


def detect_language(
    filename: str, languages: LanguageTable | None = None
) -> str | None:
    """Return the provider language code tagged in *filename*, or None.

    Tokens are scanned right to left: language tags trail release tags,
    so ``movie.en.subtitle.fr.srt`` is French. Flag tokens that double as
    language codes ("hi") only count when no other language tag exists,
    so ``movie.en.hi.srt`` is English.
    """
    table = languages if languages is not None else default_language_table()
    tokens = list(reversed(tokenize(filename)))
    flagged = [t for t in tokens if t in HEARING_IMPAIRED_TAGS or t in FORCED_TAGS]
    for token in [t for t in tokens if t not in flagged] + flagged:
        code = table.provider_code(token)
        if code is not None:
            return code
    return None


def detect_flags(filename: str) -> SubtitleFlags:
    """Return the hearing-impaired and forced flags tagged in *filename*."""
    hearing_impaired = False
    forced = False
    for token in tokenize(filename):
        if token in HEARING_IMPAIRED_TAGS:
            hearing_impaired = True
        if token in FORCED_TAGS:
            forced = True
    return SubtitleFlags(hearing_impaired=hearing_impaired, forced=forced)
