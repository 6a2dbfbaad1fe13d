"""Video/subtitle pairing by normalized file name.

Two names match when their normalized keys are non-empty and identical.
Matching is symmetric; it is only transitive across names that all
normalize to the same key.
"""

from __future__ import annotations

from pathlib import PurePath
from typing import Iterable, TypeVar

from subscout.infrastructure.media.languages import LanguageTable
from subscout.infrastructure.media.normalizer import normalize_filename

PathLike = TypeVar("PathLike", str, PurePath)


def _file_name(path: str | PurePath) -> str:
    return PurePath(path).name


def match_video_subtitle(
    video_name: str | PurePath,
    subtitle_name: str | PurePath,
    languages: LanguageTable | None = None,
) -> bool:
    """Return True if *video_name* and *subtitle_name* refer to the same media."""
    video_key = normalize_filename(_file_name(video_name), languages)
    subtitle_key = normalize_filename(_file_name(subtitle_name), languages)
    if not video_key or not subtitle_key:
        return False
    return video_key == subtitle_key


def find_matching_subtitle(
    video: str | PurePath,
    subtitles: Iterable[PathLike],
    languages: LanguageTable | None = None,
) -> PathLike | None:
    """Return the first subtitle in *subtitles* matching *video*, or None."""
    for candidate in subtitles:
        if match_video_subtitle(video, candidate, languages):
            return candidate
    return None


def find_matching_video(
    subtitle: str | PurePath,
    videos: Iterable[PathLike],
    languages: LanguageTable | None = None,
) -> PathLike | None:
    """Return the first video in *videos* matching *subtitle*, or None."""
    for candidate in videos:
        if match_video_subtitle(candidate, subtitle, languages):
            return candidate
    return None
