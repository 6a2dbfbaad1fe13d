"""Local media analysis: hashing, name normalization, matching, tagging."""

from .hashing import file_checksum, osdb_fingerprint
from .languages import LanguageTable, build_language_table, default_language_table
from .matcher import find_matching_subtitle, find_matching_video, match_video_subtitle
from .nfo import find_nfo_imdb_id
from .normalizer import normalize_filename
from .release_parser import parse_release
from .subtitle_tags import SubtitleFlags, detect_flags, detect_language

__all__ = [
    "LanguageTable",
    "SubtitleFlags",
    "build_language_table",
    "default_language_table",
    "detect_flags",
    "detect_language",
    "file_checksum",
    "find_matching_subtitle",
    "find_matching_video",
    "find_nfo_imdb_id",
    "match_video_subtitle",
    "normalize_filename",
    "osdb_fingerprint",
    "parse_release",
]
