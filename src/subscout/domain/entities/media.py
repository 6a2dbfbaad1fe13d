"""Domain entities for local media identity.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Literal, Mapping

CatalogType = Literal["movie", "show", "episode"]


class IdentitySource(str, Enum):
    """Evidence source that produced a resolved IMDb ID."""

    NFO = "nfo"
    HASH = "hash"
    CATALOG = "catalog"
    SUGGESTION = "suggestion"


class JobStatus(str, Enum):
    """Lifecycle states of an upload job."""

    PENDING = "pending"
    PROCESSING = "processing"
    READY = "ready"
    UPLOADING = "uploading"
    COMPLETE = "complete"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class LanguageInfo:
    """One language's code family."""

    provider_code: str  # OpenSubtitles code, e.g. "en", "pt-br", "ze"
    alpha2: str  # ISO 639-1, e.g. "pt"
    alpha3: str  # ISO 639-2/B, e.g. "por", "gre"
    name: str  # English display name
    aliases: tuple[str, ...] = ()  # extra lookup keys, e.g. ("ell", "greek")


@dataclass(frozen=True)
class ReleaseInfo:
    """Metadata parsed from a release-style file name."""

    title: str
    year: int | None = None
    season: int | None = None
    episode: int | None = None
    resolution: str | None = None  # "1080p"
    source: str | None = None  # "Blu-ray", "Web"
    release_group: str | None = None


@dataclass(frozen=True)
class VideoInfo:
    """Consolidated metadata for one video file."""

    file_path: str
    file_name: str
    file_size: int
    fingerprint: str | None = None  # OSDb movie hash, None below 128 KiB

    title: str = ""
    year: int | None = None
    season: int | None = None
    episode: int | None = None
    resolution: str | None = None
    source: str | None = None
    release_group: str | None = None

    nfo_imdb_id: str | None = None
    hash_imdb_id: str | None = None
    catalog_imdb_id: str | None = None
    suggest_imdb_id: str | None = None
    trakt_id: str | None = None  # cross-reference, never the primary ID

    resolved_imdb_id: str = ""
    identity_source: IdentitySource | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if self.identity_source is not None:
            data["identity_source"] = self.identity_source.value
        return data


@dataclass(frozen=True)
class SubtitleInfo:
    """Consolidated metadata for one subtitle file."""

    file_path: str
    file_name: str
    file_size: int
    checksum: str  # MD5 hex digest of the whole file
    language: str | None = None  # canonical provider code
    format: str = ""  # extension without the dot
    hearing_impaired: bool = False
    forced: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FeatureMatch:
    """A movie/episode entry returned by the hash-indexed feature catalog."""

    feature_id: str
    imdb_id: int = 0  # numeric part, 0 when unknown
    title: str = ""
    year: int | None = None
    feature_type: str = ""
    tmdb_id: int | None = None
    season: int | None = None
    episode: int | None = None


@dataclass(frozen=True)
class CatalogEntry:
    """A cross-reference catalog search hit."""

    type: str  # "movie", "show", "episode"
    title: str
    year: int | None = None
    ids: Mapping[str, str] = field(default_factory=dict)  # {"trakt": "1", "imdb": "tt..."}


@dataclass(frozen=True)
class Suggestion:
    """A title-suggestion hit."""

    id: str
    title: str
    year: int | None = None


@dataclass(frozen=True)
class UploadJob:
    """A video/subtitle pair prepared for the upload tooling."""

    subtitle: SubtitleInfo
    video: VideoInfo | None = None
    status: JobStatus = JobStatus.PENDING
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "video": self.video.to_dict() if self.video is not None else None,
            "subtitle": self.subtitle.to_dict(),
            "status": self.status.value,
            "message": self.message,
        }
