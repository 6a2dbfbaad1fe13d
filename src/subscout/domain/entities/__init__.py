from .lookup import LookupOutcome, LookupStatus
from .media import (
    CatalogEntry,
    CatalogType,
    FeatureMatch,
    IdentitySource,
    JobStatus,
    LanguageInfo,
    ReleaseInfo,
    SubtitleInfo,
    Suggestion,
    UploadJob,
    VideoInfo,
)

__all__ = [
    "CatalogEntry",
    "CatalogType",
    "FeatureMatch",
    "IdentitySource",
    "JobStatus",
    "LanguageInfo",
    "LookupOutcome",
    "LookupStatus",
    "ReleaseInfo",
    "SubtitleInfo",
    "Suggestion",
    "UploadJob",
    "VideoInfo",
]
