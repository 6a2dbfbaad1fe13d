"""Identity resolution use case: one video/subtitle pair to one IMDb ID.

Evidence sources are consulted as an ordered pipeline of named steps:

1. ``apply_nfo_hint``: IMDb ID from a sidecar ``.nfo`` file. Always wins.
2. ``apply_hash_lookup``: OpenSubtitles feature search by OSDb hash.
3. ``apply_cross_reference``: Trakt search, by the working ID when one
   exists (cross-reference only) or by parsed title otherwise.
4. ``apply_suggestions``: IMDb suggestion search by parsed title.

Provider calls are soft-fail: errors are logged and turned into a
``LookupOutcome``; only cancellation and failures reading the primary
files propagate.
"""

from __future__ import annotations

import asyncio
import dataclasses
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Sequence, TypeVar

import structlog

from subscout.domain.entities.lookup import LookupOutcome, LookupStatus
from subscout.domain.entities.media import (
    CatalogEntry,
    IdentitySource,
    ReleaseInfo,
    SubtitleInfo,
    VideoInfo,
)
from subscout.domain.exceptions import FileTooSmallError
from subscout.domain.ports.catalog import (
    CrossReferenceSearchPort,
    FeatureSearchPort,
    SuggestionSearchPort,
)
from subscout.infrastructure.media.hashing import file_checksum, osdb_fingerprint
from subscout.infrastructure.media.languages import (
    LanguageTable,
    default_language_table,
)
from subscout.infrastructure.media.nfo import find_nfo_imdb_id
from subscout.infrastructure.media.release_parser import parse_release
from subscout.infrastructure.media.subtitle_tags import detect_flags, detect_language

log = structlog.get_logger(__name__)

T = TypeVar("T")

IMDB_ID_PREFIX = "tt"


def format_imdb_id(number: int) -> str:
    """``1122334`` -> ``"tt1122334"`` (at least seven digits)."""
    return f"{IMDB_ID_PREFIX}{number:07d}"


def expected_catalog_types(season: int | None) -> tuple[str, ...]:
    """Catalog entry types acceptable for a file with *season*."""
    if season:
        return ("show", "episode")
    return ("movie",)


def title_query_type(season: int | None) -> str:
    """Type hint sent with a title search."""
    return "show,episode" if season else "movie,show"


@dataclass
class ResolutionState:
    """Evidence gathered for one video while the steps run."""

    video: VideoInfo
    nfo_imdb_id: str | None = None
    hash_imdb_id: str | None = None
    catalog_imdb_id: str | None = None
    suggest_imdb_id: str | None = None
    trakt_id: str | None = None
    working_imdb_id: str = ""
    identity_source: IdentitySource | None = None
    outcomes: dict[str, LookupOutcome] = field(default_factory=dict)

    def adopt(self, imdb_id: str, source: IdentitySource) -> bool:
        """Set the working ID unless one is already set."""
        if self.working_imdb_id or not imdb_id:
            return False
        self.working_imdb_id = imdb_id
        self.identity_source = source
        return True

    def to_video_info(self) -> VideoInfo:
        return dataclasses.replace(
            self.video,
            nfo_imdb_id=self.nfo_imdb_id,
            hash_imdb_id=self.hash_imdb_id,
            catalog_imdb_id=self.catalog_imdb_id,
            suggest_imdb_id=self.suggest_imdb_id,
            trakt_id=self.trakt_id,
            resolved_imdb_id=self.working_imdb_id,
            identity_source=self.identity_source,
        )


Step = Callable[[ResolutionState], Awaitable[None]]


class IdentityResolver:
    """Build ``VideoInfo``/``SubtitleInfo`` records and resolve IMDb IDs.

    Each provider port is optional; a missing port turns its step into a
    no-op. The resolver holds no per-run state, so one instance may serve
    many concurrent ``resolve`` calls.
    """

    def __init__(
        self,
        *,
        features: FeatureSearchPort | None = None,
        catalog: CrossReferenceSearchPort | None = None,
        suggestions: SuggestionSearchPort | None = None,
        languages: LanguageTable | None = None,
    ) -> None:
        self._features = features
        self._catalog = catalog
        self._suggestions = suggestions
        self._languages = languages if languages is not None else default_language_table()

    @property
    def languages(self) -> LanguageTable:
        return self._languages

    @property
    def steps(self) -> Sequence[Step]:
        """The evidence steps, in precedence order."""
        return (
            self.apply_nfo_hint,
            self.apply_hash_lookup,
            self.apply_cross_reference,
            self.apply_suggestions,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def resolve(
        self,
        video_path: str | Path | None,
        subtitle_path: str | Path | None,
    ) -> tuple[VideoInfo | None, SubtitleInfo | None]:
        """Resolve one pair. Either path may be None.

        Raises:
            OSError: a primary file cannot be stat'ed or read.
            asyncio.CancelledError: the caller cancelled the run.
        """
        subtitle = (
            await self.build_subtitle_info(subtitle_path)
            if subtitle_path is not None
            else None
        )
        video = (
            await self.resolve_video(video_path) if video_path is not None else None
        )
        return video, subtitle

    async def resolve_video(self, video_path: str | Path) -> VideoInfo:
        """Build the video record and run every evidence step on it."""
        state = ResolutionState(video=await self.build_video_info(video_path))
        for step in self.steps:
            await step(state)

        video = state.to_video_info()
        log.info(
            "identity_resolved",
            file_name=video.file_name,
            imdb_id=video.resolved_imdb_id or None,
            source=video.identity_source.value if video.identity_source else None,
            trakt_id=video.trakt_id,
        )
        return video

    async def build_video_info(self, video_path: str | Path) -> VideoInfo:
        """Stat, parse and fingerprint a video file (no provider calls)."""
        path = Path(video_path)
        size = (await asyncio.to_thread(os.stat, path)).st_size
        release = parse_release(path.name)

        try:
            fingerprint: str | None = await asyncio.to_thread(osdb_fingerprint, path)
        except FileTooSmallError:
            log.debug("fingerprint_skipped_small_file", path=str(path), size=size)
            fingerprint = None

        return _video_from_release(path, size, fingerprint, release)

    async def build_subtitle_info(self, subtitle_path: str | Path) -> SubtitleInfo:
        """Stat, checksum and classify a subtitle file."""
        path = Path(subtitle_path)
        size = (await asyncio.to_thread(os.stat, path)).st_size
        checksum = await asyncio.to_thread(file_checksum, path)
        flags = detect_flags(path.name)
        return SubtitleInfo(
            file_path=str(path),
            file_name=path.name,
            file_size=size,
            checksum=checksum,
            language=detect_language(path.name, self._languages),
            format=path.suffix.lower().lstrip("."),
            hearing_impaired=flags.hearing_impaired,
            forced=flags.forced,
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def apply_nfo_hint(self, state: ResolutionState) -> None:
        """Adopt the sidecar NFO's IMDb ID."""
        imdb_id = await asyncio.to_thread(find_nfo_imdb_id, state.video.file_path)
        if not imdb_id:
            return
        state.nfo_imdb_id = imdb_id
        state.adopt(imdb_id, IdentitySource.NFO)

    async def apply_hash_lookup(self, state: ResolutionState) -> None:
        """Search the feature catalog by fingerprint when nothing is known yet."""
        if self._features is None or state.working_imdb_id or not state.video.fingerprint:
            return

        outcome = await self._guarded(
            "hash_lookup", state, self._lookup_hash(state.video.fingerprint)
        )
        if outcome.is_found and outcome.value:
            state.hash_imdb_id = outcome.value
            state.adopt(outcome.value, IdentitySource.HASH)

    async def apply_cross_reference(self, state: ResolutionState) -> None:
        """Attach a Trakt ID, and adopt its IMDb ID if none is known yet."""
        if self._catalog is None:
            return

        if state.working_imdb_id:
            outcome = await self._guarded(
                "cross_reference_by_id",
                state,
                self._lookup_catalog_by_id(state.working_imdb_id, state.video.season),
            )
        elif state.video.title:
            outcome = await self._guarded(
                "cross_reference_by_title",
                state,
                self._lookup_catalog_by_title(state.video),
            )
        else:
            return

        if not outcome.is_found or outcome.value is None:
            return

        entry = outcome.value
        trakt_id = entry.ids.get("trakt")
        if trakt_id:
            state.trakt_id = trakt_id
        imdb_id = entry.ids.get("imdb")
        if imdb_id:
            state.catalog_imdb_id = imdb_id
            state.adopt(imdb_id, IdentitySource.CATALOG)

    async def apply_suggestions(self, state: ResolutionState) -> None:
        """Fall back to title suggestions when every other source came up empty."""
        if self._suggestions is None or state.working_imdb_id or not state.video.title:
            return

        outcome = await self._guarded(
            "suggestion_search",
            state,
            self._lookup_suggestion(state.video.title, state.video.year),
        )
        if outcome.is_found and outcome.value:
            state.suggest_imdb_id = outcome.value
            state.adopt(outcome.value, IdentitySource.SUGGESTION)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _guarded(
        self,
        step: str,
        state: ResolutionState,
        call: Awaitable[LookupOutcome[T]],
    ) -> LookupOutcome[T]:
        """Await *call*, turning provider failures into ``FAILED`` outcomes.

        ``asyncio.CancelledError`` is a ``BaseException`` and passes through.
        """
        try:
            outcome = await call
        except Exception as exc:
            log.warning(
                "identity_lookup_failed",
                step=step,
                file_name=state.video.file_name,
                error=str(exc),
                exc_info=True,
            )
            outcome = LookupOutcome.failed(str(exc))
        else:
            if outcome.status is LookupStatus.NO_MATCH:
                log.debug("identity_lookup_no_match", step=step, file_name=state.video.file_name)
        state.outcomes[step] = outcome
        return outcome

    async def _lookup_hash(self, fingerprint: str) -> LookupOutcome[str]:
        assert self._features is not None
        features = await self._features.search_features({"hash": fingerprint})
        for feature in features:
            if feature.imdb_id:
                return LookupOutcome.found(format_imdb_id(feature.imdb_id))
        return LookupOutcome.no_match()

    async def _lookup_catalog_by_id(
        self, imdb_id: str, season: int | None
    ) -> LookupOutcome[CatalogEntry]:
        assert self._catalog is not None
        entries = await self._catalog.search_catalog("imdb", imdb_id)
        wanted = expected_catalog_types(season)
        for entry in entries:
            if entry.type in wanted:
                return LookupOutcome.found(entry)
        return LookupOutcome.no_match()

    async def _lookup_catalog_by_title(
        self, video: VideoInfo
    ) -> LookupOutcome[CatalogEntry]:
        assert self._catalog is not None
        query = f"{video.title} {video.year}" if video.year else video.title
        entries = await self._catalog.search_catalog(
            title_query_type(video.season), query
        )
        wanted = expected_catalog_types(video.season)
        for entry in entries:
            if entry.type not in wanted:
                continue
            if video.year is None or entry.year is None or entry.year == video.year:
                return LookupOutcome.found(entry)
        return LookupOutcome.no_match()

    async def _lookup_suggestion(
        self, title: str, year: int | None
    ) -> LookupOutcome[str]:
        assert self._suggestions is not None
        candidates = await self._suggestions.search_suggestions(title)

        best_id = ""
        best_score = -1
        for candidate in candidates:
            if not candidate.id:
                continue
            score = 0
            if year is not None and candidate.year == year:
                score += 1
            if candidate.id.startswith(IMDB_ID_PREFIX):
                score += 1
            if score > best_score:
                best_score = score
                best_id = candidate.id

        if not best_id:
            return LookupOutcome.no_match()
        return LookupOutcome.found(best_id)


def _video_from_release(
    path: Path, size: int, fingerprint: str | None, release: ReleaseInfo
) -> VideoInfo:
    return VideoInfo(
        file_path=str(path),
        file_name=path.name,
        file_size=size,
        fingerprint=fingerprint,
        title=release.title,
        year=release.year,
        season=release.season,
        episode=release.episode,
        resolution=release.resolution,
        source=release.source,
        release_group=release.release_group,
    )
