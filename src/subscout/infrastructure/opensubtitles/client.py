"""OpenSubtitles REST client: feature search by ID, text or movie hash."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Mapping

import httpx
import structlog

from subscout.domain.entities.media import FeatureMatch
from subscout.domain.ports.cache import CachePort
from subscout.infrastructure.common.converters import to_int, to_year
from subscout.infrastructure.common.http import get_json

log = structlog.get_logger(__name__)

PROVIDER = "opensubtitles"
DEFAULT_BASE_URL = "https://api.opensubtitles.com/api/v1"

_TTL_FEATURES = 86_400  # 24 hours

# Parameters accepted by GET /features.
_FEATURE_PARAMS = frozenset(
    {"feature_id", "imdb_id", "tmdb_id", "query", "query_match", "full_search", "type", "year"}
)


class HttpxOpenSubtitlesClient:
    """Async OpenSubtitles client using httpx + an optional CachePort.

    Implements ``FeatureSearchPort``. A ``hash`` parameter is answered
    from ``GET /subtitles?moviehash=...`` (the endpoint that indexes
    hashes) by collecting the features the matching subtitles belong to;
    every other parameter set goes to ``GET /features``.
    """

    def __init__(
        self,
        *,
        api_key: str,
        user_agent: str,
        http_client: httpx.AsyncClient,
        cache: CachePort | None = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._api_key = api_key
        self._user_agent = user_agent
        self._http = http_client
        self._cache = cache
        self._base_url = base_url.rstrip("/")

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {
            "Api-Key": self._api_key,
            "User-Agent": self._user_agent,
            "Accept": "application/json",
        }

    async def _get(self, path: str, params: Mapping[str, str]) -> dict[str, Any]:
        data = await get_json(
            self._http,
            f"{self._base_url}{path}",
            provider=PROVIDER,
            params=dict(params),
            headers=self._headers(),
        )
        if not isinstance(data, dict):
            return {}
        return data

    @staticmethod
    def _feature_from_attributes(attrs: dict[str, Any]) -> FeatureMatch | None:
        feature_id = attrs.get("feature_id")
        if feature_id in (None, ""):
            return None
        return FeatureMatch(
            feature_id=str(feature_id),
            imdb_id=to_int(attrs.get("imdb_id")) or 0,
            title=attrs.get("title") or attrs.get("movie_name") or "",
            year=to_year(attrs.get("year")),
            feature_type=attrs.get("feature_type") or "",
            tmdb_id=to_int(attrs.get("tmdb_id")),
            season=to_int(attrs.get("season_number")),
            episode=to_int(attrs.get("episode_number")),
        )

    def _parse_features(self, data: dict[str, Any]) -> list[FeatureMatch]:
        matches: list[FeatureMatch] = []
        for item in data.get("data") or []:
            attrs = item.get("attributes") if isinstance(item, dict) else None
            if not isinstance(attrs, dict):
                continue
            feature = self._feature_from_attributes(attrs)
            if feature is not None:
                matches.append(feature)
        return matches

    def _parse_hash_subtitles(self, data: dict[str, Any]) -> list[FeatureMatch]:
        """Distinct features behind hash-matched subtitles, exact matches first."""
        exact: list[FeatureMatch] = []
        loose: list[FeatureMatch] = []
        seen: set[str] = set()
        for item in data.get("data") or []:
            attrs = item.get("attributes") if isinstance(item, dict) else None
            if not isinstance(attrs, dict):
                continue
            details = attrs.get("feature_details")
            if not isinstance(details, dict):
                continue
            feature = self._feature_from_attributes(details)
            if feature is None or feature.feature_id in seen:
                continue
            seen.add(feature.feature_id)
            if attrs.get("moviehash_match"):
                exact.append(feature)
            else:
                loose.append(feature)
        return exact + loose

    # ------------------------------------------------------------------
    # Public API (FeatureSearchPort)
    # ------------------------------------------------------------------

    async def search_features(self, params: Mapping[str, str]) -> list[FeatureMatch]:
        """Search features. ``{"hash": <osdb hash>}`` triggers a hash search."""
        cache_key = "opensubtitles:features:" + "&".join(
            f"{k}={v}" for k, v in sorted(params.items())
        )
        if self._cache is not None:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return [FeatureMatch(**entry) for entry in cached]

        movie_hash = params.get("hash")
        if movie_hash:
            data = await self._get("/subtitles", {"moviehash": movie_hash})
            features = self._parse_hash_subtitles(data)
        else:
            query = {k: v for k, v in params.items() if k in _FEATURE_PARAMS}
            data = await self._get("/features", query)
            features = self._parse_features(data)

        log.debug(
            "opensubtitles_features_found",
            by_hash=bool(movie_hash),
            count=len(features),
        )
        if self._cache is not None and features:
            await self._cache.set(
                cache_key,
                [asdict(f) for f in features],
                ttl=_TTL_FEATURES,
            )
        return features

