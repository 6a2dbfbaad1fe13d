"""Trakt search client: cross-reference IDs for movies, shows and episodes."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from subscout.domain.entities.media import CatalogEntry
from subscout.domain.ports.cache import CachePort
from subscout.infrastructure.common.converters import to_year
from subscout.infrastructure.common.http import get_json

log = structlog.get_logger(__name__)

PROVIDER = "trakt"
DEFAULT_BASE_URL = "https://api.trakt.tv"
API_VERSION = "2"

ID_TYPES = frozenset({"imdb", "tmdb", "tvdb", "trakt"})

_TTL_ID_LOOKUP = 86_400  # 24 hours
_TTL_TEXT_SEARCH = 3_600  # 1 hour


def _ids_to_strings(ids: Any) -> dict[str, str]:
    """``{"trakt": 1, "imdb": "tt..", "tmdb": 0}`` -> non-empty string values."""
    if not isinstance(ids, dict):
        return {}
    out: dict[str, str] = {}
    for key, value in ids.items():
        if value in (None, "", 0) or isinstance(value, bool):
            continue
        out[str(key)] = str(value)
    return out


def _entry_from_item(item: dict[str, Any]) -> CatalogEntry | None:
    """Map one Trakt search item to a ``CatalogEntry``; None for persons/lists."""
    kind = item.get("type")
    if kind in ("movie", "show"):
        media = item.get(kind)
        if not isinstance(media, dict) or not media.get("title"):
            return None
        return CatalogEntry(
            type=kind,
            title=media["title"],
            year=to_year(media.get("year")),
            ids=_ids_to_strings(media.get("ids")),
        )
    if kind == "episode":
        episode = item.get("episode")
        show = item.get("show")
        if not isinstance(episode, dict) or not isinstance(show, dict):
            return None
        show_year = to_year(show.get("year"))
        title = (
            f"{show.get('title', '')} ({show_year or 0}) - "
            f"{episode.get('season', 0)}x{episode.get('number', 0)} - "
            f"{episode.get('title') or ''}"
        )
        return CatalogEntry(
            type="episode",
            title=title,
            year=show_year,
            ids=_ids_to_strings(episode.get("ids")),
        )
    return None


class HttpxTraktClient:
    """Async Trakt client using httpx + an optional CachePort.

    Implements ``CrossReferenceSearchPort``. ``query_type`` is either an
    ID type (``imdb``, ``tmdb``, ``tvdb``, ``trakt``) for an ID lookup or
    a comma-joined type list such as ``"movie,show"`` for a text search.
    """

    def __init__(
        self,
        *,
        client_id: str,
        http_client: httpx.AsyncClient,
        cache: CachePort | None = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._client_id = client_id
        self._http = http_client
        self._cache = cache
        self._base_url = base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "trakt-api-version": API_VERSION,
            "trakt-api-key": self._client_id,
        }

    async def search_catalog(self, query_type: str, query: str) -> list[CatalogEntry]:
        """Search Trakt; returns movie/show/episode entries in API order."""
        query = query.strip()
        if not query:
            return []

        is_id_lookup = query_type in ID_TYPES
        cache_key = f"trakt:search:{query_type}:{query.lower()}"
        if self._cache is not None:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return [CatalogEntry(**entry) for entry in cached]

        if is_id_lookup:
            url = f"{self._base_url}/search/{query_type}/{quote(query, safe='')}"
            params = None
        else:
            url = f"{self._base_url}/search/{quote(query_type, safe=',')}"
            params = {"query": query}

        data = await get_json(
            self._http, url, provider=PROVIDER, params=params, headers=self._headers()
        )
        items = data if isinstance(data, list) else []
        entries = [
            entry
            for entry in (_entry_from_item(i) for i in items if isinstance(i, dict))
            if entry is not None
        ]
        log.debug(
            "trakt_search_results",
            query_type=query_type,
            query=query,
            count=len(entries),
        )

        if self._cache is not None and entries:
            await self._cache.set(
                cache_key,
                [
                    {"type": e.type, "title": e.title, "year": e.year, "ids": dict(e.ids)}
                    for e in entries
                ],
                ttl=_TTL_ID_LOOKUP if is_id_lookup else _TTL_TEXT_SEARCH,
            )
        return entries
