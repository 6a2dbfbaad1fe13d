"""IMDb Suggest API client: free title suggestions without an API key.

The endpoint is undocumented:
``https://v2.sg.media-imdb.com/suggestion/{first_letter}/{query}.json``
returns ``{"d": [{"id": "tt..", "l": "Title", "y": 2010, ...}]}``.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from subscout.domain.entities.media import Suggestion
from subscout.domain.ports.cache import CachePort
from subscout.infrastructure.common.converters import to_year
from subscout.infrastructure.common.http import get_json

log = structlog.get_logger(__name__)

PROVIDER = "imdb"
DEFAULT_BASE_URL = "https://v2.sg.media-imdb.com"

_TTL_SEARCH = 3_600  # 1 hour


def _entry_year(entry: dict[str, Any]) -> int | None:
    """Year from ``y``, else the start of the ``yr`` range (``"2010-2014"``)."""
    return to_year(entry.get("y")) or to_year(entry.get("yr"))


class ImdbSuggestClient:
    """Title suggestions from the IMDb Suggest API.

    Implements ``SuggestionSearchPort``. Entries without an ID or a label
    are dropped; everything else is returned in API order.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        cache: CachePort | None = None,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._http = http_client
        self._cache = cache
        self._base_url = base_url.rstrip("/")

    def _url(self, clean_query: str) -> str:
        letter = clean_query[0] if clean_query[0].isalnum() else "a"
        return f"{self._base_url}/suggestion/{letter}/{quote(clean_query, safe='')}.json"

    @staticmethod
    def _entries_to_suggestions(entries: list[Any]) -> list[Suggestion]:
        suggestions: list[Suggestion] = []
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            imdb_id = entry.get("id") or ""
            title = entry.get("l") or ""
            if not imdb_id or not title:
                continue
            suggestions.append(
                Suggestion(id=str(imdb_id), title=str(title), year=_entry_year(entry))
            )
        return suggestions

    async def search_suggestions(self, query: str) -> list[Suggestion]:
        """Return suggestions for *query*; empty for a blank query."""
        clean = query.strip().lower()
        if not clean:
            return []

        cache_key = f"imdb:search:{clean}"
        if self._cache is not None:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return self._entries_to_suggestions(cached)

        data = await get_json(
            self._http,
            self._url(clean),
            provider=PROVIDER,
            headers={"Accept": "application/json"},
        )
        entries = data.get("d", []) if isinstance(data, dict) else []
        if not isinstance(entries, list):
            entries = []

        if self._cache is not None and entries:
            await self._cache.set(cache_key, entries, ttl=_TTL_SEARCH)

        suggestions = self._entries_to_suggestions(entries)
        log.debug("imdb_suggestions_found", query=clean, count=len(suggestions))
        return suggestions
