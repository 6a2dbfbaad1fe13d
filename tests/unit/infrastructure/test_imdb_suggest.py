"""Tests for ImdbSuggestClient (IMDb Suggest API adapter)."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest
import respx

from subscout.domain.entities.media import Suggestion
from subscout.domain.exceptions import ProviderError
from subscout.infrastructure.imdb.suggest import ImdbSuggestClient

_BASE = "https://v2.sg.media-imdb.com"

_SUGGEST_RESPONSE = {
    "d": [
        {"id": "tt1375666", "l": "Inception", "y": 2010, "q": "feature"},
        {"id": "tt0903747", "l": "Breaking Bad", "yr": "2008-2013"},
        {"id": "nm0634240", "l": "Christopher Nolan"},
        {"id": "tt0000001"},
        {"l": "No ID"},
    ]
}


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


@pytest.fixture()
def client(http_client: httpx.AsyncClient, cache: AsyncMock) -> ImdbSuggestClient:
    return ImdbSuggestClient(http_client=http_client, cache=cache)


class TestSearchSuggestions:
    @respx.mock
    @pytest.mark.asyncio()
    async def test_parses_entries(self, client: ImdbSuggestClient, cache: AsyncMock) -> None:
        respx.get(f"{_BASE}/suggestion/i/inception.json").respond(json=_SUGGEST_RESPONSE)

        result = await client.search_suggestions("Inception")

        assert result == [
            Suggestion(id="tt1375666", title="Inception", year=2010),
            Suggestion(id="tt0903747", title="Breaking Bad", year=2008),
            Suggestion(id="nm0634240", title="Christopher Nolan", year=None),
        ]
        cache.set.assert_awaited_once()
        assert cache.set.call_args[0][0] == "imdb:search:inception"

    @respx.mock
    @pytest.mark.asyncio()
    async def test_non_alnum_first_letter(self, client: ImdbSuggestClient) -> None:
        route = respx.get(f"{_BASE}/suggestion/a/%2Arated.json").respond(json={"d": []})

        assert await client.search_suggestions("*Rated") == []
        assert route.called

    @respx.mock
    @pytest.mark.asyncio()
    async def test_query_is_url_encoded(self, client: ImdbSuggestClient) -> None:
        route = respx.get(f"{_BASE}/suggestion/m/my%20movie.json").respond(json={})

        assert await client.search_suggestions("My Movie") == []
        assert route.called

    @pytest.mark.asyncio()
    async def test_blank_query(self, client: ImdbSuggestClient, cache: AsyncMock) -> None:
        assert await client.search_suggestions("  ") == []
        cache.get.assert_not_awaited()

    @respx.mock
    @pytest.mark.asyncio()
    async def test_cache_hit_skips_request(
        self, client: ImdbSuggestClient, cache: AsyncMock
    ) -> None:
        cache.get.return_value = [{"id": "tt1", "l": "Cached", "y": 1999}]
        route = respx.get(f"{_BASE}/suggestion/c/cached.json")

        result = await client.search_suggestions("cached")

        assert result == [Suggestion(id="tt1", title="Cached", year=1999)]
        assert not route.called

    @respx.mock
    @pytest.mark.asyncio()
    async def test_error_propagates(self, client: ImdbSuggestClient) -> None:
        respx.get(f"{_BASE}/suggestion/x/x.json").respond(status_code=500)
        with pytest.raises(ProviderError):
            await client.search_suggestions("x")
