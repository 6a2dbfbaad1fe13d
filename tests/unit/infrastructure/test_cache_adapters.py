"""Tests for the cache factory and the no-op cache."""

from __future__ import annotations

from pathlib import Path

import pytest

from subscout.infrastructure.cache import DiskcacheAdapter, NullCache, create_cache


class TestCreateCache:
    def test_diskcache_backend(self, tmp_path: Path) -> None:
        cache = create_cache("diskcache", directory=tmp_path / "c", ttl_seconds=60)
        assert isinstance(cache, DiskcacheAdapter)
        assert cache.directory == tmp_path / "c"
        assert cache.default_ttl == 60
        assert not cache.is_open
        assert not (tmp_path / "c").exists()

    def test_null_backend(self) -> None:
        assert isinstance(create_cache("null"), NullCache)

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown cache backend"):
            create_cache("redis")  # type: ignore[arg-type]


class TestNullCache:
    @pytest.mark.asyncio()
    async def test_stores_nothing(self) -> None:
        async with NullCache() as cache:
            await cache.set("k", "v", ttl=10)
            assert await cache.get("k") is None
            assert await cache.delete("k") is False
            await cache.clear()


class TestDiskcacheAdapterClosed:
    @pytest.mark.asyncio()
    async def test_get_requires_open_cache(self, tmp_path: Path) -> None:
        cache = DiskcacheAdapter(directory=tmp_path)
        with pytest.raises(RuntimeError, match="not open"):
            await cache.get("k")

    @pytest.mark.asyncio()
    async def test_delete_and_exists_on_closed_cache(self, tmp_path: Path) -> None:
        cache = DiskcacheAdapter(directory=tmp_path)
        assert await cache.delete("k") is False
        assert await cache.exists("k") is False
