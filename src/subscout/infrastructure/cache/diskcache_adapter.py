"""Diskcache adapter: persistent provider-response cache in a local SQLite file."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import structlog
from diskcache import Cache as DiskCache

log = structlog.get_logger(__name__)


class DiskcacheAdapter:
    """Async wrapper for the synchronous ``diskcache.Cache``.

    Disk I/O runs in ``asyncio.to_thread``; a semaphore bounds the number
    of concurrent SQLite operations. The cache opens lazily on
    ``__aenter__`` and must be open before ``get``/``set`` are used.

    Args:
        directory: Cache directory (created by diskcache on open).
        ttl_seconds: Default TTL for ``set()`` without an explicit value.
        max_concurrent: Max parallel disk operations.
    """

    def __init__(
        self,
        directory: str | Path,
        ttl_seconds: int = 86_400,
        max_concurrent: int = 8,
    ) -> None:
        self.directory = Path(directory)
        self.default_ttl = ttl_seconds
        self._cache: DiskCache | None = None
        self._semaphore = asyncio.Semaphore(max_concurrent)

    @property
    def is_open(self) -> bool:
        return self._cache is not None

    def _require(self) -> DiskCache:
        if self._cache is None:
            raise RuntimeError(
                "cache is not open; use 'async with cache:' before get/set"
            )
        return self._cache

    async def __aenter__(self) -> DiskcacheAdapter:
        if self._cache is None:
            self._cache = await asyncio.to_thread(DiskCache, str(self.directory))
            log.debug("diskcache_opened", directory=str(self.directory))
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._cache is not None:
            cache, self._cache = self._cache, None
            await asyncio.to_thread(cache.close)
            log.debug("diskcache_closed", directory=str(self.directory))

    async def get(self, key: str) -> Any:
        cache = self._require()
        async with self._semaphore:
            value = await asyncio.to_thread(cache.get, key, None)
        log.debug("cache_get", key=key, hit=value is not None)
        return value

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        cache = self._require()
        expire = ttl if ttl is not None else self.default_ttl
        async with self._semaphore:
            await asyncio.to_thread(cache.set, key, value, expire=expire)
        log.debug("cache_set", key=key, ttl=expire)

    async def delete(self, key: str) -> bool:
        if self._cache is None:
            return False
        cache = self._cache
        async with self._semaphore:
            return bool(await asyncio.to_thread(cache.delete, key))

    async def exists(self, key: str) -> bool:
        if self._cache is None:
            return False
        cache = self._cache
        async with self._semaphore:
            # Cache.__contains__ honours expiry.
            return await asyncio.to_thread(cache.__contains__, key)

    async def clear(self) -> None:
        if self._cache is None:
            return
        cache = self._cache
        async with self._semaphore:
            removed = await asyncio.to_thread(cache.clear)
        log.info("cache_cleared", directory=str(self.directory), removed=removed)
