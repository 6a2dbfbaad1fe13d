"""Cache factory: picks the adapter from configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import structlog

from subscout.domain.ports.cache import CachePort
from subscout.infrastructure.cache.diskcache_adapter import DiskcacheAdapter
from subscout.infrastructure.cache.null_cache import NullCache

log = structlog.get_logger(__name__)

CacheBackend = Literal["diskcache", "null"]


def create_cache(
    backend: CacheBackend = "diskcache",
    *,
    directory: str | Path = "./.cache/subscout",
    ttl_seconds: int = 86_400,
    max_concurrent: int = 8,
) -> CachePort:
    """Create a cache adapter for *backend*.

    Raises:
        ValueError: unknown backend.
    """
    if backend == "diskcache":
        log.debug(
            "cache_factory_create",
            backend=backend,
            directory=str(directory),
            ttl=ttl_seconds,
        )
        return DiskcacheAdapter(
            directory=directory,
            ttl_seconds=ttl_seconds,
            max_concurrent=max_concurrent,
        )
    if backend == "null":
        return NullCache()
    raise ValueError(f"Unknown cache backend: {backend!r}. Must be 'diskcache' or 'null'.")
