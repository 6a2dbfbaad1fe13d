"""Cache port used by the provider clients for lookup results."""

from __future__ import annotations

from typing import Any, Protocol


class CachePort(Protocol):
    """Async key/value store with per-entry TTL.

    Provider clients store decoded lookup results under keys such as
    ``trakt:search:imdb:tt1375666``; values must be picklable plain data.
    Adapters: ``DiskcacheAdapter`` (local SQLite) and ``NullCache``
    (caching disabled). Adapters are opened with ``async with``.
    """

    async def get(self, key: str) -> Any:
        """Stored value, or None when missing or expired."""
        ...

    async def set(self, key: str, value: Any, *, ttl: int | None = None) -> None:
        """Store *value*; ``ttl`` in seconds, adapter default when None."""
        ...

    async def delete(self, key: str) -> bool:
        """True when an entry was removed."""
        ...

    async def clear(self) -> None:
        ...

    async def aclose(self) -> None:
        ...

    async def __aenter__(self) -> CachePort: ...

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None: ...
