"""Cache adapters."""

from .cache_factory import CacheBackend, create_cache
from .diskcache_adapter import DiskcacheAdapter
from .null_cache import NullCache

__all__ = [
    "CacheBackend",
    "DiskcacheAdapter",
    "NullCache",
    "create_cache",
]
