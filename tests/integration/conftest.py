"""Shared fixtures for integration tests.

These tests use real infrastructure components (DiskcacheAdapter, the
provider clients, load_config) with mocked HTTP via respx.
"""

from __future__ import annotations

import os
from pathlib import Path

import httpx
import pytest
import respx

from subscout.infrastructure.cache.diskcache_adapter import DiskcacheAdapter


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking."""
    return httpx.AsyncClient()


@pytest.fixture()
async def diskcache(tmp_path: Path) -> DiskcacheAdapter:
    """Real DiskcacheAdapter backed by tmp_path (auto-cleaned)."""
    adapter = DiskcacheAdapter(
        directory=tmp_path / "cache",
        ttl_seconds=3600,
        max_concurrent=5,
    )
    async with adapter:
        yield adapter


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove any SUBSCOUT_* variables inherited from the shell."""
    for name in list(os.environ):
        if name.startswith("SUBSCOUT_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch
