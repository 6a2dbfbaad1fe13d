"""Shared test fixtures for the subscout test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from subscout.infrastructure.media.hashing import MIN_FINGERPRINT_SIZE

# ---------------------------------------------------------------------------
# File fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a file below ``tmp_path``.

    ``size`` creates a zero-filled file of that many bytes; ``content``
    writes the given bytes/text instead.
    """

    def _make(
        name: str,
        *,
        size: int | None = None,
        content: bytes | str | None = None,
    ) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if content is not None:
            data = content.encode("utf-8") if isinstance(content, str) else content
            path.write_bytes(data)
        else:
            with path.open("wb") as fh:
                fh.truncate(size or 0)
        return path

    return _make


@pytest.fixture()
def make_video(make_file: Callable[..., Path]) -> Callable[..., Path]:
    """Factory for a video large enough to be fingerprinted."""

    def _make(name: str, *, size: int = MIN_FINGERPRINT_SIZE) -> Path:
        return make_file(name, size=size)

    return _make


# ---------------------------------------------------------------------------
# Port doubles
# ---------------------------------------------------------------------------


@pytest.fixture()
def features() -> AsyncMock:
    mock = AsyncMock()
    mock.search_features.return_value = []
    return mock


@pytest.fixture()
def catalog() -> AsyncMock:
    mock = AsyncMock()
    mock.search_catalog.return_value = []
    return mock


@pytest.fixture()
def suggestions() -> AsyncMock:
    mock = AsyncMock()
    mock.search_suggestions.return_value = []
    return mock


@pytest.fixture()
def cache() -> AsyncMock:
    mock = AsyncMock()
    mock.get.return_value = None  # default: cache miss
    return mock
