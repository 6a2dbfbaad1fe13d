"""Ports for the three external identity lookups."""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

from subscout.domain.entities.media import CatalogEntry, FeatureMatch, Suggestion


@runtime_checkable
class FeatureSearchPort(Protocol):
    """Hash-indexed feature catalog (OpenSubtitles ``/features``)."""

    async def search_features(self, params: Mapping[str, str]) -> list[FeatureMatch]:
        """Search features by ``hash`` or free-text/ID keys.

        Returns an empty list when nothing matches.
        Raises ``ProviderError`` on transport or protocol failure.
        """
        ...


@runtime_checkable
class CrossReferenceSearchPort(Protocol):
    """Secondary catalog used for cross-reference IDs (Trakt)."""

    async def search_catalog(self, query_type: str, query: str) -> list[CatalogEntry]:
        """Search by ID (``query_type="imdb"``) or by title.

        For title search *query_type* is a comma-joined type hint such as
        ``"movie,show"`` or ``"show,episode"``.
        """
        ...


@runtime_checkable
class SuggestionSearchPort(Protocol):
    """Free-text title suggestions (IMDb suggest)."""

    async def search_suggestions(self, query: str) -> list[Suggestion]:
        """Return suggestion candidates for *query* (may be empty)."""
        ...
