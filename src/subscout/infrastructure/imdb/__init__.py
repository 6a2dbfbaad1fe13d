"""IMDb suggestion API adapter."""

from __future__ import annotations

from .suggest import ImdbSuggestClient

__all__ = ["ImdbSuggestClient"]
