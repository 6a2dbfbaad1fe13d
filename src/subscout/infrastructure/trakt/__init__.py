"""Trakt API adapter."""

from __future__ import annotations

from .client import HttpxTraktClient

__all__ = ["HttpxTraktClient"]
