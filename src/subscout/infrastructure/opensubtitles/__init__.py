"""OpenSubtitles REST API adapter."""

from __future__ import annotations

from .client import HttpxOpenSubtitlesClient

__all__ = ["HttpxOpenSubtitlesClient"]
